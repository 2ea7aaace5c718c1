from pydantic_settings import BaseSettings
from typing import Optional, Union


class Settings(BaseSettings):
    # Server binding - PORT is what hosting platforms inject
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # JSON document holding both the users and workouts collections
    DATABASE_PATH: str = "./database.json"

    # When False, a corrupt database file raises instead of reading as empty
    # An empty read followed by a write would overwrite whatever was on disk
    STORE_FAIL_OPEN: bool = True

    # bcrypt cost factor - each increment doubles hashing time
    BCRYPT_ROUNDS: int = 10

    # CORS origins - "*" allows any frontend
    # Can be string (comma-separated) or list for flexibility
    CORS_ORIGINS: Union[str, list[str]] = "*"

    # Optional directory with the frontend (index.html, css, js)
    STATIC_DIR: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    def get_cors_origins(self) -> list[str]:
        """Parse CORS_ORIGINS string into list"""
        if isinstance(self.CORS_ORIGINS, str):
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
        return self.CORS_ORIGINS if isinstance(self.CORS_ORIGINS, list) else []

    class Config:
        # Load settings from .env file if it exists
        # Environment variables override defaults
        env_file = ".env"
        case_sensitive = True


settings = Settings()
