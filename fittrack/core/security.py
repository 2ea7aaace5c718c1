from passlib.context import CryptContext
from fittrack.core.config import settings

# CryptContext handles password hashing using bcrypt
# Rounds come from settings so tests can run with a cheap cost factor
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__default_rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    # bcrypt generates a fresh salt per call and embeds it in the hash
    return pwd_context.hash(password)
