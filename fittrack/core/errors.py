"""
Domain errors raised by the record services.

Each error is an HTTPException so route handlers can let it propagate;
the handlers registered in main.py render it as {"error": <message>}.
"""

from fastapi import HTTPException, status


class FitTrackError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        super().__init__(status_code=self.status_code, detail=message or self.default_message)

    @property
    def message(self) -> str:
        return self.detail


class MissingField(FitTrackError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required fields"


class MissingCredentials(FitTrackError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing credentials"


class InvalidDomain(FitTrackError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Registration is restricted to @gmail.com addresses only."


class WeakPassword(FitTrackError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Password must be at least 8 characters long."


class InvalidValue(FitTrackError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid value"


class DuplicateAccount(FitTrackError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Account already exists."


class InvalidCredentials(FitTrackError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class UserNotFound(FitTrackError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class NotFound(FitTrackError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(FitTrackError):
    pass


class StoreCorrupted(InternalError):
    default_message = "Database file is corrupt or unreadable"
