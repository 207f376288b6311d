from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status


class AppError(HTTPException):
    """HTTPException carrying the `{error, message?, fields?}` response body."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal server error"

    def __init__(
        self,
        error: Optional[str] = None,
        message: Optional[str] = None,
        fields: Optional[List[str]] = None,
        headers: Optional[Dict[str, str]] = None,
        **extra: Any,
    ):
        self.error = error or self.error
        self.message = message
        self.fields = fields
        self.extra = extra
        super().__init__(status_code=self.status_code, detail=self.payload(), headers=headers)

    def payload(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        if self.fields:
            body["fields"] = self.fields
        body.update(self.extra)
        return body


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation error"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Not authenticated"

    def __init__(self, error: Optional[str] = None, message: Optional[str] = None):
        super().__init__(error, message, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Not authorized"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"


class ConflictError(AppError):
    # Duplicate accounts have always been reported as 400.
    status_code = status.HTTP_400_BAD_REQUEST
    error = "User already exists"


class ServerMisconfigured(AppError):
    error = "Server configuration error"


class PersistenceError(AppError):
    error = "Database error"


class UnknownError(AppError):
    error = "Internal server error"


SETUP_INSTRUCTIONS = [
    "1. Make sure DATABASE_URL (or DB_USER, DB_PASSWORD, DB_HOST, DB_PORT, DB_NAME) is set in your .env file",
    "2. Start the API once so that init_db() creates the tables",
    "3. Then retry the request",
]


def missing_table(exc: Exception) -> bool:
    text = str(getattr(exc, "orig", exc)).lower()
    return "no such table" in text or "does not exist" in text


def unique_violation(exc: Exception) -> bool:
    orig = getattr(exc, "orig", exc)
    # 23505 is PostgreSQL's unique_violation SQLSTATE.
    if getattr(orig, "pgcode", None) == "23505":
        return True
    return "unique constraint" in str(orig).lower()
