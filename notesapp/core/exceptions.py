"""
Custom Exceptions

Centralized exception definitions for better error handling.
The handlers in main.py render every one of these as {"error": detail}.

SECURITY: Messages are fixed strings. NotFound errors never include the
requested identifier, so a cross-tenant lookup reads exactly like a
lookup of something that does not exist.
"""
from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    """Raised when authentication fails."""

    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NoTokenError(AuthenticationError):
    """No bearer token on the request."""

    def __init__(self):
        super().__init__("No token provided")


class InvalidTokenError(AuthenticationError):
    """Token failed verification: malformed, tampered, or expired."""

    def __init__(self):
        super().__init__("Invalid token")


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password. Deliberately one error for both."""

    def __init__(self):
        super().__init__("Invalid credentials")


class TenantNotFoundError(HTTPException):
    """Raised when tenant cannot be found."""

    def __init__(self):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tenant not found"
        )


class UserNotFoundError(HTTPException):
    """Raised when user cannot be found."""

    def __init__(self):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )


class NoteNotFoundError(HTTPException):
    """Raised when a note does not exist or belongs to another tenant."""

    def __init__(self):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Note not found"
        )


class QuotaExceededError(HTTPException):
    """Raised when a free-plan tenant is at its note limit."""

    def __init__(self, detail: str = "Free plan limit reached. Upgrade to Pro for unlimited notes."):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


class InvalidInputError(HTTPException):
    """Raised when input validation fails."""

    def __init__(self, detail: str = "Invalid input"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )
