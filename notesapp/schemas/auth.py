"""
Authentication Schemas

Request/response models for authentication endpoints.
"""
from pydantic import Field

from notesapp.models.user import UserRole
from notesapp.schemas.base import APIModel
from notesapp.schemas.tenant import TenantSummary


class LoginRequest(APIModel):
    """Login request body."""
    # Plain string: format is irrelevant, an unknown email is just a failed login
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)

    class Config:
        json_schema_extra = {
            "example": {
                "email": "admin@acme.test",
                "password": "password"
            }
        }


class UserSummary(APIModel):
    """Sanitized user with its tenant. Never includes the password hash."""
    id: str
    email: str
    role: UserRole
    tenant: TenantSummary


class LoginResponse(APIModel):
    token: str
    user: UserSummary


class CurrentUserResponse(APIModel):
    user: UserSummary
