"""
Permission System (RBAC)

Two roles, Admin and Member, as a closed enum. Checks are written as
exhaustive matches over UserRole so adding a role forces a decision here.
"""
from fastapi import HTTPException, status

from notesapp.core.context import IdentityContext
from notesapp.models.user import UserRole


class PermissionDenied(HTTPException):
    """Custom exception for permission denied errors."""

    def __init__(self, detail: str = "Permission denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


def can_change_plan(role: UserRole) -> bool:
    """Only admins may change their tenant's plan."""
    if role is UserRole.ADMIN:
        return True
    if role is UserRole.MEMBER:
        return False
    raise ValueError(f"Unhandled role: {role!r}")


def require_plan_admin(ctx: IdentityContext) -> None:
    """Raise PermissionDenied unless the caller may change the tenant plan."""
    if not can_change_plan(ctx.role):
        raise PermissionDenied(detail="Only admins can upgrade tenants")
