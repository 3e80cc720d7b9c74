"""
Identity Context

The verified (user_id, tenant_id, role) of the caller, derived from the
bearer token. Services receive it as an explicit argument on every call;
it is the only source of tenant_id for data access.
"""
from dataclasses import dataclass

from notesapp.models.user import UserRole


@dataclass(frozen=True)
class IdentityContext:
    user_id: str
    tenant_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN
