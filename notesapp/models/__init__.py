"""
Database Models

Every tenant-owned table carries tenant_id for multi-tenant isolation.
"""
from notesapp.models.tenant import Tenant, TenantPlan
from notesapp.models.user import User, UserRole
from notesapp.models.note import Note

__all__ = ["Tenant", "TenantPlan", "User", "UserRole", "Note"]
