"""
Quota Policy

Decides whether a tenant may create another note.

The count is read fresh on every decision. Callers that need the decision
to hold until their insert commits must hold the tenant lock first
(see NoteRepository.create).
"""
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from notesapp.config import get_settings
from notesapp.models.note import Note
from notesapp.models.tenant import Tenant, TenantPlan

settings = get_settings()


class QuotaPolicy:
    """Plan-based note limits."""

    def __init__(self, free_plan_limit: int = None):
        self.free_plan_limit = (
            settings.FREE_PLAN_NOTE_LIMIT if free_plan_limit is None else free_plan_limit
        )

    def limit_for(self, plan: TenantPlan):
        """Maximum notes for a plan, or None for unlimited."""
        if plan is TenantPlan.FREE:
            return self.free_plan_limit
        if plan is TenantPlan.PRO:
            return None
        raise ValueError(f"Unhandled plan: {plan!r}")

    def count_notes(self, db: Session, tenant_id: str) -> int:
        return db.scalar(
            select(func.count(Note.id)).where(Note.tenant_id == tenant_id)
        )

    def may_create(self, db: Session, tenant: Tenant) -> bool:
        limit = self.limit_for(tenant.plan)
        if limit is None:
            return True
        return self.count_notes(db, tenant.id) < limit
