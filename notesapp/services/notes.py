"""
Tenant-Scoped Note Repository

CRUD for notes. Every method takes the caller's IdentityContext and
filters by ctx.tenant_id; no tenant identifier is ever taken from the
request itself.

TENANT_ISOLATION: A note of another tenant is reported exactly like a
note that does not exist (NoteNotFoundError).
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from notesapp.core.context import IdentityContext
from notesapp.core.exceptions import (
    InvalidInputError,
    NoteNotFoundError,
    QuotaExceededError,
    TenantNotFoundError,
)
from notesapp.core.quota import QuotaPolicy
from notesapp.models.note import Note
from notesapp.models.tenant import Tenant
from notesapp.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("title", "content")


def _require_title(title: Optional[str]) -> None:
    if not title:
        raise InvalidInputError("title: Title is required")


class NoteRepository:

    def __init__(self, db: Session, quota: Optional[QuotaPolicy] = None):
        self.db = db
        self.quota = quota or QuotaPolicy()

    def list(self, ctx: IdentityContext) -> List[Note]:
        """All notes of the caller's tenant, newest first."""
        return list(
            self.db.execute(
                select(Note)
                .where(Note.tenant_id == ctx.tenant_id)
                .order_by(Note.created_at.desc())
            ).scalars()
        )

    def get(self, ctx: IdentityContext, note_id: str) -> Note:
        note = self.db.execute(
            select(Note).where(
                Note.id == note_id,
                Note.tenant_id == ctx.tenant_id  # CRITICAL
            )
        ).scalar_one_or_none()

        if note is None:
            raise NoteNotFoundError()
        return note

    def create(self, ctx: IdentityContext, title: str, content: Optional[str] = None) -> Note:
        """
        Create a note in the caller's tenant, subject to the plan quota.

        Concurrent creates for one tenant are serialized: the transaction
        starts by writing the tenant row (row lock on PostgreSQL, database
        write lock on SQLite), and the note count, quota decision and insert
        all happen while that lock is held.
        """
        _require_title(title)

        # The lock must be the first statement of its transaction
        if self.db.in_transaction():
            self.db.commit()

        locked = self.db.execute(
            update(Tenant)
            .where(Tenant.id == ctx.tenant_id)
            .values(updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        if locked.rowcount == 0:
            self.db.rollback()
            logger.warning(f"Note create for missing tenant {ctx.tenant_id}")
            raise TenantNotFoundError()

        tenant = self.db.execute(
            select(Tenant)
            .where(Tenant.id == ctx.tenant_id)
            .execution_options(populate_existing=True)
        ).scalar_one()

        if not self.quota.may_create(self.db, tenant):
            self.db.rollback()
            log_security_event(
                "quota_exceeded",
                {"tenant_id": tenant.id, "user_id": ctx.user_id},
                logger
            )
            raise QuotaExceededError()

        note = Note(
            tenant_id=ctx.tenant_id,  # CRITICAL: always from the token
            author_id=ctx.user_id,
            title=title,
            content=content,
        )
        self.db.add(note)
        self.db.commit()
        self.db.refresh(note)

        logger.info(f"Note created: {note.id} in tenant {note.tenant_id}")

        return note

    def update(self, ctx: IdentityContext, note_id: str, changes: Dict[str, Any]) -> Note:
        """Apply only the supplied fields. Authorship never changes."""
        if "title" in changes:
            _require_title(changes["title"])

        note = self.get(ctx, note_id)

        for field in UPDATABLE_FIELDS:
            if field in changes:
                setattr(note, field, changes[field])
        note.updated_at = datetime.utcnow()

        self.db.commit()
        self.db.refresh(note)

        logger.info(f"Note updated: {note.id}")

        return note

    def delete(self, ctx: IdentityContext, note_id: str) -> None:
        note = self.get(ctx, note_id)

        self.db.delete(note)
        self.db.commit()

        logger.info(f"Note deleted: {note_id} by {ctx.user_id}")
