"""
Note Model

Notes are the tenant-scoped resource of the application. A note belongs
to exactly one tenant and one author (the creating user).

Authorship is immutable after creation; title and content are mutable.
"""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from notesapp.database import Base
import uuid


class Note(Base):
    __tablename__ = "notes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # CRITICAL: Tenant foreign key for isolation
    tenant_id = Column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    author_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    title = Column(Text, nullable=False)
    content = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    tenant = relationship("Tenant", back_populates="notes")
    author = relationship("User", back_populates="notes", lazy="joined")

    __table_args__ = (
        # Listing query: a tenant's notes, newest first
        Index('idx_note_tenant_created', 'tenant_id', 'created_at'),
    )

    def __repr__(self):
        return f"<Note {self.id} (tenant={self.tenant_id})>"
