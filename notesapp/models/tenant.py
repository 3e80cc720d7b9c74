"""
Tenant Model

The tenant is the isolation boundary: each tenant is a separate
organization whose users and notes are invisible to every other tenant.

Isolation strategy: shared database, shared schema, tenant_id filter column.
"""
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
from notesapp.database import Base
import uuid
import enum


class TenantPlan(str, enum.Enum):
    """
    Service tier of a tenant.

    FREE: capped note count (see QuotaPolicy)
    PRO: unlimited notes

    Transitions are free -> pro only. There is no downgrade path.
    """
    FREE = "free"
    PRO = "pro"


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Stable external alias used in URLs (/tenants/{slug}/upgrade)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)

    plan = Column(
        SQLEnum(
            TenantPlan,
            name="tenant_plan",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        default=TenantPlan.FREE,
        nullable=False,
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    # Also touched by NoteRepository.create to serialize concurrent creators
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    users = relationship("User", back_populates="tenant", cascade="all, delete-orphan")
    notes = relationship("Note", back_populates="tenant", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Tenant {self.slug} plan={self.plan.value if self.plan else None}>"
