"""
Demo Data Bootstrap

Provisions the demo tenants and users. Tenants and users are never
created by the API itself; this is the only place they come from.

Usage:
    python -m notesapp.seed
"""
from typing import Dict

from sqlalchemy import select
from sqlalchemy.orm import Session

from notesapp.core.security import get_password_hash
from notesapp.models.tenant import Tenant, TenantPlan
from notesapp.models.user import User, UserRole
from notesapp.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PASSWORD = "password"

DEMO_TENANTS = [
    {"slug": "acme", "name": "Acme Corporation"},
    {"slug": "globex", "name": "Globex Corporation"},
]


def _get_or_create_tenant(db: Session, slug: str, name: str) -> Tenant:
    tenant = db.execute(select(Tenant).where(Tenant.slug == slug)).scalar_one_or_none()
    if tenant:
        return tenant
    tenant = Tenant(slug=slug, name=name, plan=TenantPlan.FREE)
    db.add(tenant)
    db.flush()
    return tenant


def _get_or_create_user(db: Session, tenant: Tenant, email: str, role: UserRole, password_hash: str) -> User:
    user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if user:
        return user
    user = User(tenant_id=tenant.id, email=email, hashed_password=password_hash, role=role)
    db.add(user)
    db.flush()
    return user


def seed_demo_data(db: Session) -> Dict[str, Tenant]:
    """
    Create the acme and globex tenants, each with an admin and a member.

    Idempotent: existing rows (matched by slug / email) are left untouched.
    """
    # One bcrypt hash shared by all demo users
    password_hash = get_password_hash(DEMO_PASSWORD)

    tenants = {}
    for entry in DEMO_TENANTS:
        tenant = _get_or_create_tenant(db, entry["slug"], entry["name"])
        _get_or_create_user(db, tenant, f"admin@{tenant.slug}.test", UserRole.ADMIN, password_hash)
        _get_or_create_user(db, tenant, f"user@{tenant.slug}.test", UserRole.MEMBER, password_hash)
        tenants[tenant.slug] = tenant

    db.commit()
    logger.info(f"Seeded demo tenants: {', '.join(tenants)}")
    return tenants


if __name__ == "__main__":
    from notesapp.config import get_settings
    from notesapp.database import SessionLocal, init_db
    from notesapp.utils.logging import setup_logging

    setup_logging(log_level=get_settings().LOG_LEVEL)
    init_db()
    session = SessionLocal()
    try:
        seed_demo_data(session)
    finally:
        session.close()
