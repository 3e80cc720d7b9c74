"""
Tenant Plan Service

Role-gated plan changes. An admin may only change the plan of the tenant
named in their own token; the slug in the URL must agree with it.
"""
from sqlalchemy import select
from sqlalchemy.orm import Session

from notesapp.core.context import IdentityContext
from notesapp.core.exceptions import InvalidInputError, TenantNotFoundError
from notesapp.core.permissions import PermissionDenied, require_plan_admin
from notesapp.models.tenant import Tenant, TenantPlan
from notesapp.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)


class TenantPlanService:

    def __init__(self, db: Session):
        self.db = db

    def upgrade(self, ctx: IdentityContext, slug: str, plan: str = TenantPlan.PRO.value) -> Tenant:
        try:
            require_plan_admin(ctx)
        except PermissionDenied:
            log_security_event(
                "forbidden_upgrade",
                {"reason": "not_admin", "user_id": ctx.user_id, "tenant_id": ctx.tenant_id},
                logger
            )
            raise

        try:
            new_plan = TenantPlan(plan)
        except ValueError:
            raise InvalidInputError("Invalid plan")
        if new_plan is not TenantPlan.PRO:
            raise InvalidInputError("Tenants can only be upgraded to pro")

        # Both conditions: the slug alone must never select another tenant
        tenant = self.db.execute(
            select(Tenant).where(
                Tenant.id == ctx.tenant_id,
                Tenant.slug == slug,
            )
        ).scalar_one_or_none()

        if tenant is None:
            log_security_event(
                "forbidden_upgrade",
                {"reason": "tenant_mismatch", "user_id": ctx.user_id, "tenant_id": ctx.tenant_id},
                logger
            )
            raise TenantNotFoundError()

        tenant.plan = new_plan
        self.db.commit()
        self.db.refresh(tenant)

        logger.info(f"Tenant {tenant.slug} upgraded to {tenant.plan.value} by {ctx.user_id}")

        return tenant
