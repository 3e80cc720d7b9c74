"""
Tenant Endpoints

Plan upgrade for the caller's own tenant. Admin only.
"""
from fastapi import APIRouter, Depends

from notesapp.api.deps import get_tenant_plan_service, require_admin
from notesapp.core.context import IdentityContext
from notesapp.schemas.tenant import TenantSummary, UpgradeRequest, UpgradeResponse
from notesapp.services.tenants import TenantPlanService

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.post("/{slug}/upgrade", response_model=UpgradeResponse)
def upgrade_tenant(
    slug: str,
    upgrade: UpgradeRequest,
    ctx: IdentityContext = Depends(require_admin),
    service: TenantPlanService = Depends(get_tenant_plan_service),
):
    """
    Upgrade the tenant to the pro plan.

    The slug must name the caller's own tenant; any other slug is a 404.
    """
    tenant = service.upgrade(ctx, slug, upgrade.plan)
    return UpgradeResponse(
        message="Tenant upgraded successfully",
        tenant=TenantSummary.model_validate(tenant),
    )
