"""
Tenant Schemas

Request/response models for tenant plan operations.
"""
from typing import Literal

from notesapp.models.tenant import TenantPlan
from notesapp.schemas.base import APIModel


class TenantSummary(APIModel):
    """Public view of a tenant."""
    id: str
    name: str
    slug: str
    plan: TenantPlan


class UpgradeRequest(APIModel):
    """Only "pro" is accepted: there is no downgrade."""
    plan: Literal["pro"]


class UpgradeResponse(APIModel):
    message: str
    tenant: TenantSummary
