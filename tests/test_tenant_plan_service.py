"""Tests for TenantPlanService, QuotaPolicy and the role checks behind them."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from notesapp.core.exceptions import InvalidInputError, TenantNotFoundError
from notesapp.core.permissions import PermissionDenied, can_change_plan
from notesapp.core.quota import QuotaPolicy
from notesapp.models import Tenant, TenantPlan, UserRole
from notesapp.services.notes import NoteRepository
from notesapp.services.tenants import TenantPlanService

from conftest import Seeded


@pytest.fixture()
def service(db: Session) -> TenantPlanService:
    return TenantPlanService(db)


class TestRoleChecks:
    def test_admin_may_change_plan(self) -> None:
        assert can_change_plan(UserRole.ADMIN) is True

    def test_member_may_not(self) -> None:
        assert can_change_plan(UserRole.MEMBER) is False


class TestUpgrade:
    def test_admin_upgrades_own_tenant(self, service: TenantPlanService, seeded: Seeded, db: Session) -> None:
        tenant = service.upgrade(seeded.ctx("acme_admin"), "acme", "pro")
        assert tenant.plan is TenantPlan.PRO

        db.expire_all()
        assert db.get(Tenant, tenant.id).plan is TenantPlan.PRO

    def test_member_forbidden(self, service: TenantPlanService, seeded: Seeded, db: Session) -> None:
        with pytest.raises(PermissionDenied) as exc_info:
            service.upgrade(seeded.ctx("acme_user"), "acme", "pro")
        assert exc_info.value.status_code == 403
        db.expire_all()
        assert db.get(Tenant, seeded.tenants["acme"].id).plan is TenantPlan.FREE

    def test_cross_tenant_slug_not_found(self, service: TenantPlanService, seeded: Seeded, db: Session) -> None:
        with pytest.raises(TenantNotFoundError):
            service.upgrade(seeded.ctx("acme_admin"), "globex", "pro")
        db.expire_all()
        assert db.get(Tenant, seeded.tenants["globex"].id).plan is TenantPlan.FREE

    def test_unknown_slug_not_found(self, service: TenantPlanService, seeded: Seeded) -> None:
        with pytest.raises(TenantNotFoundError):
            service.upgrade(seeded.ctx("acme_admin"), "initech", "pro")

    @pytest.mark.parametrize("plan", ["free", "enterprise", ""])
    def test_only_pro_accepted(self, service: TenantPlanService, seeded: Seeded, plan: str) -> None:
        with pytest.raises(InvalidInputError):
            service.upgrade(seeded.ctx("acme_admin"), "acme", plan)

    def test_idempotent(self, service: TenantPlanService, seeded: Seeded) -> None:
        ctx = seeded.ctx("acme_admin")
        service.upgrade(ctx, "acme", "pro")
        assert service.upgrade(ctx, "acme", "pro").plan is TenantPlan.PRO

    def test_upgrade_lifts_quota(self, service: TenantPlanService, seeded: Seeded, db: Session) -> None:
        notes = NoteRepository(db)
        member = seeded.ctx("acme_user")
        for i in range(3):
            notes.create(member, title=f"note {i}")

        service.upgrade(seeded.ctx("acme_admin"), "acme", "pro")
        assert notes.create(member, title="fourth").title == "fourth"


class TestQuotaPolicy:
    def test_limits(self) -> None:
        policy = QuotaPolicy()
        assert policy.limit_for(TenantPlan.FREE) == 3
        assert policy.limit_for(TenantPlan.PRO) is None

    def test_counts_fresh(self, db: Session, seeded: Seeded) -> None:
        policy = QuotaPolicy()
        tenant = seeded.tenants["acme"]
        notes = NoteRepository(db, quota=policy)
        ctx = seeded.ctx("acme_user")

        assert policy.may_create(db, tenant)
        for i in range(3):
            notes.create(ctx, title=f"note {i}")
        assert policy.count_notes(db, tenant.id) == 3
        assert not policy.may_create(db, tenant)
