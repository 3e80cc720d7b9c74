"""Tests for the authorization guard: Authorization header -> identity context."""

from __future__ import annotations

import pytest

from notesapp.api.deps import authenticate, extract_bearer_token
from notesapp.core.exceptions import InvalidTokenError, NoTokenError
from notesapp.core.security import TokenService
from notesapp.models.user import UserRole

from conftest import FakeClock


class TestExtractBearerToken:
    @pytest.mark.parametrize("header", [None, "", "   ", "Bearer", "Bearer ", "bearer   "])
    def test_missing(self, header) -> None:
        assert extract_bearer_token(header) is None

    def test_bearer_scheme(self) -> None:
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_case_insensitive(self) -> None:
        assert extract_bearer_token("bearer abc") == "abc"

    def test_other_scheme_kept_whole(self) -> None:
        assert extract_bearer_token("Basic dXNlcjpwYXNz") == "Basic dXNlcjpwYXNz"


class TestAuthenticate:
    def test_no_header(self, token_service: TokenService) -> None:
        with pytest.raises(NoTokenError) as exc_info:
            authenticate(None, token_service)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "No token provided"

    def test_invalid_token(self, token_service: TokenService) -> None:
        with pytest.raises(InvalidTokenError) as exc_info:
            authenticate("Bearer not-a-token", token_service)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid token"

    def test_non_bearer_value_is_invalid(self, token_service: TokenService) -> None:
        with pytest.raises(InvalidTokenError):
            authenticate("Basic dXNlcjpwYXNz", token_service)

    def test_expired_token(self, token_service: TokenService, clock: FakeClock) -> None:
        token = token_service.issue(user_id="u", tenant_id="t", role=UserRole.MEMBER, email="e")
        clock.advance(24 * 60 * 60 + 1)
        with pytest.raises(InvalidTokenError):
            authenticate(f"Bearer {token}", token_service)

    def test_valid_token(self, token_service: TokenService) -> None:
        token = token_service.issue(user_id="u-9", tenant_id="t-9", role=UserRole.ADMIN, email="e")
        ctx = authenticate(f"Bearer {token}", token_service)
        assert ctx.user_id == "u-9"
        assert ctx.tenant_id == "t-9"
        assert ctx.role is UserRole.ADMIN
