"""
API Dependencies

Reusable FastAPI dependencies for authentication and authorization.

The Authorization Guard lives here: every protected endpoint depends on
get_identity, and the IdentityContext it returns is the only place a
tenant id may come from.
"""
from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from notesapp.database import get_db
from notesapp.core.context import IdentityContext
from notesapp.core.exceptions import InvalidTokenError, NoTokenError
from notesapp.core.permissions import require_plan_admin
from notesapp.core.security import TokenService, get_token_service
from notesapp.services.notes import NoteRepository
from notesapp.services.tenants import TenantPlanService
from notesapp.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an Authorization header value.

    A value without the Bearer scheme is returned whole, so it fails
    verification (Invalid token) rather than reading as missing.
    """
    if not authorization:
        return None
    value = authorization.strip()
    if value.lower().startswith(BEARER_PREFIX):
        value = value[len(BEARER_PREFIX):].strip()
    elif value.lower() == BEARER_PREFIX.strip():
        value = ""
    return value or None


def authenticate(authorization: Optional[str], token_service: TokenService) -> IdentityContext:
    """
    Turn an Authorization header into a trusted identity context.

    Raises NoTokenError when there is no token and InvalidTokenError when
    the token fails verification for any reason.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise NoTokenError()

    claims = token_service.verify(token)
    if claims is None:
        raise InvalidTokenError()

    return claims.to_identity()


async def get_identity(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> IdentityContext:
    """Dependency form of authenticate() for route handlers."""
    try:
        return authenticate(request.headers.get("Authorization"), token_service)
    except InvalidTokenError:
        log_security_event(
            "invalid_token",
            {"path": request.url.path, "method": request.method},
            logger
        )
        raise


async def require_admin(
    ctx: IdentityContext = Depends(get_identity)
) -> IdentityContext:
    """
    Require admin role.

    Runs before request body validation, so a member gets 403 regardless
    of what they sent.
    """
    require_plan_admin(ctx)
    return ctx


def get_note_repository(db: Session = Depends(get_db)) -> NoteRepository:
    return NoteRepository(db)


def get_tenant_plan_service(db: Session = Depends(get_db)) -> TenantPlanService:
    return TenantPlanService(db)
