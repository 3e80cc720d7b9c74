"""
Authentication Service

Login against the credential store and lookup of the calling user.
"""
from typing import Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from notesapp.core.context import IdentityContext
from notesapp.core.exceptions import InvalidCredentialsError, UserNotFoundError
from notesapp.core.security import TokenService, burn_password_check, verify_password
from notesapp.models.user import User
from notesapp.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)


def login(db: Session, token_service: TokenService, email: str, password: str) -> Tuple[str, User]:
    """
    Authenticate by email and password and issue a session token.

    SECURITY: Unknown email and wrong password raise the same
    InvalidCredentialsError, after the same amount of bcrypt work.
    """
    user = db.execute(
        select(User).options(joinedload(User.tenant)).where(User.email == email)
    ).scalar_one_or_none()

    if user is None:
        burn_password_check(password)
        log_security_event("failed_login", {"reason": "unknown_email"}, logger)
        raise InvalidCredentialsError()

    if not verify_password(password, user.hashed_password):
        log_security_event(
            "failed_login",
            {"reason": "invalid_password", "user_id": user.id, "tenant_id": user.tenant_id},
            logger
        )
        raise InvalidCredentialsError()

    token = token_service.issue(
        user_id=user.id,
        tenant_id=user.tenant_id,
        role=user.role,
        email=user.email,
    )

    logger.info(f"Successful login: user={user.id}, tenant={user.tenant_id}")

    return token, user


def get_current_user(db: Session, ctx: IdentityContext) -> User:
    """Load the caller's user row, scoped to the token's tenant."""
    user = db.execute(
        select(User)
        .options(joinedload(User.tenant))
        .where(User.id == ctx.user_id, User.tenant_id == ctx.tenant_id)
    ).scalar_one_or_none()

    if user is None:
        logger.warning(f"User from valid token no longer exists: {ctx.user_id}")
        raise UserNotFoundError()

    return user
