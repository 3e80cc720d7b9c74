"""
Authentication Endpoints

Login and current-user lookup. Handlers are plain functions: FastAPI runs
them in its threadpool because the SQLAlchemy and bcrypt calls block.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from notesapp.api.deps import get_identity
from notesapp.core.context import IdentityContext
from notesapp.core.security import TokenService, get_token_service
from notesapp.database import get_db
from notesapp.schemas.auth import CurrentUserResponse, LoginRequest, LoginResponse, UserSummary
from notesapp.services import auth as auth_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Authenticate with email and password.

    Returns a bearer token valid for 24 hours and the user with its tenant.
    """
    token, user = auth_service.login(db, token_service, credentials.email, credentials.password)
    return LoginResponse(token=token, user=UserSummary.model_validate(user))


@router.get("/me", response_model=CurrentUserResponse)
def me(
    ctx: IdentityContext = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Return the user identified by the bearer token."""
    user = auth_service.get_current_user(db, ctx)
    return CurrentUserResponse(user=UserSummary.model_validate(user))
