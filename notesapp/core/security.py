"""
Security Module

Handles password hashing and session token issue/verification.
Uses passlib with bcrypt and python-jose (HS256).

SECURITY NOTES:
- Passwords are hashed with bcrypt (work factor from BCRYPT_ROUNDS)
- Tokens expire 24 hours after issue
- Every way a token can be bad (garbage, wrong signature, expired,
  missing or unknown claims) yields the same result: None
"""
import time
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Sequence

from jose import JWTError, jwt
from passlib.context import CryptContext

from notesapp.config import get_settings
from notesapp.core.context import IdentityContext
from notesapp.models.user import UserRole

settings = get_settings()

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its bcrypt hash (constant-time compare)."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    NOTE: This is intentionally slow. Don't call it in hot paths or loops.
    """
    return pwd_context.hash(password)


@lru_cache()
def _dummy_password_hash() -> str:
    return pwd_context.hash("not-a-real-password")


def burn_password_check(plain_password: str) -> None:
    """
    Run a bcrypt verification against a throwaway hash.

    Used by login when the email is unknown so the response takes as long
    as a wrong-password attempt.
    """
    pwd_context.verify(plain_password, _dummy_password_hash())


@dataclass(frozen=True)
class TokenClaims:
    """Claims carried by a session token."""
    user_id: str
    tenant_id: str
    role: UserRole
    email: str
    exp: int

    def to_identity(self) -> IdentityContext:
        return IdentityContext(user_id=self.user_id, tenant_id=self.tenant_id, role=self.role)


class TokenService:
    """
    Issues and verifies signed, time-limited session tokens.

    Secret rotation: `secrets` is ordered newest first. New tokens are
    signed with secrets[0]; a token signed with any listed secret verifies.
    Drop an old secret from the list once every token it signed has expired.

    Payload fields: userId, tenantId, role, email, exp (Unix seconds).
    """

    def __init__(
        self,
        secrets: Sequence[str],
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], float] = time.time,
    ):
        secrets = [s for s in secrets if s]
        if not secrets:
            raise ValueError("TokenService needs at least one signing secret")
        self._secrets = secrets
        self._algorithm = algorithm
        self._ttl_seconds = int(ttl.total_seconds())
        self._clock = clock

    def issue(self, user_id: str, tenant_id: str, role: UserRole, email: str) -> str:
        payload = {
            "userId": user_id,
            "tenantId": tenant_id,
            "role": UserRole(role).value,
            "email": email,
            "exp": int(self._clock()) + self._ttl_seconds,
        }
        return jwt.encode(payload, self._secrets[0], algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[TokenClaims]:
        """
        Return the token's claims, or None if the token is not valid.

        Callers must not try to tell apart why a token was rejected.
        """
        payload = self._decode(token)
        if payload is None:
            return None

        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            return None
        # Valid through the expiry second itself, invalid strictly after
        if self._clock() > exp:
            return None

        user_id = payload.get("userId")
        tenant_id = payload.get("tenantId")
        email = payload.get("email")
        if not all(isinstance(v, str) and v for v in (user_id, tenant_id, email)):
            return None

        try:
            role = UserRole(payload.get("role"))
        except ValueError:
            return None

        return TokenClaims(
            user_id=user_id,
            tenant_id=tenant_id,
            role=role,
            email=email,
            exp=int(exp),
        )

    def _decode(self, token: str) -> Optional[Dict[str, Any]]:
        if not isinstance(token, str) or not token:
            return None
        for secret in self._secrets:
            try:
                # Expiry is checked against our own clock in verify()
                return jwt.decode(
                    token,
                    secret,
                    algorithms=[self._algorithm],
                    options={"verify_exp": False},
                )
            except JWTError:
                continue
        return None


@lru_cache()
def get_token_service() -> TokenService:
    """Token service built from settings. Overridden in tests."""
    return TokenService(
        secrets=settings.signing_secrets,
        algorithm=settings.ALGORITHM,
        ttl=timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS),
    )
