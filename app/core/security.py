import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, ValidationError

from app.core.config import Settings
from app.core.errors import Unauthorized

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS_TOKEN_NAME = "accessToken"
REFRESH_TOKEN_NAME = "refreshToken"


class TokenVerificationError(Unauthorized):
    """Échec de vérification d'un token (cas générique)."""


class TokenExpired(TokenVerificationError):
    def __init__(self, token_name: str, expired_at: Optional[datetime]):
        super().__init__(
            f"{token_name} expired",
            details={"tokenName": token_name, "expiredAt": expired_at},
        )
        self.expired_at = expired_at


class TokenInvalid(TokenVerificationError):
    def __init__(self, token_name: str, reason: str):
        super().__init__(
            f"{token_name} invalid",
            details={"tokenName": token_name, "reason": reason},
        )
        self.reason = reason


class TokenClaims(BaseModel):
    """Payload utilisateur porté par les deux tokens."""
    sub: str
    phone: str
    displayName: str
    level: str


@dataclass
class AuthTokens:
    access_token: str
    refresh_token: str


class TokenService:
    """Émet et vérifie les paires access/refresh (stateless, pas de révocation)."""

    def __init__(self, settings: Settings):
        self._access = (settings.JWT_ACCESS_SECRET, settings.access_ttl_seconds, ACCESS_TOKEN_NAME, "access")
        self._refresh = (settings.JWT_REFRESH_SECRET, settings.refresh_ttl_seconds, REFRESH_TOKEN_NAME, "refresh")

    def issue(self, claims: TokenClaims) -> AuthTokens:
        return AuthTokens(
            access_token=self._sign(claims, *self._access),
            refresh_token=self._sign(claims, *self._refresh),
        )

    def verify_access(self, token: str) -> TokenClaims:
        return self._verify(token, *self._access)

    def verify_refresh(self, token: str) -> TokenClaims:
        return self._verify(token, *self._refresh)

    @staticmethod
    def _sign(claims: TokenClaims, secret: str, ttl: int, token_name: str, token_type: str) -> str:
        now = datetime.now(timezone.utc)
        payload = claims.model_dump()
        payload.update({
            "iat": now,
            "exp": now + timedelta(seconds=ttl),
            "jti": uuid.uuid4().hex,  # chaque token émis est unique
            "type": token_type,
        })
        return jwt.encode(payload, secret, algorithm=ALGORITHM)

    @staticmethod
    def _verify(token: str, secret: str, ttl: int, token_name: str, token_type: str) -> TokenClaims:
        try:
            payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
        except ExpiredSignatureError:
            raise TokenExpired(token_name, _unverified_expiry(token))
        except JWTError as e:
            raise TokenInvalid(token_name, str(e))

        if payload.get("type") != token_type:
            raise TokenInvalid(token_name, f"expected a {token_type} token")

        try:
            return TokenClaims(**payload)
        except ValidationError as e:
            logger.debug(f"{token_name} payload rejected: {e}")
            raise TokenVerificationError(f"{token_name} verification failed")


def _unverified_expiry(token: str) -> Optional[datetime]:
    try:
        exp = jwt.get_unverified_claims(token).get("exp")
    except JWTError:
        return None
    if exp is None:
        return None
    return datetime.fromtimestamp(exp, tz=timezone.utc)
