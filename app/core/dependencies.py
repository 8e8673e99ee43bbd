import logging
from typing import Optional

from fastapi import Depends, Header

from app.core.config import Settings, get_settings
from app.core.errors import ApiError, Unauthorized
from app.core.security import TokenClaims, TokenService

logger = logging.getLogger(__name__)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(settings)


def get_current_user(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """Vérifie le bearer token ; toujours le même message "Unauthorized" en cas d'échec"""
    if not authorization or not authorization.startswith("Bearer "):
        logger.debug("Rejected request: missing or malformed Authorization header")
        raise Unauthorized("Unauthorized")

    token = authorization[len("Bearer "):].strip()
    if not token:
        logger.debug("Rejected request: empty bearer token")
        raise Unauthorized("Unauthorized")

    try:
        return tokens.verify_access(token)
    except ApiError as e:
        logger.debug(f"Rejected request: {e.message}")
        raise Unauthorized("Unauthorized") from e
