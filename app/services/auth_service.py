"""Session flow : inscription, connexion, rafraîchissement et profil."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.core.errors import NotFound, Unauthorized
from app.core.security import AuthTokens, TokenClaims, TokenService
from app.models.user import User, burn_password_check
from app.schemas.user import LoginRequest, RegisterRequest, UserProfile
from app.services import user_store

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass
class AuthResult:
    user: User
    tokens: AuthTokens


def build_claims(user: User) -> TokenClaims:
    return TokenClaims(sub=user.id, phone=user.phone, displayName=user.display_name, level=user.level)


def register(db: Session, tokens: TokenService, payload: RegisterRequest) -> AuthResult:
    record = payload.model_dump(exclude_none=True)
    user = user_store.create(db, record)
    logger.info(f"User {user.id} registered")
    return AuthResult(user=user, tokens=tokens.issue(build_claims(user)))


def login(db: Session, tokens: TokenService, payload: LoginRequest) -> AuthResult:
    # même message pour téléphone inconnu et mauvais mot de passe
    user = user_store.find_by_phone(db, payload.phone)
    if user is None:
        valid = burn_password_check(payload.password)
    else:
        valid = user.verify_password(payload.password)
    if not valid:
        logger.warning("Failed login attempt")
        raise Unauthorized(INVALID_CREDENTIALS)

    return AuthResult(user=user, tokens=tokens.issue(build_claims(user)))


def refresh(db: Session, tokens: TokenService, refresh_token: str) -> AuthResult:
    """Ré-émet une paire à partir des données persistées actuelles.

    L'ancien refresh token n'est pas invalidé (pas de stockage côté serveur).
    """
    claims = tokens.verify_refresh(refresh_token)

    user = user_store.find_by_id(db, claims.sub)
    if not user:
        raise Unauthorized("User no longer exists")

    logger.info(f"Tokens refreshed for user {user.id}")
    return AuthResult(user=user, tokens=tokens.issue(build_claims(user)))


def profile(db: Session, user_id: str) -> dict:
    user = user_store.find_by_id(db, user_id)
    if not user:
        raise NotFound("User not found")
    return UserProfile.model_validate(user).model_dump(mode="json", by_alias=True)
