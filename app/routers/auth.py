from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_current_user, get_token_service
from app.core.responses import success_response
from app.core.security import TokenClaims, TokenService
from app.schemas.user import AuthResponse, LoginRequest, RefreshRequest, RegisterRequest
from app.services import auth_service
from app.services.auth_service import AuthResult

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_payload(result: AuthResult) -> dict:
    return AuthResponse(
        id=result.user.id,
        display_name=result.user.display_name,
        access_token=result.tokens.access_token,
        refresh_token=result.tokens.refresh_token,
    ).model_dump(by_alias=True)


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Créer un compte et recevoir les tokens"""
    result = auth_service.register(db, tokens, payload)
    return success_response(_auth_payload(result), "Account created successfully.")


@router.post("/login")
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Se connecter et recevoir les tokens"""
    result = auth_service.login(db, tokens, payload)
    return success_response(_auth_payload(result), "Authentication successful.")


@router.post("/refresh")
def refresh(
    payload: RefreshRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Utiliser un refresh token pour obtenir une nouvelle paire"""
    result = auth_service.refresh(db, tokens, payload.refresh_token)
    return success_response(_auth_payload(result), "Tokens refreshed.")


@router.get("/profile")
def profile(
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    data = auth_service.profile(db, current_user.sub)
    return success_response(data, "Profile retrieved successfully.")
