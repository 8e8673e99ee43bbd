from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.core.config import Settings, get_settings, parse_duration
from app.core.errors import Unauthorized
from app.core.security import (
    ALGORITHM,
    TokenClaims,
    TokenExpired,
    TokenInvalid,
    TokenService,
    TokenVerificationError,
)

CLAIMS = TokenClaims(sub="0123456789abcdef01234567", phone="+15551234567", displayName="Ann", level="fresh")


@pytest.fixture
def service():
    return TokenService(get_settings())


def _expired_token(secret, token_type):
    past = datetime.now(timezone.utc) - timedelta(minutes=5)
    payload = CLAIMS.model_dump()
    payload.update({"iat": past - timedelta(minutes=15), "exp": past, "jti": "x", "type": token_type})
    return jwt.encode(payload, secret, algorithm=ALGORITHM), past


def test_issue_then_verify(service):
    tokens = service.issue(CLAIMS)
    assert service.verify_access(tokens.access_token) == CLAIMS
    assert service.verify_refresh(tokens.refresh_token) == CLAIMS


def test_each_issue_is_unique(service):
    first = service.issue(CLAIMS)
    second = service.issue(CLAIMS)
    assert first.refresh_token != second.refresh_token
    assert first.access_token != second.access_token


def test_ttls_follow_settings(service):
    settings = get_settings()
    tokens = service.issue(CLAIMS)
    access = jwt.get_unverified_claims(tokens.access_token)
    refresh = jwt.get_unverified_claims(tokens.refresh_token)
    assert access["exp"] - access["iat"] == settings.access_ttl_seconds == 15 * 60
    assert refresh["exp"] - refresh["iat"] == settings.refresh_ttl_seconds == 7 * 86400


def test_expired_access_token(service):
    token, expired_at = _expired_token(get_settings().JWT_ACCESS_SECRET, "access")
    with pytest.raises(TokenExpired) as exc:
        service.verify_access(token)
    assert exc.value.message == "accessToken expired"
    assert exc.value.status_code == 401
    assert exc.value.expired_at == expired_at.replace(microsecond=0)


def test_expired_refresh_token(service):
    token, _ = _expired_token(get_settings().JWT_REFRESH_SECRET, "refresh")
    with pytest.raises(TokenExpired) as exc:
        service.verify_refresh(token)
    assert exc.value.message == "refreshToken expired"


def test_secrets_are_not_interchangeable(service):
    tokens = service.issue(CLAIMS)
    with pytest.raises(TokenInvalid):
        service.verify_access(tokens.refresh_token)
    with pytest.raises(TokenInvalid):
        service.verify_refresh(tokens.access_token)


def test_malformed_token(service):
    with pytest.raises(TokenInvalid) as exc:
        service.verify_access("definitely.not.a-jwt")
    assert exc.value.message == "accessToken invalid"
    assert isinstance(exc.value, Unauthorized)


def test_missing_claims_is_generic_failure(service):
    payload = {"sub": "abc", "type": "access", "exp": datetime.now(timezone.utc) + timedelta(minutes=1)}
    token = jwt.encode(payload, get_settings().JWT_ACCESS_SECRET, algorithm=ALGORITHM)
    with pytest.raises(TokenVerificationError) as exc:
        service.verify_access(token)
    assert type(exc.value) is TokenVerificationError
    assert exc.value.message == "accessToken verification failed"


def test_parse_duration():
    assert parse_duration("15m") == 900
    assert parse_duration("7d") == 604800
    assert parse_duration("2h") == 7200
    assert parse_duration("45s") == 45
    assert parse_duration("3600") == 3600
    with pytest.raises(ValueError):
        parse_duration("soon")


def test_settings_reject_short_secrets(monkeypatch):
    monkeypatch.setenv("JWT_ACCESS_SECRET", "too-short")
    with pytest.raises(ValueError):
        Settings()
