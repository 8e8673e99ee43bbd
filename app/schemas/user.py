from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Annotated, Literal, Optional

from app.models.common import as_utc

PHONE_PATTERN = r"^\+?[1-9]\d{9,14}$"

Level = Literal["fresh", "junior", "midLevel", "senior"]
Phone = Annotated[str, StringConstraints(strip_whitespace=True, pattern=PHONE_PATTERN)]
Password = Annotated[str, StringConstraints(min_length=8, max_length=100)]


class CamelModel(BaseModel):
    """Champs snake_case côté Python, camelCase dans le JSON"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    phone: Phone
    password: Password
    display_name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
    experience_years: Optional[int] = Field(default=None, ge=0)
    address: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)]] = None
    level: Optional[Level] = None


class LoginRequest(CamelModel):
    phone: Phone
    password: Password


class RefreshRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class AuthResponse(CamelModel):
    id: str
    display_name: str
    access_token: str
    refresh_token: str


class UserProfile(CamelModel):
    """Projection publique d'un utilisateur (jamais le mot de passe)"""
    id: str
    phone: str
    display_name: str
    experience_years: int
    address: Optional[str] = None
    level: Level
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, value):
        return as_utc(value)
