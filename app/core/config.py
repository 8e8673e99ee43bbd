import re
from functools import lru_cache
from os import getenv

APP_NAME = "Todo API"

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100

BCRYPT_ROUNDS = 12

_DURATION_RE = re.compile(r"^(\d+)\s*([smhd]?)$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str) -> int:
    """Convertit une durée type "15m" / "7d" / "3600" en secondes"""
    match = _DURATION_RE.match(str(value).strip().lower())
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return int(amount) * _DURATION_UNITS[unit]


class Settings:
    """Configuration construite une seule fois au démarrage depuis l'environnement."""

    def __init__(self):
        self.APP_ENV = getenv("APP_ENV", "development")
        self.DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://todo:todo@db:5432/todo")
        self.API_PREFIX = getenv("API_PREFIX", "/api")
        self.LOG_LEVEL = getenv("LOG_LEVEL", "INFO").upper()
        self.UPLOADS_DIR = getenv("UPLOADS_DIR", "uploads")

        # secrets distincts pour access / refresh
        self.JWT_ACCESS_SECRET = getenv("JWT_ACCESS_SECRET", "dev-access-secret-change-in-prod-0000")
        self.JWT_REFRESH_SECRET = getenv("JWT_REFRESH_SECRET", "dev-refresh-secret-change-in-prod-000")
        self.JWT_ACCESS_TTL = getenv("JWT_ACCESS_TTL", "15m")  # expire au bout de 15 minutes
        self.JWT_REFRESH_TTL = getenv("JWT_REFRESH_TTL", "7d")  # expire au bout de 7 jours

        self._validate()

    def _validate(self):
        if self.APP_ENV not in ("development", "test", "production"):
            raise ValueError(f"APP_ENV must be development, test or production, got {self.APP_ENV!r}")
        for name in ("JWT_ACCESS_SECRET", "JWT_REFRESH_SECRET"):
            if len(getattr(self, name)) < 32:
                raise ValueError(f"{name} must be at least 32 characters")
        self.access_ttl_seconds = parse_duration(self.JWT_ACCESS_TTL)
        self.refresh_ttl_seconds = parse_duration(self.JWT_REFRESH_TTL)


@lru_cache
def get_settings() -> Settings:
    return Settings()
