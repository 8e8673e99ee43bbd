from functools import lru_cache
from sqlalchemy import Column, Integer, String, DateTime, event
from app.core.config import BCRYPT_ROUNDS
from app.core.database import Base
from app.models.common import new_object_id, utcnow
import bcrypt

LEVELS = ("fresh", "junior", "midLevel", "senior")

# bcrypt ne prend en compte que les 72 premiers octets
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode()[:BCRYPT_MAX_BYTES]


@lru_cache
def _dummy_hash() -> bytes:
    return bcrypt.hashpw(b"dummy-password", bcrypt.gensalt(rounds=BCRYPT_ROUNDS))


def burn_password_check(password: str) -> bool:
    """Même coût bcrypt qu'une vraie vérification, pour un téléphone inconnu"""
    bcrypt.checkpw(_password_bytes(password), _dummy_hash())
    return False


class User(Base):
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=new_object_id)
    phone = Column(String(16), unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    display_name = Column(String(100), nullable=False)
    experience_years = Column(Integer, nullable=False, default=0)
    address = Column(String(255), nullable=True)
    level = Column(String(16), nullable=False, default="fresh")
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def verify_password(self, password: str) -> bool:
        # pas de mot de passe enregistré -> jamais valide
        if not self.password:
            return False
        return bcrypt.checkpw(_password_bytes(password), self.password.encode())


@event.listens_for(User.password, "set", retval=True)
def _hash_password(target, value, oldvalue, initiator):
    """Hash le mot de passe à chaque modification du champ (jamais au chargement)."""
    if value is None:
        return value
    return bcrypt.hashpw(_password_bytes(value), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()
