"""Credential store"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import Conflict
from app.models.user import User

logger = logging.getLogger(__name__)

PHONE_TAKEN = "Phone number already registered"


def find_by_phone(db: Session, phone: str) -> Optional[User]:
    return db.query(User).filter(User.phone == phone).first()


def find_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def create(db: Session, record: dict) -> User:
    # Vérifie si le téléphone existe déjà
    if find_by_phone(db, record["phone"]):
        raise Conflict(PHONE_TAKEN)

    user = User(**record)  # le mot de passe est hashé à l'affectation
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # course entre la vérification et l'insertion : la contrainte unique tranche
        db.rollback()
        logger.warning(f"Unique constraint hit while registering {record['phone']}")
        raise Conflict(PHONE_TAKEN)
    db.refresh(user)
    return user


def delete_by_id(db: Session, user_id: str) -> bool:
    deleted = db.query(User).filter(User.id == user_id).delete()
    db.commit()
    return deleted > 0
