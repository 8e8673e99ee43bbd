import os
import sys
import tempfile
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

# Config de test AVANT d'importer app (la config est lue une seule fois)
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["UPLOADS_DIR"] = tempfile.mkdtemp(prefix="todo-uploads-")

import random

import pytest
from fastapi.testclient import TestClient

from app.core.database import Base, SessionLocal, engine
from app.main import app


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """Client de test FastAPI"""
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = SessionLocal()
    yield db
    db.close()


def make_phone() -> str:
    return f"+1{random.randint(1000000000, 9999999999)}"


@pytest.fixture
def register_user(client):
    """Inscrit un utilisateur et retourne le `data` de la réponse"""
    def _register(**overrides):
        payload = {
            "phone": make_phone(),
            "password": "Password123!",
            "displayName": "Todo Tester",
        }
        payload.update(overrides)
        response = client.post("/api/auth/register", json=payload)
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        data["phone"] = payload["phone"]
        data["password"] = payload["password"]
        return data
    return _register


@pytest.fixture
def auth_headers(register_user):
    """Headers Authorization d'un utilisateur fraîchement inscrit"""
    user = register_user()
    return {"Authorization": f"Bearer {user['accessToken']}"}