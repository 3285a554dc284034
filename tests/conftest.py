"""
Shared test setup.
Points the application at a throwaway SQLite database and overrides the
database dependency, the same way for every test module.
"""

import os
import tempfile
from datetime import date, timedelta

_TMP_DIR = tempfile.mkdtemp(prefix="bankcards-tests-")
SQLALCHEMY_DATABASE_URL = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"

# Settings are read at import time
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["TRANSFER_MAX_RETRIES"] = "10"
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin123"
os.environ["ADMIN_EMAIL"] = "admin@example.com"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.main import app
from app.core.security import create_access_token, hash_password
from app.database import Base, create_db_engine, get_db
from app.models.card import Card, CardStatus
from app.models.user import User, UserRole
from app.utils.card_numbers import generate_card_number

engine = create_db_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create fresh tables for each test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def session_factory():
    """Factory for extra sessions, one per worker thread."""
    return TestingSessionLocal


@pytest.fixture
def make_user(db):
    def _make_user(username, role=UserRole.USER, password="secret123"):
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=hash_password(password),
            role=role,
        )
        db.add(user)
        db.commit()
        return user
    return _make_user


@pytest.fixture
def make_card(db):
    def _make_card(owner, balance=0, status=CardStatus.ACTIVE, expire_at=None):
        card = Card(
            number=generate_card_number(),
            owner_id=owner.id,
            balance=balance,
            status=status,
            expire_at=expire_at or date.today() + timedelta(days=365),
        )
        db.add(card)
        db.commit()
        return card
    return _make_card


@pytest.fixture
def balance_of():
    """Read a balance through a fresh session."""
    def _balance_of(card_id):
        session = TestingSessionLocal()
        try:
            return session.get(Card, card_id).balance
        finally:
            session.close()
    return _balance_of


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        token = create_access_token(user.id, user.username, user.role.value)
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers
