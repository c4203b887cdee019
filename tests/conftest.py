import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-signing-secret-with-enough-length-for-hs256")
os.environ["ENVIRONMENT"] = "test"

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models
from database import Base, get_db
from main import app
from security import hash_password, issue_token


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make_user(**overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "id": models.generate_id("user"),
            "username": f"user{n}",
            "email": f"user{n}@mapestate.com",
            "password": hash_password("password123"),
            "first_name": "Test",
            "last_name": f"User{n}",
            "phone": "+964 750 000 0000",
        }
        fields.update(overrides)
        user = models.User(**fields)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_property(db_session):
    counter = {"n": 0}
    base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _make_property(**overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "id": models.generate_id("prop"),
            "title": f"Property {n}",
            "description": "A nice place",
            "type": "apartment",
            "listing_type": "sale",
            "price": Decimal("100000"),
            "address": f"{n} Main Street",
            "city": "Erbil",
            "country": "Iraq",
            "status": "active",
            "created_at": base_time + timedelta(days=n),
        }
        fields.update(overrides)
        prop = models.Property(**fields)
        db_session.add(prop)
        db_session.commit()
        db_session.refresh(prop)
        return prop

    return _make_property


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {issue_token(user.id)}"}

    return _auth_headers
