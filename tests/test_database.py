import threading
from decimal import Decimal
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import database
import models
import search
from config import settings, ConfigurationError
from database import Base, LazyDatabase
from main import app


def test_lazy_database_initializes_once_under_concurrency():
    lazy = LazyDatabase(url="sqlite://")
    barrier = threading.Barrier(8)
    factories = []

    def first_request():
        barrier.wait()
        factories.append(lazy.initialize())

    with patch("database.create_engine", wraps=create_engine) as mock_create:
        threads = [threading.Thread(target=first_request) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert mock_create.call_count == 1
    assert len(factories) == 8
    assert all(factory is factories[0] for factory in factories)
    lazy.reset()


def test_lazy_database_creates_tables():
    lazy = LazyDatabase(url="sqlite://")
    db = lazy.session()
    try:
        assert db.query(models.Property).count() == 0
    finally:
        db.close()
        lazy.reset()


def test_lazy_database_requires_url(monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", None)
    lazy = LazyDatabase()

    with pytest.raises(ConfigurationError):
        lazy.initialize()
    assert not lazy.initialized

    # a failed attempt is not remembered
    monkeypatch.setattr(settings, "DATABASE_URL", "sqlite://")
    assert lazy.initialize() is not None
    assert lazy.initialized
    lazy.reset()


def test_get_db_reports_initialization_failure(monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", None)
    monkeypatch.setattr(database, "lazy_db", LazyDatabase())
    app.dependency_overrides.clear()

    response = TestClient(app).get("/api/currency-rates")

    assert response.status_code == 500
    assert response.json() == {"message": "Database initialization failed"}


def test_concurrent_view_increments_are_not_lost(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'views.db'}", connect_args={"check_same_thread": False, "timeout": 30}
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with SessionLocal() as db:
        db.add(models.Property(
            id="prop-hot", title="Hot listing", type="house", listing_type="sale",
            price=Decimal("1000"), address="1 Busy Street", city="Erbil", country="Iraq"
        ))
        db.commit()

    def viewer():
        for _ in range(5):
            with SessionLocal() as db:
                search.increment_views(db, "prop-hot")

    threads = [threading.Thread(target=viewer) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    with SessionLocal() as db:
        assert db.get(models.Property, "prop-hot").views == 40
    engine.dispose()
