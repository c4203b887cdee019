from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

import models
from database import get_db
from main import app


def test_currency_rates_active_newest_first(client, db_session):
    older = models.CurrencyRate(
        id="rate-old", from_currency="USD", to_currency="IQD", rate=Decimal("1300"),
        effective_date=datetime(2024, 1, 1, tzinfo=timezone.utc)
    )
    newer = models.CurrencyRate(
        id="rate-new", from_currency="USD", to_currency="IQD", rate=Decimal("1310"),
        effective_date=datetime(2024, 6, 1, tzinfo=timezone.utc)
    )
    retired = models.CurrencyRate(
        id="rate-off", from_currency="USD", to_currency="EUR", rate=Decimal("0.9"),
        effective_date=datetime(2024, 7, 1, tzinfo=timezone.utc), is_active=False
    )
    db_session.add_all([older, newer, retired])
    db_session.commit()

    response = client.get("/api/currency-rates")

    assert response.status_code == 200
    data = response.json()
    assert [r["id"] for r in data] == ["rate-new", "rate-old"]
    assert data[0]["fromCurrency"] == "USD"
    assert data[0]["toCurrency"] == "IQD"
    assert Decimal(data[0]["rate"]) == Decimal("1310")


def test_currency_rates_unexpected_error_is_generic(client):
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    mock_db.query.side_effect = RuntimeError("pool exhausted on db-primary-1")

    response = TestClient(app, raise_server_exceptions=False).get("/api/currency-rates")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
    assert "db-primary-1" not in response.text
