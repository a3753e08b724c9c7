# tests/conftest.py - shared builders and app fixtures

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from ledgercheck.config import Settings
from ledgercheck.main import create_app
from ledgercheck.models.ledger import Checkpoint, Movement


def ts(day: str) -> datetime:
    """'2025-06-01' or '2025-06-01T10:00' -> aware UTC datetime."""
    return datetime.fromisoformat(day).replace(tzinfo=timezone.utc)


def mv(id: int, day: str, label: str, amount) -> Movement:
    return Movement(id=id, date=ts(day), label=label, amount=Decimal(str(amount)))


def cp(day: str, balance) -> Checkpoint:
    return Checkpoint(date=ts(day), balance=Decimal(str(balance)))


@pytest.fixture
def settings() -> Settings:
    return Settings(APP_ENV="test", LOG_LEVEL="DEBUG")


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c
