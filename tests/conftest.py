import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from trylocal.main import app
from trylocal.services.payments import PaymentAccountService, get_payments_client
from trylocal.services.payments.mock import MockPayments
from trylocal.services.store import InMemoryBusinessRepository, get_business_repository

# 2024-06-03 is a Monday
MONDAY = datetime(2024, 6, 3)


class TickingClock:
    """returns a later instant on every call so reused timestamps are easy to spot."""

    def __init__(self, start: datetime):
        self.current = start
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        self.calls += 1
        return value


@pytest.fixture
def payments():
    return MockPayments()


@pytest.fixture
def repo():
    repo = InMemoryBusinessRepository()
    repo.add(
        "biz-1",
        name="Rose City Bakery",
        email="owner@rosecity.test",
        website="https://rosecity.test",
        businessHours={
            "monday": {"open": "09:00", "close": "17:00"},
            "tuesday": {"open": "09:00", "close": "17:00"},
        },
    )
    repo.add("biz-2", name="Gresham Tacos")
    return repo


@pytest.fixture
def clock():
    return TickingClock(datetime(2024, 6, 3, 19, 0, tzinfo=timezone.utc))


@pytest.fixture
def service(payments, repo, clock):
    return PaymentAccountService(payments=payments, businesses=repo, clock=clock)


@pytest.fixture
def client(payments, repo):
    app.dependency_overrides[get_payments_client] = lambda: payments
    app.dependency_overrides[get_business_repository] = lambda: repo
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
