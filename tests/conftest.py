from datetime import date

import pytest

from app.store import store


@pytest.fixture(autouse=True)
def clean_store():
    store.clear()
    yield
    store.clear()


@pytest.fixture
def today():
    return date(2025, 6, 20)
