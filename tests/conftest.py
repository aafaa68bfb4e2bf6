import os
from datetime import date

import pytest

from dinner_planner.models import PantryItem, Recipe


@pytest.fixture(scope="session", autouse=True)
def set_test_env():
    os.environ["DINNER_PLANNER_LOG_LEVEL"] = "DEBUG"
    for key in ("MATCH_THRESHOLD", "EXPIRING_WITHIN_DAYS"):
        os.environ.pop(f"DINNER_PLANNER_{key}", None)


@pytest.fixture(scope="session")
def client(set_test_env):
    from fastapi.testclient import TestClient
    from app.main import app
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture
def today():
    # A Wednesday; the week starts on Sunday 2026-03-01.
    return date(2026, 3, 4)


@pytest.fixture
def make_recipes():
    def _make(count: int, prep_times=None) -> list[Recipe]:
        prep_times = prep_times or [0] * count
        return [
            Recipe(id=f"r{i}", name=f"Recipe {i}", ingredients=[f"ingredient {i}"], prep_time=prep_times[i])
            for i in range(count)
        ]
    return _make


@pytest.fixture
def pantry_item():
    counter = iter(range(1, 10_000))

    def _make(name: str, expires=None) -> PantryItem:
        return PantryItem(id=f"p{next(counter)}", name=name, expiration_date=expires)
    return _make
