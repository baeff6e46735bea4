# backend/tests/conftest.py

import copy
import json
import pytest
from londontimes import create_app
from londontimes.extensions import get_store
from londontimes.services.london_times.store import LondonTimesStore

SAMPLE_DAY = {
    "date": "2025-01-01",
    "fajr": "06:26",
    "sunrise": "08:03",
    "dhuhr": "12:09",
    "asr": "13:45",
    "maghrib": "16:04",
    "isha": "17:41"
}

SAMPLE_DOCUMENT = {
    "city": "london",
    "times": {
        "2025-01-01": SAMPLE_DAY
    }
}

@pytest.fixture(scope='session')
def app():
    """Session-wide application for testing."""
    app = create_app('testing')
    return app

@pytest.fixture(scope='function')
def test_client(app):
    """A test client for the app."""
    return app.test_client()

@pytest.fixture(scope='function')
def app_store(app):
    """The store bound to the test app, emptied before and after each test."""
    with app.app_context():
        store = get_store()
    store.invalidate()
    yield store
    store.invalidate()

@pytest.fixture(scope='function')
def store():
    """A fresh, unbound store. Nothing is loaded until the first lookup."""
    return LondonTimesStore()

@pytest.fixture
def sample_day():
    return copy.deepcopy(SAMPLE_DAY)

@pytest.fixture
def sample_document():
    return copy.deepcopy(SAMPLE_DOCUMENT)

@pytest.fixture
def sample_json(sample_document):
    return json.dumps(sample_document)
