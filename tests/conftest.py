# tests/conftest.py

import os
import sys

import pytest
from fastapi.testclient import TestClient

from app.providers.mock import MockPayoutGateway
from main import create_app
from settings import Settings


SCRIPT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "scripts"))
if SCRIPT_DIR not in sys.path:
    sys.path.insert(0, SCRIPT_DIR)

WEBHOOK_SECRET = "whsec_test_secret_123"


def make_settings(**overrides) -> Settings:
    values = {
        "ENV": "dev",
        "STRIPE_SECRET_KEY": "sk_test_dummy",
        "STRIPE_WEBHOOK_SECRET": WEBHOOK_SECRET,
    }
    values.update(overrides)
    # ignore any local .env so tests are deterministic
    return Settings(_env_file=None, **values)


@pytest.fixture()
def app_settings() -> Settings:
    return make_settings()


@pytest.fixture()
def gateway() -> MockPayoutGateway:
    return MockPayoutGateway()


@pytest.fixture()
def client(app_settings: Settings, gateway: MockPayoutGateway) -> TestClient:
    # Needed so tests can assert 500s instead of pytest re-raising server exceptions
    return TestClient(create_app(app_settings, gateway), raise_server_exceptions=False)
