import os
import sys
from typing import Iterator

# Cheap hashes, no demo data and a fixed signing secret for every test run.
# These must be in place before the wellness package is imported.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ["SEED_DEMO_DATA"] = "false"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ENVIRONMENT", "test")

# Ensure the repository root is on sys.path so tests can import the package
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from wellness.config import Settings
from wellness.main import create_app
from wellness.store import RecordStore


PASSWORD = 'password123'


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        jwt_secret='test-secret', environment='test', seed_demo_data=False, bcrypt_rounds=4
    )


@pytest.fixture()
def store() -> RecordStore:
    """A fresh, empty store per test."""

    return RecordStore()


@pytest.fixture()
def app(settings: Settings, store: RecordStore) -> FastAPI:
    return create_app(settings=settings, store=store)


@pytest.fixture()
def api_client(app: FastAPI) -> Iterator[TestClient]:
    """Yield a FastAPI test client bound to the isolated store."""

    with TestClient(app) as client:
        yield client


@pytest.fixture()
def register(api_client):
    """Return a helper registering an account and yielding ``(user, token)``."""

    def _register(email, role='patient', name='Test User', password=PASSWORD, **extra):
        payload = {
            'email': email,
            'password': password,
            'name': name,
            'role': role,
            'dataConsent': True,
        }
        payload.update(extra)
        resp = api_client.post('/api/auth/register', json=payload)
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return body['user'], body['token']

    return _register


@pytest.fixture()
def provider(register):
    return register('provider@test.com', role='provider', name='Dr. Test')


@pytest.fixture()
def patient(register, provider):
    provider_user, _ = provider
    return register('patient@test.com', name='Pat Patient', providerId=provider_user['id'])


@pytest.fixture()
def other_patient(register):
    return register('other@test.com', name='Other Patient')
