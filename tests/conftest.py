"""
Pytest configuration and fixtures.
"""

import json
import os

# Must be set before app.db.session builds its engine.
os.environ["DATABASE_URL"] = "sqlite://"

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.clients.apimedic import ApiMedicClient
from app.core.config import ApiMedicConfig, Settings, get_settings
from app.db.models import Base
from app.db.session import get_db
from app.main import create_app
from app.routers.diagnosis import get_apimedic_client

AUTH_URL = "https://auth.apimedic.test/login"
BASE_URL = "https://health.apimedic.test/api"


class FakeApiMedic:
    """Scripted stand-in for the ApiMedic auth and health services."""

    def __init__(self, token_status=200, symptoms_status=200, diagnosis_status=200,
                 token_body=None, symptoms_body=None, diagnosis_body=None, data_error=None):
        self.token_status = token_status
        self.symptoms_status = symptoms_status
        self.diagnosis_status = diagnosis_status
        self.token_body = token_body if token_body is not None else json.dumps(
            {"Token": "upstream-token", "ValidThrough": 7200}
        )
        self.symptoms_body = symptoms_body if symptoms_body is not None else json.dumps(
            [{"ID": 9, "Name": "Headache"}, {"ID": 11, "Name": "Fever"}]
        )
        self.diagnosis_body = diagnosis_body if diagnosis_body is not None else json.dumps([
            {
                "Issue": {
                    "ID": 80,
                    "Name": "Cold",
                    "Accuracy": 90.0,
                    "Icd": "J00",
                    "IcdName": "Acute nasopharyngitis [common cold]",
                    "ProfName": "Common cold",
                    "Ranking": 1,
                },
                "Specialisation": [{"ID": 15, "Name": "General practice", "SpecialistID": 0}],
            }
        ])
        self.data_error = data_error
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) == AUTH_URL:
            return httpx.Response(self.token_status, text=self.token_body)
        if self.data_error is not None:
            raise self.data_error(f"{request.method} {request.url.path} failed", request=request)
        if request.url.path.endswith("/symptoms"):
            return httpx.Response(self.symptoms_status, text=self.symptoms_body)
        if request.url.path == "/api/diagnosis":
            return httpx.Response(self.diagnosis_status, text=self.diagnosis_body)
        return httpx.Response(404, text="not found")

    def paths(self):
        return [(r.method, r.url.path) for r in self.requests]


def make_config(**overrides) -> ApiMedicConfig:
    values = {
        "base_url": BASE_URL,
        "auth_url": AUTH_URL,
        "username": "jane@example.com",
        "password": "secret-pass",
        "language": "en-gb",
        "mock_enabled": False,
    }
    values.update(overrides)
    return ApiMedicConfig(**values)


@pytest.fixture
def fake_upstream():
    return FakeApiMedic()


@pytest.fixture
def live_config():
    return make_config()


@pytest.fixture
def mock_config():
    return make_config(mock_enabled=True)


@pytest.fixture
def apimedic_client(fake_upstream, live_config):
    http = httpx.Client(transport=httpx.MockTransport(fake_upstream.handler))
    yield ApiMedicClient(live_config, http)
    http.close()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def make_client(engine):
    """Build a TestClient wired to the in-memory database and a fake upstream."""
    clients = []

    def _make(mock_enabled=True, upstream=None):
        settings = Settings(
            apimedic_base_url=BASE_URL,
            apimedic_auth_url=AUTH_URL,
            apimedic_username="jane@example.com",
            apimedic_password="secret-pass",
            apimedic_mock_enabled=mock_enabled,
            database_url="sqlite://",
        )
        upstream = upstream or FakeApiMedic()
        TestingSession = sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)

        def _get_db():
            db = TestingSession()
            try:
                yield db
            finally:
                db.close()

        def _get_client():
            with httpx.Client(transport=httpx.MockTransport(upstream.handler)) as http:
                yield ApiMedicClient(settings.apimedic, http)

        app = create_app(settings)
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_db] = _get_db
        app.dependency_overrides[get_apimedic_client] = _get_client
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
