import pytest
from fastapi.testclient import TestClient

from fretdeck.auth.rate_limit import limiter
from fretdeck.config import Settings, get_settings
from fretdeck.main import create_application

from .utils import make_settings


@pytest.fixture()
def settings() -> Settings:
    return make_settings()


@pytest.fixture()
def app(settings):
    application = create_application()
    application.dependency_overrides[get_settings] = lambda: settings
    limiter.reset()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app, follow_redirects=False)
