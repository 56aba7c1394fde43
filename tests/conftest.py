import pytest
from fastapi.testclient import TestClient

from shortener.core.rate_limit import limiter
from shortener.core.service_manager import get_metrics_service, get_shortener_service
from shortener.core.validators import URLValidator
from shortener.main import app
from shortener.services.metrics_service import DomainMetricsService
from shortener.services.url_service import ShortenerService
from shortener.storage import InMemoryDomainRankingStorage, InMemoryURLStorage

BASE_URL = "https://sho.rt"


@pytest.fixture
def validator():
    return URLValidator(
        blocked_domains=["example.com", "malicious.com"],
        self_domains=["localhost", "127.0.0.1", "sho.rt"],
        enforce_https=True,
    )


@pytest.fixture
def url_storage():
    return InMemoryURLStorage()


@pytest.fixture
def ranking_storage():
    return InMemoryDomainRankingStorage()


@pytest.fixture
def metrics_service(ranking_storage):
    return DomainMetricsService(ranking_storage)


@pytest.fixture
def shortener_service(url_storage, metrics_service, validator):
    """Service applying ranking increments inline, so counts are visible immediately."""
    return ShortenerService(
        url_storage=url_storage,
        metrics_service=metrics_service,
        validator=validator,
        base_url=BASE_URL,
    )


@pytest.fixture
def client(shortener_service, metrics_service):
    """Test client wired to fresh in-memory services with rate limiting off."""
    app.dependency_overrides[get_shortener_service] = lambda: shortener_service
    app.dependency_overrides[get_metrics_service] = lambda: metrics_service
    limiter.enabled = False
    try:
        yield TestClient(app)
    finally:
        limiter.enabled = True
        app.dependency_overrides.clear()
