import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from weathergate.api.dependencies import get_upstream
from weathergate.api.main import app
from weathergate.config import settings
from weathergate.services.cache import weather_cache
from weathergate.services.metrics import metrics
from weathergate.services.rate_limiter import rate_limiter
from weathergate.services.upstream import UpstreamClient

LONDON_PAYLOAD = {
    "coord": {"lon": -0.1257, "lat": 51.5085},
    "weather": [
        {"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"},
        {"id": 701, "main": "Mist", "description": "mist", "icon": "50d"},
    ],
    "base": "stations",
    "main": {
        "temp": 11.4,
        "feels_like": 10.6,
        "temp_min": 10.2,
        "temp_max": 12.5,
        "pressure": 1012,
        "humidity": 81,
        "sea_level": 1012,
        "grnd_level": 1008,
    },
    "visibility": 10000,
    "wind": {"speed": 4.63, "deg": 240},
    "clouds": {"all": 75},
    "dt": 1729339200,
    "sys": {"type": 2, "id": 2075535, "country": "GB", "sunrise": 1729319461, "sunset": 1729356712},
    "timezone": 3600,
    "id": 2643743,
    "name": "London",
    "cod": 200,
}


class FakeProvider:
    """Records outbound requests and answers them with *handler*."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        return self._handler(request)


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(autouse=True)
def _reset_shared_state():
    """Reset the rate limiter, cache and metrics between every test."""
    rate_limiter.clear()
    weather_cache.clear()
    metrics.reset()
    yield
    rate_limiter.clear()
    weather_cache.clear()
    app.dependency_overrides.clear()


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(settings, "openweather_api_key", "secret-test-key")
    return "secret-test-key"


@pytest.fixture
def provider():
    """Install a fake provider: ``provider(handler, timeout=...)``."""

    def install(handler, timeout: float = 5.0) -> FakeProvider:
        fake = FakeProvider(handler)
        upstream = UpstreamClient(timeout=timeout, transport=httpx.MockTransport(fake))
        app.dependency_overrides[get_upstream] = lambda: upstream
        return fake

    return install
