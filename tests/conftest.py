import httpx
import pytest
from httpx import ASGITransport


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("CRAWL_DELAY", "0")
    monkeypatch.setenv("HEADLESS_ENABLED", "false")
    monkeypatch.setenv("MAX_JOBS", "50")


@pytest.fixture
async def client(mock_env):
    from importer.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c
