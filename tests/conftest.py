import pytest

from app.core.config import settings
from app.core.rate_limiter import rate_limiter


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Cada teste começa com buckets cheios."""
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def assets_dir(tmp_path, monkeypatch):
    """Diretório de assets temporário apontado pelas settings."""
    monkeypatch.setattr(settings, "ASSETS_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def fast_timeouts(monkeypatch):
    monkeypatch.setattr(settings, "NETWORK_IDLE_TIMEOUT_MS", 10)
    monkeypatch.setattr(settings, "ACTION_TIMEOUT_MS", 10)
