import pytest
from fastapi.testclient import TestClient

from temporal_cache.api.deps import get_settings
from temporal_cache.api.main import app
from temporal_cache.core.config.settings import settings_from_mapping
from temporal_cache.core.harmonization.config import HarmonizationConfig
from temporal_cache.core.observability.metrics import reset_metrics


@pytest.fixture(autouse=True)
def _clean_state():
    reset_metrics()
    get_settings.cache_clear()
    yield
    app.dependency_overrides.clear()
    get_settings.cache_clear()


@pytest.fixture()
def harmonization_config():
    return HarmonizationConfig.from_slot_strings(["00:00", "06:00", "12:00", "18:00"], tolerance_seconds=3600)


@pytest.fixture()
def use_settings():
    """Install settings built from a raw mapping for API tests."""

    def _install(raw):
        settings = settings_from_mapping(raw)
        app.dependency_overrides[get_settings] = lambda: settings
        return settings

    return _install


@pytest.fixture()
def client():
    return TestClient(app)
