import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_PER_MINUTE"] = "1000"
os.environ["MAX_UPLOAD_SIZE_MB"] = "1"

from chatlens.core.config import get_settings
from chatlens.main import create_app

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def whatsapp_fixture() -> Path:
    return FIXTURES_DIR / "whatsapp_chat.txt"


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
