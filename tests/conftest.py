import io
import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from PIL import Image

from ocr_engine import OcrEngine

MT5_SCREENSHOT_TEXT = "GBPUSD SELL 1.1\n1.35119 → 1.35131\nS/L: 1.35346\nT/P: 1.34535\n2025.12.24 09:33:32"


@pytest.fixture(scope="function", autouse=True)
def setup_for_every_test(monkeypatch, tmp_path):
    # Every test gets its own event log database file
    monkeypatch.setenv("DATABASE_FILE", str(tmp_path / "test_app_db.sqlite"))

    from db_setup import setup_database
    setup_database()

    yield


@pytest.fixture
def test_app_client():
    """Provides a TestClient to the app; the lifespan runs setup and startup logging."""
    from main import app
    with TestClient(app) as client:
        yield client


@pytest.fixture
def fake_ocr_engine():
    """OCR engine stand-in that 'recognizes' the MT5 fixture text without Tesseract."""
    engine = AsyncMock(spec=OcrEngine)
    engine.recognize.return_value = MT5_SCREENSHOT_TEXT
    return engine


@pytest.fixture
def png_bytes():
    out = io.BytesIO()
    Image.new("RGB", (10, 10), "white").save(out, format="PNG")
    return out.getvalue()
