"""
Shared test fixtures and configuration for the merch API tests.
"""
from io import BytesIO

import pytest
from flask import Flask
from flask.testing import FlaskClient
from PIL import Image

from merch_api import create_app
from merch_api.config import TestConfig
from merch_api.errors import FetchError


@pytest.fixture(scope="session")
def app() -> Flask:
    """Create and configure a test Flask application instance."""
    app = create_app(TestConfig)
    yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def placements(app: Flask):
    """The frozen placement table the app was built with."""
    return app.config["MOCKUP_PLACEMENTS"]


@pytest.fixture
def make_png():
    """Factory for in-memory PNG images."""
    def _make(width: int = 100, height: int = 100, color: tuple = (255, 0, 0, 255)) -> bytes:
        img = Image.new("RGBA", (width, height), color)
        buf = BytesIO()
        img.save(buf, "PNG")
        return buf.getvalue()
    return _make


@pytest.fixture
def make_fetcher():
    """Factory for a fake image fetcher backed by a url -> bytes dict.

    Unknown URLs raise FetchError like a 404 would. Every call is recorded in ``.calls``.
    """
    def _make(images: dict):
        calls = []

        def fetch(url):
            calls.append(url)
            if url not in images:
                raise FetchError(f"{url} returned HTTP 404")
            return images[url]

        fetch.calls = calls
        return fetch
    return _make


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables for testing."""
    env_vars = {
        "PRINTFUL_API_KEY": "test_printful_token",
        "PRINTFUL_STORE_ID": "12345",
        "CLOUDINARY_CLOUD_NAME": "test-cloud",
        "CLOUDINARY_API_KEY": "test_cloudinary_key",
        "CLOUDINARY_API_SECRET": "test_cloudinary_secret",
        "STRIPE_SECRET_KEY": "sk_test_123",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def printful_client(mock_env_vars):
    """Create a PrintfulClient instance for testing."""
    from merch_api.services.printful_client import PrintfulClient
    return PrintfulClient(
        api_token=mock_env_vars["PRINTFUL_API_KEY"],
        store_id=mock_env_vars["PRINTFUL_STORE_ID"],
    )
