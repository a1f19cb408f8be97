"""
Unit tests for the Cloudinary-backed image store.
"""
import cloudinary.exceptions
import httpx
import pytest
import respx

from merch_api.errors import FetchError, StoreError
from merch_api.services.image_store import CloudinaryImageStore


@pytest.fixture
def store():
    return CloudinaryImageStore(
        cloud_name="test-cloud",
        api_key="test_cloudinary_key",
        api_secret="test_cloudinary_secret",
        timeout=5,
    )


@pytest.mark.unit
class TestImageStoreFetch:
    """Tests for reading image bytes from URLs."""

    @respx.mock
    def test_fetch_returns_bytes(self, store):
        respx.get("https://img.test/a.png").mock(return_value=httpx.Response(200, content=b"PNGDATA"))

        assert store.fetch("https://img.test/a.png") == b"PNGDATA"

    @respx.mock
    def test_fetch_404_raises(self, store):
        respx.get("https://img.test/missing.png").mock(return_value=httpx.Response(404))

        with pytest.raises(FetchError) as exc:
            store.fetch("https://img.test/missing.png")
        assert "404" in exc.value.message

    @respx.mock
    def test_fetch_timeout_raises(self, store):
        respx.get("https://img.test/slow.png").mock(side_effect=httpx.ConnectTimeout("timed out"))

        with pytest.raises(FetchError):
            store.fetch("https://img.test/slow.png")

    @respx.mock
    def test_fetch_connection_error_raises(self, store):
        respx.get("https://img.test/down.png").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(FetchError):
            store.fetch("https://img.test/down.png")

    @pytest.mark.parametrize("url", [None, "", 42])
    def test_fetch_without_url_raises(self, store, url):
        with pytest.raises(FetchError):
            store.fetch(url)

    def test_fetch_non_http_url_raises(self, store):
        with pytest.raises(FetchError):
            store.fetch("ftp://img.test/a.png")


@pytest.mark.unit
class TestImageStoreUpload:
    """Tests for hosting bytes on Cloudinary."""

    def test_store_returns_secure_url(self, store, mocker):
        upload = mocker.patch(
            "merch_api.services.image_store.cloudinary.uploader.upload",
            return_value={"secure_url": "https://res.cloudinary.com/test-cloud/mockups/abc.jpg"},
        )

        url = store.store(b"bytes", "mockups", "abc")

        assert url == "https://res.cloudinary.com/test-cloud/mockups/abc.jpg"
        kwargs = upload.call_args.kwargs
        assert kwargs["folder"] == "mockups"
        assert kwargs["public_id"] == "abc"
        assert kwargs["format"] == "jpg"
        assert kwargs["overwrite"] is True
        assert kwargs["resource_type"] == "image"
        assert kwargs["cloud_name"] == "test-cloud"
        assert upload.call_args.args[0].read() == b"bytes"

    def test_store_generates_public_id(self, store, mocker):
        upload = mocker.patch(
            "merch_api.services.image_store.cloudinary.uploader.upload",
            return_value={"secure_url": "https://res.cloudinary.com/x.jpg"},
        )

        store.store(b"bytes", "swap_images")

        assert upload.call_args.kwargs["public_id"]

    def test_store_missing_url_raises(self, store, mocker):
        mocker.patch("merch_api.services.image_store.cloudinary.uploader.upload", return_value={})

        with pytest.raises(StoreError):
            store.store(b"bytes", "mockups", "abc")

    def test_store_vendor_error_raises(self, store, mocker):
        mocker.patch(
            "merch_api.services.image_store.cloudinary.uploader.upload",
            side_effect=cloudinary.exceptions.Error("Invalid API key"),
        )

        with pytest.raises(StoreError) as exc:
            store.store(b"bytes", "mockups", "abc")
        assert "Invalid API key" in exc.value.message

    def test_init_app_reads_config(self, app):
        s = CloudinaryImageStore()
        s.init_app(app)

        assert s.timeout == app.config["FETCH_TIMEOUT"]

    @respx.mock
    def test_fetch_uses_configured_timeout(self, app, monkeypatch):
        monkeypatch.setitem(app.config, "FETCH_TIMEOUT", 7.5)
        s = CloudinaryImageStore()
        s.init_app(app)
        respx.get("https://img.test/a.png").mock(return_value=httpx.Response(200, content=b"PNGDATA"))

        s.fetch("https://img.test/a.png")

        timeout = respx.calls.last.request.extensions["timeout"]
        assert timeout["connect"] == 7.5
        assert timeout["read"] == 7.5
