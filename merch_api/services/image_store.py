import logging
import uuid
from io import BytesIO

import cloudinary.exceptions
import cloudinary.uploader
import httpx

from ..errors import FetchError, StoreError

log = logging.getLogger(__name__)


class CloudinaryImageStore:
    """Reads images from URLs and hosts new ones on Cloudinary."""

    def __init__(self, cloud_name: str | None = None, api_key: str | None = None,
                 api_secret: str | None = None, timeout: float = 30.0):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    def init_app(self, app):
        self.cloud_name = app.config.get("CLOUDINARY_CLOUD_NAME")
        self.api_key = app.config.get("CLOUDINARY_API_KEY")
        self.api_secret = app.config.get("CLOUDINARY_API_SECRET")
        self.timeout = app.config.get("FETCH_TIMEOUT", self.timeout)

    def fetch(self, url: str | None) -> bytes:
        """GET the bytes behind an image URL. Any failure raises FetchError."""
        if not isinstance(url, str) or not url:
            raise FetchError("no image URL given")
        try:
            with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                r = client.get(url)
                r.raise_for_status()
                return r.content
        except httpx.HTTPStatusError as e:
            raise FetchError(f"{url} returned HTTP {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise FetchError(f"timed out fetching {url}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"could not fetch {url}: {e}") from e

    def store(self, data: bytes, folder: str, public_id: str | None = None) -> str:
        """Upload image bytes into ``folder`` and return the secure URL."""
        public_id = public_id or str(uuid.uuid4())
        try:
            result = cloudinary.uploader.upload(
                BytesIO(data),
                folder=folder,
                public_id=public_id,
                resource_type="image",
                overwrite=True,
                format="jpg",
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
            )
        except cloudinary.exceptions.Error as e:
            raise StoreError(f"Cloudinary upload failed: {e}") from e

        secure_url = (result or {}).get("secure_url")
        if not secure_url:
            raise StoreError(f"Cloudinary response missing 'secure_url' for {folder}/{public_id}")
        log.info("Uploaded %s/%s to Cloudinary", folder, public_id)
        return secure_url
