import os

import httpx
from dotenv import load_dotenv

PRINTFUL_API_BASE = "https://api.printful.com"


class PrintfulClient:
    def __init__(self, api_token: str | None = None, store_id: str | None = None, timeout: float = 60):
        load_dotenv()  # ensure .env is loaded
        self.timeout = timeout
        self.configure(api_token or os.getenv("PRINTFUL_API_KEY"), store_id or os.getenv("PRINTFUL_STORE_ID"))

    def init_app(self, app):
        self.configure(app.config.get("PRINTFUL_API_KEY"), app.config.get("PRINTFUL_STORE_ID"))

    def configure(self, api_token: str | None, store_id: str | None):
        self.api_token = api_token
        self.store_id = store_id
        self.headers = {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }
        if self.store_id:
            self.headers["X-PF-Store-Id"] = str(self.store_id)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{PRINTFUL_API_BASE}{path}"
        with httpx.Client(timeout=self.timeout) as client:
            r = client.request(method, url, headers=self.headers, **kwargs)
            try:
                r.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise httpx.HTTPStatusError(f"{e} — body: {r.text}", request=e.request, response=e.response)
            return r

    def list_catalog_products(self) -> list[dict]:
        """Catalog products (GET /products); returns the ``result`` list."""
        data = self._request("GET", "/products").json()
        return data.get("result") or []

    def list_store_products(self) -> dict:
        """Sync products of the configured store, raw response JSON."""
        return self._request("GET", "/store/products").json()

    def add_product_to_store(self, product_data: dict) -> dict:
        """Create a sync product. product_data holds ``sync_product`` and ``sync_variants``."""
        return self._request("POST", "/store/products", json=product_data).json()

    def create_order(self, order_data: dict) -> dict:
        """Create an order; order_data holds ``recipient`` and ``items``."""
        return self._request("POST", "/orders", json=order_data).json()

    def upload_file_by_url(self, *, url: str, file_name: str | None = None) -> dict:
        """Add a file to the Printful file library by URL. Response is ``{code, result, extra}``."""
        payload = {"url": url}
        if file_name:
            payload["filename"] = file_name
        return self._request("POST", "/files", json=payload).json()

    def get_file(self, file_id: str | int) -> dict:
        return self._request("GET", f"/files/{file_id}").json()


def build_sync_product(*, title: str, description: str, image_url: str, variant_id) -> dict:
    """Payload for a single-variant sync product printed with one file."""
    return {
        "sync_product": {
            "name": title,
            "thumbnail": image_url,
            "description": description,
        },
        "sync_variants": [
            {
                "variant_id": variant_id,
                "files": [{"url": image_url}],
            }
        ],
    }
