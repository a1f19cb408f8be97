import httpx
from flask import Blueprint, current_app, jsonify, request

from ..extensions import printful_client as printful
from ..services.printful_client import build_sync_product

bp = Blueprint("printful_api", __name__)

FEATURED_PRODUCTS_LIMIT = 6


def _error_detail(e: Exception):
    """Vendor JSON body when the error carries a response, else the message."""
    if isinstance(e, httpx.HTTPStatusError):
        try:
            return e.response.json()
        except ValueError:
            return e.response.text or str(e)
    return str(e)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@bp.get("/fetchPrintfulProducts")
def fetch_printful_products():
    """A handful of catalog products for the storefront picker."""
    try:
        products = printful.list_catalog_products()
    except httpx.HTTPStatusError as e:
        current_app.logger.warning("Error fetching Printful products: %s", e.response.reason_phrase)
        return jsonify({"message": "Error fetching Printful products."}), e.response.status_code
    except Exception as e:
        current_app.logger.exception("Error in /fetchPrintfulProducts")
        return jsonify({"message": "Internal server error.", "error": str(e)}), 500

    selected = [
        {"id": p.get("id"), "name": p.get("title"), "image": p.get("image")}
        for p in products[:FEATURED_PRODUCTS_LIMIT]
    ]
    current_app.logger.info("Selected %d Printful products", len(selected))
    return jsonify({
        "message": "Printful products fetched successfully!",
        "products": selected,
    })


@bp.get("/printful-products")
def printful_store_products():
    try:
        return jsonify(printful.list_store_products())
    except Exception as e:
        current_app.logger.exception("Error fetching Printful products")
        return jsonify({"message": "Error fetching Printful products", "error": _error_detail(e)}), 500


@bp.post("/add-to-store")
def add_to_store():
    data = _json_body()
    image_url = data.get("imageUrl")
    product_type = data.get("productType")
    title = data.get("title")
    description = data.get("description")

    if not printful.store_id:
        return jsonify({"message": "Store ID not configured in server."}), 500
    if not image_url or not product_type or not title or not description:
        return jsonify({"message": "Missing required fields."}), 400

    product_data = build_sync_product(
        title=title,
        description=description,
        image_url=image_url,
        variant_id=product_type,
    )
    try:
        result = printful.add_product_to_store(product_data)
    except Exception as e:
        current_app.logger.exception("Error adding product to store")
        return jsonify({"message": "Error adding product to store", "error": _error_detail(e)}), 500
    return jsonify(result)


@bp.post("/place-order")
def place_order():
    data = _json_body()
    recipient = data.get("recipient")
    items = data.get("items")
    if not isinstance(recipient, dict) or not isinstance(items, list) or not items:
        return jsonify({"message": "recipient and a non-empty items array must be provided."}), 400

    try:
        result = printful.create_order({"recipient": recipient, "items": items})
    except Exception as e:
        current_app.logger.exception("Error placing order")
        return jsonify({"message": "Error placing order", "error": _error_detail(e)}), 500
    return jsonify(result)


@bp.post("/files")
def upload_file():
    """Add a hosted image to the Printful file library."""
    data = _json_body()
    file_url = data.get("fileUrl")
    if not file_url:
        return jsonify({"message": "fileUrl is required."}), 400

    try:
        result = printful.upload_file_by_url(url=file_url, file_name=data.get("fileName"))
    except Exception as e:
        current_app.logger.exception("Error uploading file to Printful")
        return jsonify({"message": "Error uploading file to Printful.", "error": _error_detail(e)}), 500

    return jsonify({
        "message": "File uploaded to Printful successfully!",
        "data": result.get("result"),
    })


@bp.get("/files/<file_id>")
def get_file(file_id):
    try:
        return jsonify(printful.get_file(file_id))
    except Exception as e:
        current_app.logger.exception("Error retrieving file %s from Printful", file_id)
        return jsonify({"message": "Error retrieving file from Printful", "error": _error_detail(e)}), 500
