import uuid

from flask import Blueprint, current_app, jsonify, request

from ..errors import SourceFetchError, ValidationError
from ..extensions import image_store
from ..utils.mockups import ProductRequest, generate_mockups

bp = Blueprint("mockups_api", __name__)

MOCKUPS_FOLDER = "mockups"


def _parse_mockup_request(payload) -> tuple[str, list[ProductRequest]]:
    payload = payload if isinstance(payload, dict) else {}
    result_url = payload.get("resultImageUrl")
    products = payload.get("products")
    if not result_url or not isinstance(result_url, str) or not isinstance(products, list):
        raise ValidationError("resultImageUrl and products array must be provided.")
    if not all(isinstance(p, dict) for p in products):
        raise ValidationError("Each product must be an object with id, name and baseImageUrl.")
    return result_url, [ProductRequest.from_payload(p) for p in products]


@bp.post("/generateMockups")
def generate_mockups_route():
    """Overlay the result image onto each product's base image and host the composites."""
    result_url, products = _parse_mockup_request(request.get_json(silent=True))

    try:
        composites = generate_mockups(
            result_url,
            products,
            fetch_image=image_store.fetch,
            placements=current_app.config["MOCKUP_PLACEMENTS"],
        )

        mockup_urls = []
        for c in composites:
            url = image_store.store(c.image_bytes, MOCKUPS_FOLDER, str(uuid.uuid4()))
            mockup_urls.append({
                "productId": c.product_id,
                "productName": c.product_name,
                "mockupImageUrl": url,
            })
    except SourceFetchError:
        raise
    except Exception as e:
        current_app.logger.exception("Error generating mockups")
        return jsonify({"message": "Error generating mockups.", "error": str(e)}), 500

    current_app.logger.info("Generated %d of %d mockups", len(mockup_urls), len(products))
    return jsonify({
        "message": "Mockups generated successfully!",
        "mockupUrls": mockup_urls,
    })
