from flask import Blueprint, current_app, jsonify, request

from ..extensions import checkout_service
from ..services.checkout import validate_cart_items

bp = Blueprint("checkout_api", __name__)


@bp.post("/create-checkout-session")
def create_checkout_session():
    body = request.get_json(silent=True)
    cart_items = body.get("cartItems") if isinstance(body, dict) else None
    items = validate_cart_items(cart_items)

    try:
        session = checkout_service.create_session(items)
    except Exception as e:
        current_app.logger.exception("Error creating Stripe Checkout Session")
        return jsonify({"message": "Internal server error.", "error": str(e)}), 500
    return jsonify({"url": session.url})


@bp.get("/checkout-session")
def get_checkout_session():
    session_id = request.args.get("session_id")
    if not session_id:
        return jsonify({"message": "Session ID is required."}), 400

    try:
        session = checkout_service.retrieve_session(session_id)
    except Exception as e:
        current_app.logger.exception("Error retrieving Stripe Checkout Session")
        return jsonify({"message": "Internal server error.", "error": str(e)}), 500
    return jsonify(session)
