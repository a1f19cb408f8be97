import math
import numbers

import stripe

from ..errors import ValidationError

REQUIRED_CART_FIELDS = ("id", "name", "image", "price", "quantity")


def _is_number(v) -> bool:
    return isinstance(v, numbers.Real) and not isinstance(v, bool)


def validate_cart_items(cart_items) -> list[dict]:
    """Keep complete cart items and type-check them.

    Items missing any required field (or holding a falsy value) are dropped.
    Raises ValidationError when nothing usable remains or a kept item has bad types.
    """
    if not isinstance(cart_items, list):
        raise ValidationError("Cart items must be provided.")

    items = [
        item for item in cart_items
        if isinstance(item, dict) and all(item.get(k) for k in REQUIRED_CART_FIELDS)
    ]
    if not items:
        raise ValidationError("No valid cart items provided.")

    for item in items:
        ok = (
            isinstance(item["id"], int) and not isinstance(item["id"], bool)
            and isinstance(item["name"], str)
            and isinstance(item["image"], str)
            and _is_number(item["price"])
            and _is_number(item["quantity"])
            and item["quantity"] > 0
        )
        if not ok:
            raise ValidationError("Invalid cart item data.")
    return items


def to_cents(price) -> int:
    # round half up on the float, like Math.round; 1.005 * 100 is 100.4999... so it gives 100
    return int(math.floor(price * 100 + 0.5))


def build_line_items(items: list[dict], currency: str = "usd") -> list[dict]:
    return [
        {
            "price_data": {
                "currency": currency,
                "product_data": {
                    "name": item["name"],
                    "images": [item["image"]],
                },
                "unit_amount": to_cents(item["price"]),
            },
            "quantity": item["quantity"],
        }
        for item in items
    ]


class CheckoutService:
    """Stripe Checkout sessions for the storefront cart."""

    def __init__(self, api_key: str | None = None, api_version: str = "2022-11-15",
                 frontend_url: str = ""):
        self.api_key = api_key
        self.api_version = api_version
        self.frontend_url = (frontend_url or "").rstrip("/")

    def init_app(self, app):
        self.api_key = app.config.get("STRIPE_SECRET_KEY")
        self.api_version = app.config.get("STRIPE_API_VERSION", self.api_version)
        self.frontend_url = (app.config.get("FRONTEND_URL") or "").rstrip("/")

    def create_session(self, items: list[dict]):
        return stripe.checkout.Session.create(
            api_key=self.api_key,
            stripe_version=self.api_version,
            payment_method_types=["card"],
            line_items=build_line_items(items),
            mode="payment",
            success_url=f"{self.frontend_url}/success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{self.frontend_url}/checkout",
        )

    def retrieve_session(self, session_id: str) -> dict:
        session = stripe.checkout.Session.retrieve(
            session_id, api_key=self.api_key, stripe_version=self.api_version
        )
        return session.to_dict()
