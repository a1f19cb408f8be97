# merch_api/extensions.py
from flask_cors import CORS

from .services.checkout import CheckoutService
from .services.image_store import CloudinaryImageStore
from .services.printful_client import PrintfulClient

# CORS is a real Flask extension (keeps init_app)
cors = CORS()

# Vendor clients; create_app() fills in credentials from app.config
image_store = CloudinaryImageStore()
printful_client = PrintfulClient()
checkout_service = CheckoutService()
