import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


class Config:
    BASE_DIR = Path(__file__).resolve().parent.parent

    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")
    PRINTFUL_API_KEY = os.getenv("PRINTFUL_API_KEY")
    PRINTFUL_STORE_ID = os.getenv("PRINTFUL_STORE_ID", "370775811")
    STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY")
    STRIPE_API_VERSION = os.getenv("STRIPE_API_VERSION", "2022-11-15")

    FRONTEND_URL = os.getenv("FRONTEND_URL", "https://front-end-face-swap.vercel.app")
    CORS_ORIGINS = ["http://localhost:3000", FRONTEND_URL]

    FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "30"))
    MAX_UPLOAD_BYTES = 10 * 1024 * 1024
    ALLOWED_MIME_TYPES = {"image/jpeg", "image/png", "image/gif"}

    # product type -> overlay box on the base image, in pixels
    MOCKUP_PLACEMENTS = {
        "T-Shirt": {"x": 100, "y": 150, "width": 300, "height": 300},
        "Mug": {"x": 50, "y": 50, "width": 200, "height": 200},
        "Phone Case": {"x": 80, "y": 100, "width": 240, "height": 240},
        "Poster": {"x": 150, "y": 200, "width": 500, "height": 500},
        "Hoodie": {"x": 100, "y": 150, "width": 300, "height": 300},
        "Tote Bag": {"x": 80, "y": 100, "width": 240, "height": 240},
    }
    MOCKUP_PLACEMENTS_FILE = os.getenv("MOCKUP_PLACEMENTS_FILE")


class DevConfig(Config):
    DEBUG = True


class ProdConfig(Config):
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    FRONTEND_URL = "http://frontend.test"
    CORS_ORIGINS = ["http://localhost:3000", FRONTEND_URL]
    MOCKUP_PLACEMENTS_FILE = None
