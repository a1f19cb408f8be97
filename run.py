import logging
import os

from merch_api import create_app
from merch_api.config import DevConfig, ProdConfig

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

debug = os.getenv("DEBUG", "false").strip().lower() in {"1", "true", "yes", "on"}
app = create_app(DevConfig if debug else ProdConfig)

if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "5000"))
    app.run(host=host, port=port, debug=debug)
