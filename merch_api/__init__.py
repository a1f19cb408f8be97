from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .config import Config
from .errors import SourceFetchError, ValidationError
from .extensions import checkout_service, cors, image_store, printful_client
from .utils.mockups import load_placements, load_placements_file


def create_app(config_class: type[Config] = Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Placement table is frozen once per process
    placements_file = app.config.get("MOCKUP_PLACEMENTS_FILE")
    if placements_file:
        app.config["MOCKUP_PLACEMENTS"] = load_placements_file(placements_file)
    else:
        app.config["MOCKUP_PLACEMENTS"] = load_placements(app.config["MOCKUP_PLACEMENTS"])

    # Extensions
    cors.init_app(
        app,
        origins=app.config["CORS_ORIGINS"],
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    image_store.init_app(app)
    printful_client.init_app(app)
    checkout_service.init_app(app)

    # Blueprints
    from .routes.uploads_api import bp as uploads_api
    from .routes.mockups_api import bp as mockups_api
    from .routes.printful_api import bp as printful_api
    from .routes.checkout_api import bp as checkout_api

    app.register_blueprint(uploads_api)
    app.register_blueprint(mockups_api)
    app.register_blueprint(printful_api)
    app.register_blueprint(checkout_api)

    register_error_handlers(app)

    return app


def register_error_handlers(app: Flask):
    @app.errorhandler(ValidationError)
    @app.errorhandler(SourceFetchError)
    def _bad_request(e):
        return jsonify({"message": e.message}), 400

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def _unhandled(e):
        app.logger.exception("Unhandled error")
        return jsonify({"message": "An unexpected error occurred.", "error": str(e)}), 500
