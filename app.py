"""Application factory."""

import json
import os
import uuid
from pathlib import Path

from flask import Flask, g, jsonify, request, send_from_directory
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import Config
from errors import AuthError
from models import db
from routes.auth import auth_bp
from utils.mail import MailSender, MailSettings

migrate = Migrate()
jwt = JWTManager()


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    MailSender(MailSettings.from_config(app.config)).init_app(app)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Ensure file directories exist
    avatar_dir = Path(app.config["PUBLIC_DIR"]) / "avatars"
    os.makedirs(app.config["TEMP_DIR"], exist_ok=True)
    os.makedirs(avatar_dir, exist_ok=True)

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/api/auth")

    @app.route("/avatars/<path:filename>", methods=["GET"])
    def avatar_file(filename: str):
        return send_from_directory(avatar_dir, filename)

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    # Errors
    _register_error_handlers(app)
    _register_jwt_handlers()

    return app


def _error_response(error: HTTPException):
    request_id = g.get("request_id") or str(uuid.uuid4())
    response = error.get_response()
    payload = {
        "error": getattr(error, "name", "Error"),
        "detail": error.description,
        "request_id": request_id,
    }
    response.data = json.dumps(payload)
    response.content_type = "application/json"
    response.headers.setdefault("X-Request-ID", request_id)
    return response


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        return _error_response(error)

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):
        request_id = g.get("request_id") or str(uuid.uuid4())
        app.logger.exception("Unhandled application error", exc_info=error)
        payload = {
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred.",
            "request_id": request_id,
        }
        response = jsonify(payload)
        response.status_code = 500
        response.headers.setdefault("X-Request-ID", request_id)
        return response


def _register_jwt_handlers() -> None:
    """Render every bearer token failure as a 401 in the shared error shape."""

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _error_response(AuthError("Not authorized"))

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return _error_response(AuthError("Not authorized"))

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return _error_response(AuthError("Token expired"))


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 3000)))
