"""Flask application serving the welcome form and its API."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request, send_from_directory
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from .config import Settings
from .models import EmailTemplate
from .providers import BaseEmailProvider, create_provider
from .sender import WelcomeSender
from .template import TemplateLoader

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

STATUS_MESSAGE = "Sistema de Boas-Vindas funcionando!"
NOT_FOUND_MESSAGE = "Rota não encontrada"
SERVER_ERROR_MESSAGE = "Erro interno do servidor"


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[BaseEmailProvider] = None,
    template: Optional[EmailTemplate] = None,
) -> Flask:
    """Factory function to create and configure the Flask app.

    The template is loaded once here and shared read-only by every request.

    Args:
        settings: Application settings (read from the environment if omitted)
        provider: Email provider (built from settings if omitted)
        template: Email template (loaded from settings if omitted)
    """
    if settings is None:
        settings = Settings()
    if provider is None:
        provider = create_provider(settings)
    if template is None:
        template = TemplateLoader(settings.templates_dir).load_template(settings.template_name)

    app = Flask(__name__, static_folder=str(STATIC_DIR), static_url_path="")
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    # Inject collaborators into the app
    app.settings = settings
    app.welcome_sender = WelcomeSender(provider, template, escape_html=settings.escape_html)

    @app.route("/", methods=["GET"])
    def index():
        """Serve the welcome form."""
        return send_from_directory(app.static_folder, "index.html")

    @app.route("/send-welcome", methods=["POST"])
    def send_welcome():
        """Validate the submission and send the welcome email."""
        outcome = app.welcome_sender.dispatch(_read_submission())
        body, status = outcome.to_response()
        return jsonify(body), status

    @app.route("/api/status", methods=["GET"])
    def api_status():
        """Health check endpoint."""
        return jsonify({
            "status": "online",
            "mensagem": STATUS_MESSAGE,
            "timestamp": _utc_timestamp(),
        }), 200

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = settings.cors_origin
        response.headers["Access-Control-Allow-Methods"] = "GET,HEAD,POST,OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = request.headers.get(
            "Access-Control-Request-Headers", "Content-Type"
        )
        if settings.cors_origin != "*":
            response.headers.add("Vary", "Origin")
        return response

    @app.errorhandler(NotFound)
    @app.errorhandler(MethodNotAllowed)
    def route_not_found(error):
        return jsonify({"sucesso": False, "mensagem": NOT_FOUND_MESSAGE}), 404

    @app.errorhandler(Exception)
    def unhandled_error(error):
        if isinstance(error, HTTPException):
            return error
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        return jsonify({"sucesso": False, "mensagem": SERVER_ERROR_MESSAGE}), 500

    return app


def _read_submission() -> dict:
    """Read ``{nome, email}`` from a JSON or form-encoded body."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form.to_dict()


def _utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
