"""Flask application serving the contact API and the operator pages."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from core.errors import InternalError, PortfolioError
from core.gate import COOKIE_MAX_AGE, COOKIE_NAME, AccessGate
from core.intake import IntakeService
from core.logsink import LogSink
from core.settings import Settings
from core.store import JsonFileStore, SubmissionStore
from core.types import Credential

from .pages import LOGIN_PAGE, RESPONSES_PAGE, STYLESHEET


logger = logging.getLogger(__name__)


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _html(body: str) -> Response:
    return Response(body, mimetype="text/html")


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[SubmissionStore] = None,
    sink: Optional[LogSink] = None,
) -> Flask:
    """Build the application; ``store`` and ``sink`` can be injected for tests."""

    settings = settings or Settings.from_env()
    store = store if store is not None else JsonFileStore(settings.submissions_file)
    sink = sink if sink is not None else LogSink(settings.log_file)

    intake = IntakeService(store, sink)
    gate = AccessGate(Credential.from_value(settings.admin_key), store, sink)

    app = Flask(__name__, static_folder=None)
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    @app.errorhandler(PortfolioError)
    def handle_portfolio_error(exc: PortfolioError):
        if exc.status_code >= 500:
            logger.error("%s (%s)", exc.message, exc.detail or "no detail", exc_info=exc)
        return jsonify({"error": exc.public_message}), exc.status_code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        error = InternalError(detail=repr(exc))
        return jsonify({"error": error.public_message}), error.status_code

    @app.route("/api/contact", methods=["POST"])
    def contact():
        intake.submit(_json_body())
        return jsonify(intake.acknowledgement()), 201

    @app.route("/api/submissions", methods=["GET"])
    def submissions():
        key = request.args.get("key") or _json_body().get("key")
        records = gate.list_submissions(
            key=key if isinstance(key, str) else None,
            token=request.cookies.get(COOKIE_NAME),
            remote_addr=request.remote_addr,
        )
        return jsonify({"submissions": [record.to_dict() for record in records]})

    @app.route("/login", methods=["POST"])
    def login():
        key = _json_body().get("key")
        token = gate.login(key if isinstance(key, str) else None, request.remote_addr)
        response = jsonify({"message": "ok"})
        response.set_cookie(
            COOKIE_NAME,
            token,
            max_age=COOKIE_MAX_AGE,
            httponly=True,
            samesite="Lax",
            path="/",
        )
        return response

    @app.route("/logout", methods=["POST"])
    def logout():
        gate.logout(request.remote_addr)
        response = jsonify({"message": "ok"})
        response.delete_cookie(COOKIE_NAME, path="/", httponly=True, samesite="Lax")
        return response

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "pid": os.getpid(), "port": settings.port})

    @app.route("/login", methods=["GET"])
    def login_page():
        return _html(LOGIN_PAGE)

    @app.route("/responses", methods=["GET"])
    def responses_page():
        return _html(RESPONSES_PAGE)

    @app.route("/server/index.css", methods=["GET"])
    def stylesheet():
        return Response(STYLESHEET, mimetype="text/css")

    static_dir = settings.static_dir
    if static_dir is not None and Path(static_dir).is_dir():
        root = str(Path(static_dir).resolve())

        @app.route("/")
        def index():
            return send_from_directory(root, "index.html")

        @app.route("/<path:path>")
        def serve_static(path: str):
            return send_from_directory(root, path)

    return app
