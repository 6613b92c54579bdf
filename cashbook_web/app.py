"""Flask application serving the tracker page and its JSON API."""

from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Flask, jsonify, redirect, render_template, request, url_for
from flask_cors import CORS

from cashbook.config import Settings
from cashbook.exceptions import PersistenceError, ValidationError
from cashbook.formatting import format_currency
from cashbook.services import TransactionService
from cashbook.session import TrackerSession
from cashbook.storage import TransactionStore, build_store


def create_app(
    store: Optional[TransactionStore] = None,
    settings: Optional[Settings] = None,
) -> Flask:
    app = Flask(__name__)
    settings = settings or Settings.from_env()

    if settings.is_development:
        CORS(app, resources={r"/api/*": {"origins": "*"}}, supports_credentials=True)
    elif settings.allowed_origins:
        CORS(app, resources={r"/api/*": {"origins": settings.allowed_origins}}, supports_credentials=True)
    else:
        CORS(app, resources={r"/api/*": {}})

    # One store per process, built at start-up and shared by every request.
    store = store or build_store(settings)
    service = TransactionService(store)

    app.add_template_filter(format_currency, "currency")

    def _success(payload: Any, status: int = 200):
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str, **extra: Any):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc), **extra}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error", fields=exc.errors)

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc: PersistenceError):
        return _handle_error(exc, 502, "Persistence error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    @app.get("/")
    def index():
        tracker = TrackerSession(service)
        tracker.refresh()
        return render_template("index.html", tracker=tracker)

    @app.post("/")
    def submit():
        tracker = TrackerSession(
            service,
            amount=request.form.get("amount", ""),
            description=request.form.get("description", ""),
            type=request.form.get("type", "income"),
        )
        if tracker.submit():
            # Post/redirect/get.
            return redirect(url_for("index"))
        # Failed submissions still show the current history.
        tracker.refresh()
        status = 400 if tracker.errors else 200
        return render_template("index.html", tracker=tracker), status

    @app.get("/api/transactions")
    def list_transactions():
        grouped = service.history()
        return _success({"items": [group.to_dict() for group in grouped]})

    @app.post("/api/transactions")
    def create_transaction():
        payload = _json_body()
        transaction = service.add(
            payload.get("amount"),
            payload.get("description"),
            payload.get("type"),
        )
        return _success(transaction.to_dict(), 201)

    return app
