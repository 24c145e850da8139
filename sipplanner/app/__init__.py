"""Application factory and app-wide configuration."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from sipplanner.app.api.routes import api_bp
from sipplanner.config import load_config
from sipplanner.storage import Store


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance; ``config`` overrides environment settings."""
    app = Flask(__name__)
    app.config.from_mapping(load_config())
    if config:
        app.config.from_mapping(config)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    store = Store(app.config["DB_PATH"])
    store.init_db()
    app.extensions["sipplanner.store"] = store

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
