"""Application factory for the Page Tools service."""

from __future__ import annotations

import importlib
from pathlib import Path

import yaml
from flask import Flask

from common.errors import (
    AppError,
    NotFoundAppError,
    ValidationAppError,
    ensure_app_error,
)
from common.logging import configure_level, get_logger, install_request_logging
from common.responses import fail, ok

from . import config as config_module
from .blueprints import discover_plugins, register_plugin_blueprints

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yml"

logger = get_logger()


def _load_yaml_config(path: Path = CONFIG_PATH) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _load_manifests(plugin_settings: dict) -> list[dict[str, str]]:
    manifests: list[dict[str, str]] = []
    for dotted in discover_plugins():
        module = importlib.import_module(dotted)
        manifest = getattr(module, "manifest", None)
        if not manifest:
            continue
        entry = dict(manifest)
        blueprint = entry.get("blueprint")
        plugin_config = plugin_settings.get(blueprint, {}) if blueprint else {}
        for key in ("docs", "summary"):
            if plugin_config.get(key):
                entry[key] = plugin_config[key]
        manifests.append(entry)
    manifests.sort(key=lambda item: item["title"].lower())
    return manifests


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    app.config.from_object(config_module.BaseConfig)
    app.json.sort_keys = False

    yaml_config = _load_yaml_config()
    site_settings = yaml_config.get("site", {}) or {}
    plugin_settings = yaml_config.get("plugins", {}) or {}

    app.config["SITE_SETTINGS"] = site_settings
    if "max_content_length_mb" in site_settings:
        try:
            max_bytes = int(float(site_settings["max_content_length_mb"]) * 1024 * 1024)
            app.config["MAX_CONTENT_LENGTH"] = max_bytes
        except (TypeError, ValueError):
            logger.warning(
                "ignoring invalid max_content_length_mb %r",
                site_settings["max_content_length_mb"],
            )
    if site_settings.get("log_level"):
        app.config["LOG_LEVEL"] = site_settings["log_level"]

    app.config["PLUGIN_SETTINGS"] = plugin_settings

    if config_name:
        config_obj = getattr(config_module, config_name, None)
        if config_obj:
            app.config.from_object(config_obj)

    configure_level(app.config.get("LOG_LEVEL"))
    install_request_logging(app)
    register_plugin_blueprints(app)
    app.config["PLUGIN_MANIFESTS"] = _load_manifests(plugin_settings)

    @app.after_request
    def apply_response_headers(response):
        """Attach strict security headers to every outgoing response."""

        configured = app.config.get("RESPONSE_HEADERS", {})
        for header, value in configured.items():
            if header not in response.headers:
                response.headers[header] = value
        return response

    @app.get("/")
    def home():
        return ok(
            {
                "plugins": app.config["PLUGIN_MANIFESTS"],
                "site": app.config.get("SITE_SETTINGS", {}),
            }
        )

    @app.get("/api/plugins")
    def plugins():
        return ok(app.config["PLUGIN_MANIFESTS"])

    @app.errorhandler(AppError)
    def app_error(error: AppError):
        return fail(error)

    @app.errorhandler(400)
    def bad_request(error):
        return fail(ValidationAppError(message="Bad request", code="bad_request"))

    @app.errorhandler(404)
    def not_found(error):
        return fail(NotFoundAppError(message="Resource not found"))

    @app.errorhandler(405)
    def method_not_allowed(error):
        return fail(
            ValidationAppError(
                message="Method not allowed", code="method_not_allowed", status_code=405
            )
        )

    @app.errorhandler(413)
    def payload_too_large(error):
        return fail(
            ValidationAppError(
                message="Request body too large", code="payload_too_large", status_code=413
            )
        )

    @app.errorhandler(500)
    def server_error(error):  # pragma: no cover - exercised only on crashes
        original = getattr(error, "original_exception", None) or error
        return fail(ensure_app_error(original, fallback_code="internal_error"))

    return app


__all__ = ["create_app"]
