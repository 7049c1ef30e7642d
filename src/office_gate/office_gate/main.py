from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .gate.controller import register as register_gate

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


def create_app(overrides: Optional[Mapping[str, Any]] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    app.config.from_object(importlib.import_module(settings_module))
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    logger.info("[office-gate] settings=%s backend=%s", settings_module, app.config.get("SETTINGS_BACKEND"))

    if container is None:
        container = build_container(config=app.config)

    if not app.config.get("OFFICE_PASS_SECRET"):
        # Requests will still fail with 500; warn early so it is caught at deploy time.
        logger.error("[office-gate] OFFICE_PASS_SECRET is not set; every gate request will fail")
    if not app.config.get("OFFICE_GATE_KEY"):
        logger.error("[office-gate] OFFICE_GATE_KEY is not set; every checkin request will fail")
    if container.address_resolver.trust_policy.is_unconditional:
        logger.warning("[office-gate] forwarded headers are trusted from any peer; restrict TRUSTED_PROXY_CIDRS in production")

    if app.config.get("AUTO_INIT_DB") and str(app.config.get("SETTINGS_BACKEND")).lower() == "mysql":
        from .database.bootstrap import apply_schema, list_setting_keys
        from .database.connection import DBConfig, DatabaseConnection

        conn_factory = DatabaseConnection(DBConfig.from_dict(dict(app.config["DB_CONFIG"])))
        apply_schema(conn_factory, schema_path=SCHEMA_PATH)
        logger.info("[office-gate] schema ready (settings=%s)", ", ".join(list_setting_keys(conn_factory)))

    app.extensions["office_gate"] = container
    register_gate(app, container)

    return app
