from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, current_app, jsonify, request

from ..container import Container
from ..core.constants import HEADER_GATE_KEY, HEADER_OFFICE_PASS
from ..core.exceptions import ConfigurationError, GateError

logger = logging.getLogger(__name__)

CORS_ALLOW_METHODS = "GET, POST, OPTIONS"
CORS_ALLOW_HEADERS = f"Content-Type, {HEADER_OFFICE_PASS}, {HEADER_GATE_KEY}"


def register(app: Flask, container: Container) -> None:
    def gate_endpoint(name: str):
        """Translate gate failures into bounded responses.

        Callers only ever see ``{"ok": false}``; the reason stays in the server log.
        """

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                if request.method == "OPTIONS":
                    return "", 200
                try:
                    return view(*args, **kwargs)
                except ConfigurationError as e:
                    logger.error("[%s] configuration error: %s", name, e)
                    return jsonify({"ok": False}), 500
                except GateError as e:
                    logger.warning("[%s] blocked: %s", name, e)
                    return jsonify({"ok": False}), 403
                except Exception:
                    logger.exception("[%s] unexpected error", name)
                    return jsonify({"ok": False}), 500

            return wrapper

        return decorator

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = current_app.config.get("CORS_ALLOW_ORIGIN", "*")
        response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
        response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
        return response

    @app.route("/api/attendance/check", methods=["GET", "OPTIONS"], endpoint="office_gate")
    @app.route("/api/office-gate", methods=["GET", "OPTIONS"], endpoint="office_gate_alias")
    @gate_endpoint("office-gate")
    def office_gate():
        office_pass = container.admission_service.issue_pass(request.headers, remote_addr=request.remote_addr)
        return jsonify({"ok": True, "pass": office_pass}), 200

    @app.route("/api/attendance/checkin", methods=["POST", "OPTIONS"], endpoint="checkin_guard")
    @gate_endpoint("checkin-guard")
    def checkin_guard():
        result = container.checkin_guard_service.authorize(
            request.headers,
            office_pass=request.headers.get(HEADER_OFFICE_PASS, ""),
            gate_key=request.headers.get(HEADER_GATE_KEY),
            remote_addr=request.remote_addr,
        )
        logger.info("[checkin-guard] authorized ip=%s asn=%s", result.ip, result.asn)
        return jsonify({"ok": True}), 200

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"ok": True}), 200
