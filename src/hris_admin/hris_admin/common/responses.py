from __future__ import annotations

import traceback
from typing import Any

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError
from ..core.logging import get_logger

log = get_logger("http")


def ok(data: Any = None, status: int = 200, **extra):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return jsonify(body), status


def fail(message: str, status: int = 400, **extra):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def report_meta(result, **extra) -> dict:
    meta = {
        "queryTime": f"{result.query_time_ms}ms",
        "totalTime": f"{result.total_time_ms}ms",
        "recordCount": result.record_count,
        "cached": result.cached,
        "timestamp": result.timestamp,
    }
    meta.update(extra)
    return meta


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return fail(str(e), e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        log.error("Unhandled error: %s\n%s", e, traceback.format_exc())
        if bool(app.config.get("DEBUG", False)):
            return fail(str(e), 500)
        return fail("Internal server error", 500)
