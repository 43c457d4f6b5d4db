"""Helpers for consistent response shapes (JSON envelope, CSV downloads)."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify

# Excel only detects UTF-8 in CSV downloads when a BOM is present.
_UTF8_BOM = "\ufeff"


def ok(data: Any, status_code: int = 200) -> Response:
    """Success response."""

    return jsonify({"success": True, "data": data, "error": None}), status_code


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> Response:
    """Error response."""

    return (
        jsonify(
            {
                "success": False,
                "data": None,
                "error": {"code": code, "message": message, "details": details},
            }
        ),
        status_code,
    )


def csv_attachment(content: str, filename: str) -> Response:
    """Serve exported draws as a downloadable CSV file."""

    response = Response(_UTF8_BOM + content, mimetype="text/csv")
    response.headers["Content-Type"] = "text/csv; charset=utf-8"
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response
