"""CSV export/import and result validation routes."""

from __future__ import annotations

from datetime import datetime

from flask import Blueprint, current_app, request

from lottogen.errors import ValidationError
from lottogen.games import get_game
from lottogen.schemas.export import (
    ExportRecordSchema,
    ExportRequestSchema,
    ImportRequestSchema,
    ValidateRequestSchema,
    ValidationResultSchema,
)
from lottogen.services import export_service
from lottogen.utils.responses import csv_attachment, ok


export_bp = Blueprint("export", __name__)

_export_schema = ExportRequestSchema()
_import_schema = ImportRequestSchema()
_validate_schema = ValidateRequestSchema()
_records_schema = ExportRecordSchema(many=True)
_results_schema = ValidationResultSchema(many=True)


@export_bp.post("/export")
def export_draws():
    data = _export_schema.load(request.get_json(silent=True) or {})
    game = get_game(data["game"])
    settings = data.get("settings") or {}

    metadata = export_service.ExportMetadata(
        game=game.label,
        generated_at=data.get("generated_at") or datetime.now(),
        total_draws=len(data["draws"]),
        configuration=export_service.GenerationSettings(
            exclude_top=int(settings.get("exclude_top", 0)),
            exclude_bottom=int(settings.get("exclude_bottom", 0)),
            threshold=int(settings.get("threshold", 0)),
            warm_up=int(settings.get("warm_up", 0)),
            warm_up_once=bool(settings.get("warm_up_once", False)),
        ),
        generator_version=str(current_app.config["GENERATOR_VERSION"]),
        excluded_numbers=data.get("excluded_numbers") or None,
        date_filter=data.get("date_filter"),
    )

    content = export_service.to_csv_text(data["draws"], metadata)
    return csv_attachment(content, export_service.generate_filename(metadata))


@export_bp.post("/import")
def import_draws():
    data = _import_schema.load(request.get_json(silent=True) or {})
    records = export_service.parse_csv_text(data["csv_text"])
    if not records:
        raise ValidationError("No valid draws found in CSV file")
    return ok({"count": len(records), "records": _records_schema.dump(records)})


@export_bp.post("/validate")
def validate_draws():
    data = _validate_schema.load(request.get_json(silent=True) or {})
    game = get_game(data["game"])

    check = export_service.validate_actual_numbers(data["actual_numbers"], game)
    if not check.valid:
        raise ValidationError(check.error or "Invalid numbers", details={"actual_numbers": [check.error]})
    actual = check.numbers or []

    csv_text = data.get("csv_text")
    if csv_text:
        records = export_service.parse_csv_text(csv_text)
        if not records:
            raise ValidationError("No valid draws found in CSV file")
        results = export_service.validate_records(records, actual, game.prize_tiers)
        updated = export_service.update_with_results(csv_text, results)
    else:
        results = export_service.validate(data["draws"], actual, game.prize_tiers)
        updated = None

    return ok(
        {
            "actual": actual,
            "results": _results_schema.dump(results),
            "csv_text": updated,
        }
    )
