"""Analysis routes (controllers). No business logic here."""

from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, request

from lottogen.errors import ValidationError
from lottogen.games import get_game
from lottogen.schemas.draw import FrequencyQuerySchema
from lottogen.services import analytics_service
from lottogen.services.date_filter_service import (
    DateRange,
    filter_by_range,
    format_range,
    get_date_bounds,
    preset_to_range,
    validate_range,
)
from lottogen.services.frequency_service import summarize
from lottogen.state import get_history, get_history_cache
from lottogen.utils.responses import ok

analysis_bp = Blueprint("analysis", __name__)
_query_schema = FrequencyQuerySchema()


@analysis_bp.get("/analysis/frequency")
def get_frequency_analysis():
    """Return number frequencies for the selected game and date window.

    Query params:
    - game: game key (default sixFourtyNine)
    - preset: all|30days|3months|6months|1year|2years|custom
    - start/end: YYYY-MM-DD, used with preset=custom
    - top: how many hot/cold numbers to list (default 10)
    """

    query = _query_schema.load(request.args.to_dict())
    game = get_game(query["game"])

    if query["preset"] == "custom":
        date_range = DateRange(start=query.get("start"), end=query.get("end"))
    else:
        date_range = preset_to_range(query["preset"])

    check = validate_range(date_range)
    if not check.valid:
        raise ValidationError(check.error or "Invalid date range", details={"start": [check.error]})

    history = get_history(game)
    filtered = filter_by_range(history, date_range)
    summary = summarize(filtered, top=int(query["top"]))
    distribution = analytics_service.frequency_distribution(filtered, game.max)
    first, last = get_date_bounds(history)

    return ok(
        {
            "game": game.key,
            "total_draws": len(history),
            "draws_used": summary.draws_used,
            "date_range": format_range(date_range),
            "data_bounds": {
                "first": first.isoformat() if first else None,
                "last": last.isoformat() if last else None,
            },
            "counts": summary.counts,
            "hot_numbers": summary.hot_numbers,
            "cold_numbers": summary.cold_numbers,
            "distribution": [asdict(f) for f in distribution],
            "odd_even": asdict(analytics_service.odd_even_ratio(filtered)),
            "ranges": [asdict(b) for b in analytics_service.range_distribution(filtered, game.max)],
            "pairs": [
                {"pair": list(p.pair), "count": p.count}
                for p in analytics_service.number_pairs(filtered)[:20]
            ],
        }
    )


@analysis_bp.post("/analysis/number-set")
def analyze_number_set():
    payload = request.get_json(silent=True) or {}
    numbers = payload.get("numbers")
    if not isinstance(numbers, list) or not numbers:
        raise ValidationError("numbers must be a non-empty list", details={"numbers": ["Required"]})
    try:
        values = [int(n) for n in numbers]
    except (TypeError, ValueError) as e:
        raise ValidationError("numbers must be integers") from e

    return ok(asdict(analytics_service.analyze_number_set(values)))


@analysis_bp.post("/data/refresh")
def refresh_history():
    """Drop cached draws so the next request re-reads the source."""

    game_key = (request.args.get("game") or "").strip() or None
    if game_key is not None:
        get_game(game_key)
    get_history_cache().invalidate(game_key)
    return ok({"invalidated": game_key or "all"})
