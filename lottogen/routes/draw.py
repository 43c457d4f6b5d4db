"""Draw routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from lottogen.games import get_game
from lottogen.schemas.draw import DrawRequestSchema, DrawResponseSchema
from lottogen.services.date_filter_service import DateRange, format_range
from lottogen.services.generation_service import GenerationRequest
from lottogen.state import get_generation_service, get_history
from lottogen.utils.responses import ok


draw_bp = Blueprint("draw", __name__)

_request_schema = DrawRequestSchema()
_response_schema = DrawResponseSchema()


def _range_payload(date_range: DateRange) -> dict:
    return {
        "start": date_range.start.isoformat() if date_range.start else None,
        "end": date_range.end.isoformat() if date_range.end else None,
        "description": format_range(date_range),
    }


@draw_bp.post("/draw")
def draw_numbers():
    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    game = get_game(data["game"])
    date_filter = data["date_filter"]
    generation = GenerationRequest(
        game=game,
        exclude_top=int(data["exclude_top"]),
        exclude_bottom=int(data["exclude_bottom"]),
        manual_exclusions=tuple(data.get("exclude_numbers") or ()),
        threshold=int(data["threshold"]),
        warm_up=int(data["warm_up"]),
        warm_up_once=bool(data["warm_up_once"]),
        draw_count=int(data["count"]),
        preset=str(date_filter.get("preset") or "all"),
        start=date_filter.get("start"),
        end=date_filter.get("end"),
    )

    outcome = get_generation_service().generate(get_history(game), generation)

    return ok(
        _response_schema.dump(
            {
                "game": game.key,
                "draws": outcome.draws,
                "count": len(outcome.draws),
                "excluded": outcome.excluded,
                "draws_used": outcome.draws_used,
                "date_range": _range_payload(outcome.date_range),
            }
        )
    )
