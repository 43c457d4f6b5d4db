"""Schemas for the draw generation and analysis APIs."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from lottogen.games import DEFAULT_GAME, GAMES
from lottogen.services.date_filter_service import DATE_PRESETS


class DateFilterSchema(Schema):
    preset = fields.String(
        required=False,
        load_default="all",
        validate=validate.OneOf(DATE_PRESETS),
    )
    start = fields.Date(required=False, load_default=None, allow_none=True)
    end = fields.Date(required=False, load_default=None, allow_none=True)

    @validates_schema
    def _validate_custom(self, data, **kwargs):  # type: ignore[no-untyped-def]
        if data.get("preset") != "custom":
            return
        if data.get("start") is None and data.get("end") is None:
            raise ValidationError({"start": ["custom filter needs start and/or end"]})


class DrawRequestSchema(Schema):
    game = fields.String(
        required=False,
        load_default=DEFAULT_GAME,
        validate=validate.OneOf(list(GAMES)),
    )

    # Upper bound is MAX_BATCH_SIZE, enforced by DrawService.
    count = fields.Integer(
        required=False,
        load_default=1,
        validate=validate.Range(min=1),
    )

    exclude_top = fields.Integer(required=False, load_default=3, validate=validate.Range(min=0, max=50))
    exclude_bottom = fields.Integer(required=False, load_default=3, validate=validate.Range(min=0, max=50))

    exclude_numbers = fields.List(
        fields.Integer(validate=validate.Range(min=1)),
        required=False,
        load_default=list,
    )

    threshold = fields.Integer(required=False, load_default=2, validate=validate.Range(min=0, max=7))
    warm_up = fields.Integer(required=False, load_default=100, validate=validate.Range(min=0, max=10_000))
    warm_up_once = fields.Boolean(required=False, load_default=False)

    date_filter = fields.Nested(DateFilterSchema, required=False, load_default=lambda: {"preset": "all", "start": None, "end": None})

    @validates_schema
    def _validate_exclude_numbers(self, data, **kwargs):  # type: ignore[no-untyped-def]
        game = GAMES.get(data.get("game") or DEFAULT_GAME)
        nums = data.get("exclude_numbers") or []
        if game is None:
            return

        if len(nums) != len(set(nums)):
            raise ValidationError({"exclude_numbers": ["Numbers must be unique"]})
        if any(not game.contains(n) for n in nums):
            raise ValidationError({"exclude_numbers": [f"All numbers must be within {game.min}..{game.max}"]})
        if len(nums) > len(game.numbers) - game.count:
            raise ValidationError(
                {"exclude_numbers": [f"Too many excluded numbers (must be <= {len(game.numbers) - game.count})"]}
            )


class DateRangeSchema(Schema):
    start = fields.String(allow_none=True)
    end = fields.String(allow_none=True)
    description = fields.String()


class DrawResponseSchema(Schema):
    game = fields.String(required=True)
    draws = fields.List(fields.List(fields.Integer()), required=True)
    count = fields.Integer(required=True)
    excluded = fields.List(fields.Integer(), required=True)
    draws_used = fields.Integer(required=True)
    date_range = fields.Nested(DateRangeSchema)


class FrequencyQuerySchema(Schema):
    game = fields.String(load_default=DEFAULT_GAME, validate=validate.OneOf(list(GAMES)))
    preset = fields.String(load_default="all", validate=validate.OneOf(DATE_PRESETS))
    start = fields.Date(load_default=None, allow_none=True)
    end = fields.Date(load_default=None, allow_none=True)
    top = fields.Integer(load_default=10, validate=validate.Range(min=0, max=50))
