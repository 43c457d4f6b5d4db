"""Schemas for CSV export, import and validation APIs."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from lottogen.games import DEFAULT_GAME, GAMES


class GenerationSettingsSchema(Schema):
    exclude_top = fields.Integer(load_default=0, validate=validate.Range(min=0))
    exclude_bottom = fields.Integer(load_default=0, validate=validate.Range(min=0))
    threshold = fields.Integer(load_default=0, validate=validate.Range(min=0))
    warm_up = fields.Integer(load_default=0, validate=validate.Range(min=0))
    warm_up_once = fields.Boolean(load_default=False)


class ExportRequestSchema(Schema):
    game = fields.String(load_default=DEFAULT_GAME, validate=validate.OneOf(list(GAMES)))
    draws = fields.List(
        fields.List(fields.Integer(validate=validate.Range(min=1)), validate=validate.Length(min=1)),
        required=True,
        validate=validate.Length(min=1, max=500),
    )
    settings = fields.Nested(GenerationSettingsSchema, load_default=lambda: {})
    excluded_numbers = fields.List(fields.Integer(), load_default=list)
    date_filter = fields.String(load_default=None, allow_none=True)
    generated_at = fields.DateTime(load_default=None, allow_none=True)


class ImportRequestSchema(Schema):
    csv_text = fields.String(required=True)


class ValidateRequestSchema(Schema):
    game = fields.String(load_default=DEFAULT_GAME, validate=validate.OneOf(list(GAMES)))

    # "3 11 19 27 35 44", "3,11,19,..." or a list of ints; checked per game later.
    actual_numbers = fields.Raw(required=True)

    draws = fields.List(fields.List(fields.Integer()), load_default=None, allow_none=True)
    csv_text = fields.String(load_default=None, allow_none=True)

    @validates_schema
    def _validate_source(self, data, **kwargs):  # type: ignore[no-untyped-def]
        if not data.get("draws") and not data.get("csv_text"):
            raise ValidationError({"draws": ["Provide draws or csv_text"]})

        raw = data.get("actual_numbers")
        if not isinstance(raw, (str, list)):
            raise ValidationError({"actual_numbers": ["Must be a string or a list of integers"]})


class ExportRecordSchema(Schema):
    draw_number = fields.Integer()
    generated_date = fields.String()
    numbers = fields.List(fields.Integer())
    play_date = fields.String(allow_none=True)
    actual_draw_date = fields.String(allow_none=True)
    match_count = fields.Integer(allow_none=True)
    matched = fields.List(fields.Integer(), allow_none=True)
    prize = fields.String(allow_none=True)


class ValidationResultSchema(Schema):
    draw_number = fields.Integer()
    generated = fields.List(fields.Integer())
    actual = fields.List(fields.Integer())
    matches = fields.List(fields.Integer())
    match_count = fields.Integer()
    prize = fields.String(allow_none=True)
