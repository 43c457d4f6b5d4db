"""Generation pipeline: corpus -> date filter -> frequencies -> exclusions -> draws.

Every step is recomputed from its inputs. Exclusions are always derived from
the frequencies of the date-filtered subset, never from the full corpus.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from lottogen.errors import ValidationError
from lottogen.games import GameConfig
from lottogen.services.date_filter_service import (
    DateRange,
    filter_by_range,
    preset_to_range,
    validate_range,
)
from lottogen.services.draw_service import DrawService
from lottogen.services.export_service import GenerationSettings
from lottogen.services.frequency_service import (
    FrequencyTable,
    build_exclusion_set,
    count_draw_occurrences,
)
from lottogen.services.history_service import HistoricalDraw


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    game: GameConfig
    exclude_top: int = 3
    exclude_bottom: int = 3
    manual_exclusions: Sequence[int] = ()
    threshold: int = 2
    warm_up: int = 100
    warm_up_once: bool = False
    draw_count: int = 1
    preset: str = "all"
    start: date | datetime | None = None
    end: date | datetime | None = None

    def date_range(self, now: datetime | None = None) -> DateRange:
        if self.preset == "custom":
            return DateRange(start=self.start, end=self.end)
        return preset_to_range(self.preset, now=now)

    @property
    def settings(self) -> GenerationSettings:
        return GenerationSettings(
            exclude_top=self.exclude_top,
            exclude_bottom=self.exclude_bottom,
            threshold=self.threshold,
            warm_up=self.warm_up,
            warm_up_once=self.warm_up_once,
        )


@dataclass(frozen=True)
class ExclusionSummary:
    date_range: DateRange
    draws_used: int
    frequencies: FrequencyTable
    excluded: list[int]


@dataclass(frozen=True)
class GenerationOutcome:
    draws: list[list[int]]
    excluded: list[int]
    draws_used: int
    date_range: DateRange = field(default_factory=DateRange)


def resolve_range(request: GenerationRequest, now: datetime | None = None) -> DateRange:
    date_range = request.date_range(now=now)
    check = validate_range(date_range)
    if not check.valid:
        raise ValidationError(message=check.error or "Invalid date range", details={"date_filter": [check.error]})
    return date_range


def compute_exclusions(
    draws: Sequence[HistoricalDraw],
    request: GenerationRequest,
    now: datetime | None = None,
) -> ExclusionSummary:
    date_range = resolve_range(request, now=now)
    filtered = filter_by_range(draws, date_range)
    frequencies = count_draw_occurrences(filtered)
    excluded = build_exclusion_set(
        frequencies,
        request.game,
        exclude_top=request.exclude_top,
        exclude_bottom=request.exclude_bottom,
        manual=request.manual_exclusions,
    )
    return ExclusionSummary(
        date_range=date_range,
        draws_used=len(filtered),
        frequencies=frequencies,
        excluded=excluded,
    )


class GenerationService:
    """Run the full pipeline for one generation request."""

    def __init__(self, draw_service: DrawService | None = None) -> None:
        self._draw_service = draw_service or DrawService()

    def generate(
        self,
        draws: Sequence[HistoricalDraw],
        request: GenerationRequest,
        now: datetime | None = None,
    ) -> GenerationOutcome:
        summary = compute_exclusions(draws, request, now=now)
        logger.info(
            "Generating %s draw(s) for %s from %s historical draws, excluding %s",
            request.draw_count,
            request.game.key,
            summary.draws_used,
            summary.excluded,
        )

        generated = self._draw_service.generate_batch(
            request.game,
            count=request.draw_count,
            exclude=summary.excluded,
            similarity_threshold=request.threshold,
            warm_up=request.warm_up,
            warm_up_once=request.warm_up_once,
        )
        return GenerationOutcome(
            draws=generated,
            excluded=summary.excluded,
            draws_used=summary.draws_used,
            date_range=summary.date_range,
        )
