"""CSV export/import of generated draws and validation against real results.

Export layout::

    # Lottery Draw Export
    # Game: 6/49
    # ...metadata comment lines...
    #
    DrawNumber,GeneratedDate,Numbers,PlayDate,ActualDrawDate,MatchCount,Matched,Prize
    1,2024-05-01 10:30:00,3|11|19|27|35|44,,,,,

Numbers inside a draw are pipe-joined so they never collide with the comma
delimiter.
"""

from __future__ import annotations

import csv
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from lottogen.games import SIX_NUMBER_PRIZE_TIERS, GameConfig, PrizeTier, prize_for


COLUMN_HEADERS = (
    "DrawNumber",
    "GeneratedDate",
    "Numbers",
    "PlayDate",
    "ActualDrawDate",
    "MatchCount",
    "Matched",
    "Prize",
)
COLUMN_HEADER_LINE = ",".join(COLUMN_HEADERS)

PLAY_DATE_INDEX = 3
ACTUAL_DRAW_DATE_INDEX = 4
MATCH_COUNT_INDEX = 5
MATCHED_INDEX = 6
PRIZE_INDEX = 7

NUMBER_SEPARATOR = "|"


@dataclass(frozen=True)
class GenerationSettings:
    exclude_top: int = 0
    exclude_bottom: int = 0
    threshold: int = 0
    warm_up: int = 0
    warm_up_once: bool = False


@dataclass(frozen=True)
class ExportMetadata:
    game: str
    generated_at: datetime
    total_draws: int
    configuration: GenerationSettings = field(default_factory=GenerationSettings)
    generator_version: str = ""
    excluded_numbers: Sequence[int] | None = None
    date_filter: str | None = None


@dataclass(frozen=True)
class ExportRecord:
    draw_number: int
    generated_date: str
    numbers: list[int]
    play_date: str | None = None
    actual_draw_date: str | None = None
    match_count: int | None = None
    matched: list[int] | None = None
    prize: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    draw_number: int
    generated: list[int]
    actual: list[int]
    matches: list[int]
    match_count: int
    prize: str | None = None


@dataclass(frozen=True)
class NumbersCheck:
    valid: bool
    numbers: list[int] | None = None
    error: str | None = None


def format_datetime(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def escape_csv_field(value: object) -> str:
    """Quote a field only when it contains a comma, quote or newline."""

    if value is None:
        return ""
    text = str(value)
    if "," in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def _join_numbers(numbers: Sequence[int]) -> str:
    return NUMBER_SEPARATOR.join(str(int(n)) for n in numbers)


def _metadata_lines(metadata: ExportMetadata) -> list[str]:
    cfg = metadata.configuration
    lines = [
        "# Lottery Draw Export",
        f"# Game: {metadata.game}",
        f"# Generated: {format_datetime(metadata.generated_at)}",
        f"# Total Draws: {metadata.total_draws}",
        (
            f"# Configuration: excludeTop={cfg.exclude_top}, excludeBottom={cfg.exclude_bottom}, "
            f"threshold={cfg.threshold}, warmup={cfg.warm_up}, "
            f"warmupOnce={str(cfg.warm_up_once).lower()}"
        ),
        f"# Generator Version: {metadata.generator_version}",
    ]
    if metadata.excluded_numbers:
        lines.append(f"# Excluded Numbers: {','.join(str(n) for n in metadata.excluded_numbers)}")
    if metadata.date_filter:
        lines.append(f"# Date Filter: {metadata.date_filter}")
    lines.append("#")
    return lines


def to_csv_text(draws: Sequence[Sequence[int]], metadata: ExportMetadata) -> str:
    """Serialize generated draws with a metadata comment block."""

    generated = format_datetime(metadata.generated_at)
    rows = [
        ",".join(
            [
                str(index + 1),
                escape_csv_field(generated),
                _join_numbers(numbers),
                "",  # PlayDate
                "",  # ActualDrawDate
                "",  # MatchCount
                "",  # Matched
                "",  # Prize
            ]
        )
        for index, numbers in enumerate(draws)
    ]
    return "\n".join([*_metadata_lines(metadata), COLUMN_HEADER_LINE, *rows])


def _split_row(line: str) -> list[str]:
    return next(csv.reader([line]), [])


def _optional(fields: list[str], index: int) -> str | None:
    if index >= len(fields):
        return None
    value = fields[index].strip()
    return value or None


def _parse_numbers(raw: str | None) -> list[int] | None:
    if raw is None:
        return None
    return [int(n) for n in raw.split(NUMBER_SEPARATOR) if n.strip()]


def _parse_record(line: str) -> ExportRecord | None:
    """Interpret one data row, or None when it cannot be read."""

    fields = _split_row(line)
    if len(fields) < 3:
        return None

    try:
        draw_number = int(fields[0])
        numbers = _parse_numbers(fields[2]) or []
    except ValueError:
        return None
    if not numbers:
        return None

    raw_count = _optional(fields, MATCH_COUNT_INDEX)
    try:
        match_count = int(raw_count) if raw_count is not None else None
        matched = _parse_numbers(_optional(fields, MATCHED_INDEX))
    except ValueError:
        match_count, matched = None, None

    return ExportRecord(
        draw_number=draw_number,
        generated_date=fields[1],
        numbers=numbers,
        play_date=_optional(fields, PLAY_DATE_INDEX),
        actual_draw_date=_optional(fields, ACTUAL_DRAW_DATE_INDEX),
        match_count=match_count,
        matched=matched,
        prize=_optional(fields, PRIZE_INDEX),
    )


def _scan_rows(text: str) -> Iterator[tuple[str, ExportRecord | None]]:
    """Yield every line with the record it holds.

    Comment and blank lines are skipped, the first remaining line is the
    column header. Lines that hold no record pair with None.
    """

    header_found = False
    for raw_line in text.split("\n"):
        line = raw_line.rstrip("\r").lstrip("\ufeff")
        if line.startswith("#") or not line.strip():
            yield raw_line, None
        elif not header_found:
            header_found = True
            yield raw_line, None
        else:
            yield raw_line, _parse_record(line)


def parse_csv_text(text: str) -> list[ExportRecord]:
    """Parse an exported CSV back into records.

    Comment and blank lines are skipped, the first remaining line is the
    column header. Rows that cannot be interpreted are dropped.
    """

    return [record for _, record in _scan_rows(text) if record is not None]


def _score(draw_number: int, generated: Sequence[int], actual: Sequence[int], tiers: Sequence[PrizeTier]) -> ValidationResult:
    actual_set = set(actual)
    matches = [n for n in generated if n in actual_set]
    return ValidationResult(
        draw_number=draw_number,
        generated=list(generated),
        actual=list(actual),
        matches=matches,
        match_count=len(matches),
        prize=prize_for(len(matches), tuple(tiers)),
    )


def validate(
    generated_draws: Sequence[Sequence[int]],
    actual_numbers: Sequence[int],
    prize_tiers: Sequence[PrizeTier] = SIX_NUMBER_PRIZE_TIERS,
) -> list[ValidationResult]:
    """Score each generated draw against the actual result."""

    return [
        _score(index + 1, generated, actual_numbers, prize_tiers)
        for index, generated in enumerate(generated_draws)
    ]


def validate_records(
    records: Sequence[ExportRecord],
    actual_numbers: Sequence[int],
    prize_tiers: Sequence[PrizeTier] = SIX_NUMBER_PRIZE_TIERS,
) -> list[ValidationResult]:
    return [_score(r.draw_number, r.numbers, actual_numbers, prize_tiers) for r in records]


def validate_actual_numbers(raw: str | Sequence[int], game: GameConfig) -> NumbersCheck:
    """Check user-entered actual results; problems are reported, never raised."""

    if isinstance(raw, str):
        tokens = [t for t in re.split(r"[,\s|]+", raw) if t.strip()]
    else:
        tokens = [str(t) for t in raw]

    if len(tokens) != game.count:
        return NumbersCheck(valid=False, error=f"Please enter exactly {game.count} numbers")

    try:
        numbers = [int(t) for t in tokens]
    except ValueError:
        numbers = []
    if len(numbers) != len(tokens) or any(not game.contains(n) for n in numbers):
        return NumbersCheck(valid=False, error=f"All numbers must be between {game.min} and {game.max}")

    if len(set(numbers)) != len(numbers):
        return NumbersCheck(valid=False, error="Numbers must be unique")

    return NumbersCheck(valid=True, numbers=sorted(numbers))


def update_with_results(csv_text: str, results: Sequence[ValidationResult]) -> str:
    """Fill MatchCount/Matched/Prize of an exported CSV, row by row.

    Results pair with the rows `parse_csv_text` reads, in order. Every other
    line is kept verbatim, as are rows beyond the result list.
    """

    updated: list[str] = []
    row_index = 0

    for raw_line, record in _scan_rows(csv_text):
        if record is None or row_index >= len(results):
            updated.append(raw_line)
            continue

        line = raw_line.rstrip("\r")
        ending = raw_line[len(line):]

        result = results[row_index]
        fields = _split_row(line.lstrip("\ufeff"))
        fields += [""] * (len(COLUMN_HEADERS) - len(fields))
        fields[MATCH_COUNT_INDEX] = str(result.match_count)
        fields[MATCHED_INDEX] = _join_numbers(result.matches)
        fields[PRIZE_INDEX] = result.prize or ""

        updated.append(",".join(escape_csv_field(f) for f in fields) + ending)
        row_index += 1

    return "\n".join(updated)


def generate_filename(metadata: ExportMetadata) -> str:
    """``lottery-<game>-<YYYY-MM-DD-HHmm>-draws-<count>.csv``"""

    slug = re.sub(r"[/\s]+", "", metadata.game.lower())
    stamp = metadata.generated_at.strftime("%Y-%m-%d-%H%M")
    return f"lottery-{slug}-{stamp}-draws-{metadata.total_draws}.csv"
