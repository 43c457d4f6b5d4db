"""Number frequency tabulation over historical draws (hot/cold numbers)."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from lottogen.games import GameConfig
from lottogen.services.history_service import HistoricalDraw, split_header


METADATA_COLUMNS = 4

FrequencyTable = dict[int, int]


def _token_value(token: str) -> int | None:
    token = token.strip().strip('"').strip()
    # Blank or 0 marks an unused column in a short draw.
    if token in ("", "0"):
        return None
    try:
        value = int(token)
    except ValueError:
        return None
    return value if value > 0 else None


def count_occurrences(table_text: str, include_bonus: bool = False) -> FrequencyTable:
    """Count how often each number appears in a historical draw table.

    The header row is removed, then the first four metadata columns of each
    row are discarded. A trailing ``BONUS ...`` column is ignored unless
    ``include_bonus`` is set.
    """

    lines = [line.rstrip("\r") for line in table_text.split("\n")]
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        return {}

    header_line, start = split_header(lines)
    headers = [h.strip().strip('"').strip().upper() for h in header_line.split(",")]
    bonus_index: int | None = None
    if not include_bonus and headers and headers[-1].startswith("BONUS"):
        bonus_index = len(headers) - 1

    counts: Counter[int] = Counter()
    for line in lines[start:]:
        if not line.strip():
            continue
        fields = line.split(",")
        if bonus_index is not None and len(fields) > bonus_index:
            fields = fields[:bonus_index] + fields[bonus_index + 1:]
        for token in fields[METADATA_COLUMNS:]:
            value = _token_value(token)
            if value is not None:
                counts[value] += 1

    return dict(counts)


def count_draw_occurrences(draws: Iterable[HistoricalDraw | Sequence[int]]) -> FrequencyTable:
    """Same tabulation as `count_occurrences`, over already-parsed draws."""

    counts: Counter[int] = Counter()
    for draw in draws:
        numbers = draw.numbers if isinstance(draw, HistoricalDraw) else draw
        for n in numbers:
            if int(n) > 0:
                counts[int(n)] += 1
    return dict(counts)


def _ranked(table: FrequencyTable) -> list[int]:
    # Most frequent first; equal counts ordered by ascending number.
    return [n for n, _ in sorted(table.items(), key=lambda kv: (-kv[1], kv[0]))]


def get_top_n(table: FrequencyTable, n: int) -> list[int]:
    if n <= 0:
        return []
    return _ranked(table)[:n]


def get_bottom_n(table: FrequencyTable, n: int) -> list[int]:
    # Only numbers present in the table are ranked; a number never drawn in
    # the window has no entry and is not picked as cold.
    if n <= 0:
        return []
    return _ranked(table)[-n:]


def build_exclusion_set(
    table: FrequencyTable,
    game: GameConfig,
    exclude_top: int = 0,
    exclude_bottom: int = 0,
    manual: Iterable[int] | None = None,
) -> list[int]:
    """Union of the top-K, bottom-K and manually excluded numbers, within range."""

    excluded = set(get_top_n(table, exclude_top))
    excluded.update(get_bottom_n(table, exclude_bottom))
    excluded.update(int(n) for n in (manual or ()))
    return sorted(n for n in excluded if game.contains(n))


def draws_to_table_text(draws: Sequence[HistoricalDraw], product: str = "649") -> str:
    """Render parsed draws back into the historical table format."""

    if not draws:
        return ""

    width = max(len(d.numbers) for d in draws)
    number_headers = ",".join(f"NUMBER DRAWN {i + 1}" for i in range(width))
    lines = [f"PRODUCT,DRAW NUMBER,SEQUENCE NUMBER,DRAW DATE,{number_headers},BONUS NUMBER"]

    for index, draw in enumerate(draws):
        draw_no = draw.sequence_id if draw.sequence_id is not None else index + 1
        date_str = draw.date.isoformat() if draw.date else ""
        cells = [str(n) for n in draw.numbers] + [""] * (width - len(draw.numbers))
        lines.append(f"{product},{draw_no},0,{date_str},{','.join(cells)},{draw.bonus or 0}")

    return "\n".join(lines)


@dataclass(frozen=True)
class FrequencySummary:
    draws_used: int
    counts: FrequencyTable
    hot_numbers: list[int]
    cold_numbers: list[int]


def summarize(draws: Sequence[HistoricalDraw], top: int = 10) -> FrequencySummary:
    counts = count_draw_occurrences(draws)
    return FrequencySummary(
        draws_used=len(draws),
        counts=counts,
        hot_numbers=get_top_n(counts, top),
        cold_numbers=get_bottom_n(counts, top)[::-1],
    )
