"""Load historical draw files (local or remote) into structured draws."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from threading import Lock

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from lottogen.errors import DataSourceError
from lottogen.games import GameConfig


logger = logging.getLogger(__name__)

NUMBER_COLUMN_PREFIX = "NUMBER DRAWN"
DATE_COLUMN = "DRAW DATE"
DRAW_NUMBER_COLUMN = "DRAW NUMBER"
BONUS_COLUMN = "BONUS NUMBER"


@dataclass(frozen=True)
class HistoricalDraw:
    date: date | None
    numbers: tuple[int, ...]
    sequence_id: int | None = None
    bonus: int | None = None


def build_http_session(retries: int = 3, backoff_factor: float = 0.3) -> requests.Session:
    """Create a requests session with retry/backoff for transient network errors."""

    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)

    session = requests.Session()
    session.headers.update({"User-Agent": "Mozilla/5.0"})
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def read_source(source: str | Path, http: requests.Session | None = None, timeout: float = 10.0) -> str:
    """Return the raw text of a draw file given a path or an http(s) URL."""

    source_str = str(source)
    if _is_url(source_str):
        session = http or build_http_session()
        try:
            resp = session.get(source_str, timeout=timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise DataSourceError(source_str, exc) from exc
        return resp.content.decode("utf-8-sig")

    try:
        return Path(source_str).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise DataSourceError(source_str, exc) from exc


def _clean(cell: str) -> str:
    cell = cell.strip()
    if len(cell) >= 2 and cell[0] == '"' and cell[-1] == '"':
        cell = cell[1:-1]
    return cell.strip()


def _parse_positive(cell: str) -> int | None:
    try:
        n = int(float(cell))
    except (ValueError, OverflowError):
        return None
    return n if n > 0 else None


def _parse_date(cell: str) -> date | None:
    try:
        return datetime.strptime(cell[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def _parse_row(headers: list[str], values: list[str]) -> HistoricalDraw:
    row = {header: (values[i] if i < len(values) else "") for i, header in enumerate(headers)}

    numbers: list[int] = []
    for header, cell in row.items():
        if header.startswith(NUMBER_COLUMN_PREFIX):
            n = _parse_positive(cell)
            if n is not None:
                numbers.append(n)

    return HistoricalDraw(
        date=_parse_date(row.get(DATE_COLUMN, "")),
        numbers=tuple(numbers),
        sequence_id=_parse_positive(row.get(DRAW_NUMBER_COLUMN, "")),
        bonus=_parse_positive(row.get(BONUS_COLUMN, "")),
    )


def split_header(lines: list[str]) -> tuple[str, int]:
    """Return the header line (re-joined if wrapped) and the first data row index.

    Some exports wrap the header onto continuation lines starting with a comma.
    """

    header = lines[0]
    start = 1
    while start < len(lines) and lines[start].strip().startswith(","):
        header += lines[start].strip()
        start += 1
    return header, start


def parse_history_text(text: str) -> list[HistoricalDraw]:
    """Parse a historical draw table.

    Rows that cannot be interpreted become draws with no numbers rather than
    aborting the load.
    """

    lines = [line.rstrip("\r") for line in text.split("\n") if line.strip()]
    if not lines:
        return []

    header_line, start = split_header(lines)
    headers = [_clean(h) for h in header_line.split(",")]

    draws: list[HistoricalDraw] = []
    skipped = 0
    for line in lines[start:]:
        values = [_clean(v) for v in line.split(",")]
        draw = _parse_row(headers, values)
        if not draw.numbers:
            skipped += 1
        draws.append(draw)

    if skipped:
        logger.warning("%s rows without usable numbers", skipped)
    return draws


def load(source: str | Path, http: requests.Session | None = None, timeout: float = 10.0) -> list[HistoricalDraw]:
    """Read and parse one historical draw file."""

    draws = parse_history_text(read_source(source, http=http, timeout=timeout))
    logger.info("Loaded %s draws from %s", len(draws), source)
    return draws


@dataclass(frozen=True)
class LoadedHistory:
    game_key: str
    source: str
    text: str
    draws: tuple[HistoricalDraw, ...]


class HistoryCache:
    """Per-game load-once cache of historical draws.

    Owned by whoever builds it (the Flask app keeps one in `app.extensions`),
    so tests control its lifetime through `invalidate()`.
    """

    def __init__(
        self,
        data_dir: str | Path = "data",
        base_url: str = "",
        timeout: float = 10.0,
        http: requests.Session | None = None,
    ) -> None:
        self._lock = Lock()
        self._entries: dict[str, LoadedHistory] = {}
        self._data_dir = Path(data_dir)
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http = http

    def source_for(self, game: GameConfig) -> str:
        if self._base_url:
            return f"{self._base_url}/{game.file_name}"
        return str(self._data_dir / game.file_name)

    def get(self, game: GameConfig) -> LoadedHistory:
        entry = self._entries.get(game.key)
        if entry is not None:
            logger.debug("History cache hit for %s", game.key)
            return entry

        with self._lock:
            entry = self._entries.get(game.key)
            if entry is not None:
                return entry

            logger.debug("History cache miss for %s", game.key)
            source = self.source_for(game)
            if _is_url(source) and self._http is None:
                self._http = build_http_session()

            # A failed read raises before anything is stored.
            text = read_source(source, http=self._http, timeout=self._timeout)
            entry = LoadedHistory(
                game_key=game.key,
                source=source,
                text=text,
                draws=tuple(parse_history_text(text)),
            )
            self._entries[game.key] = entry
            logger.info("Loaded %s draws for %s from %s", len(entry.draws), game.key, source)
            return entry

    def draws(self, game: GameConfig) -> list[HistoricalDraw]:
        return list(self.get(game).draws)

    def invalidate(self, game_key: str | None = None) -> None:
        with self._lock:
            if game_key is None:
                self._entries.clear()
            else:
                self._entries.pop(game_key, None)

    def __contains__(self, game_key: str) -> bool:
        return game_key in self._entries
