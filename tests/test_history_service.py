from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
import requests

from lottogen.errors import DataSourceError
from lottogen.games import GAMES
from lottogen.services.history_service import (
    HistoryCache,
    load,
    parse_history_text,
    read_source,
    split_header,
)


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, responses: dict[str, FakeResponse]) -> None:
        self.responses = responses
        self.calls: list[str] = []

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        self.calls.append(url)
        if url not in self.responses:
            raise requests.ConnectionError(f"no route to {url}")
        return self.responses[url]


def test_split_header_rejoins_wrapped_lines():
    lines = ["A,B", ",C", ",D", "1,2,3,4"]
    assert split_header(lines) == ("A,B,C,D", 3)


def test_parse_fixture_with_wrapped_header(fixtures_dir: Path):
    draws = load(fixtures_dir / "649.csv")

    assert len(draws) == 8
    first = draws[0]
    assert first.date == date(2020, 1, 1)
    assert first.numbers == (5, 10, 15, 20, 25, 30)
    assert first.sequence_id == 1
    assert first.bonus == 7


def test_zero_and_blank_cells_are_skipped(fixtures_dir: Path):
    draws = load(fixtures_dir / "LOTTOMAX.csv")

    assert [len(d.numbers) for d in draws] == [7, 7, 6]
    assert 0 not in draws[2].numbers


def test_parse_handles_quotes_and_missing_date():
    text = (
        'PRODUCT,DRAW NUMBER,DRAW DATE,NUMBER DRAWN 1,NUMBER DRAWN 2\r\n'
        '"649","12","not-a-date","4",""\r\n'
    )
    (draw,) = parse_history_text(text)

    assert draw.date is None
    assert draw.numbers == (4,)
    assert draw.sequence_id == 12
    assert draw.bonus is None


def test_malformed_row_becomes_empty_draw():
    text = "PRODUCT,DRAW DATE,NUMBER DRAWN 1\n649,2024-01-01,abc\n649,2024-01-02,9\n"
    draws = parse_history_text(text)

    assert [d.numbers for d in draws] == [(), (9,)]


def test_empty_text_gives_no_draws():
    assert parse_history_text("") == []
    assert parse_history_text("\n\n") == []


def test_missing_file_raises_data_source_error(tmp_path: Path):
    with pytest.raises(DataSourceError) as exc_info:
        read_source(tmp_path / "missing.csv")

    assert exc_info.value.status_code == 502
    assert exc_info.value.details["source"].endswith("missing.csv")


def test_remote_source_uses_session():
    url = "https://example.test/649.csv"
    session = FakeSession({url: FakeResponse(b"\xef\xbb\xbfDRAW DATE,NUMBER DRAWN 1\n2024-01-01,3\n")})

    draws = load(url, http=session)

    assert session.calls == [url]
    assert draws[0].numbers == (3,)
    assert draws[0].date == date(2024, 1, 1)


def test_remote_failure_raises_data_source_error():
    url = "https://example.test/649.csv"
    session = FakeSession({url: FakeResponse(b"", status_code=503)})

    with pytest.raises(DataSourceError):
        read_source(url, http=session)


def test_cache_loads_once_and_invalidates():
    game = GAMES["sixFourtyNine"]
    url = "https://example.test/data/649.csv"
    session = FakeSession({url: FakeResponse(b"DRAW DATE,NUMBER DRAWN 1\n2024-01-01,3\n")})
    cache = HistoryCache(base_url="https://example.test/data/", http=session)

    assert cache.source_for(game) == url
    assert cache.draws(game) == cache.draws(game)
    assert session.calls == [url]
    assert game.key in cache

    cache.invalidate(game.key)
    assert game.key not in cache
    cache.draws(game)
    assert session.calls == [url, url]


def test_cache_does_not_store_failed_loads(tmp_path: Path):
    game = GAMES["sixFourtyNine"]
    cache = HistoryCache(data_dir=tmp_path)

    with pytest.raises(DataSourceError):
        cache.get(game)
    assert game.key not in cache

    (tmp_path / game.file_name).write_text("DRAW DATE,NUMBER DRAWN 1\n2024-01-01,3\n", encoding="utf-8")
    assert len(cache.draws(game)) == 1


def test_cache_keeps_raw_text(fixtures_dir: Path):
    cache = HistoryCache(data_dir=fixtures_dir)
    entry = cache.get(GAMES["lottoMax"])

    assert entry.text.startswith("PRODUCT,DRAW NUMBER")
    assert entry.source.endswith("LOTTOMAX.csv")
    assert len(entry.draws) == 3
