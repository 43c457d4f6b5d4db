from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from lottogen import create_app
from lottogen.services.history_service import HistoricalDraw

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture()
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture()
def app():
    app = create_app(
        {
            "TESTING": True,
            "DATA_DIR": str(FIXTURES),
            "DATA_BASE_URL": "",
            "MAX_DRAW_ATTEMPTS": 500,
            "GENERATOR_VERSION": "test-1",
        }
    )
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


def make_draw(day: str | None, numbers: list[int], sequence_id: int | None = None) -> HistoricalDraw:
    return HistoricalDraw(
        date=date.fromisoformat(day) if day else None,
        numbers=tuple(numbers),
        sequence_id=sequence_id,
    )


@pytest.fixture()
def dated_corpus() -> list[HistoricalDraw]:
    """Number 5 leads overall; 45 leads within 2024."""

    return [
        make_draw("2020-01-01", [5, 10, 15, 20, 25, 30], 1),
        make_draw("2021-01-01", [5, 11, 16, 21, 26, 31], 2),
        make_draw("2022-01-01", [5, 12, 17, 22, 27, 32], 3),
        make_draw("2023-01-01", [5, 13, 18, 23, 28, 33], 4),
        make_draw("2024-01-01", [5, 14, 19, 24, 29, 34], 5),
        make_draw("2024-06-01", [45, 46, 47, 48, 49, 40], 6),
        make_draw("2024-07-01", [45, 41, 42, 43, 44, 35], 7),
        make_draw("2024-08-01", [45, 36, 37, 38, 39, 41], 8),
    ]
