from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest

from scripts.update_lottery_data import DataSource, extract_csv, update_source

CSV_TEXT = "PRODUCT,DRAW NUMBER,SEQUENCE NUMBER,DRAW DATE,NUMBER DRAWN 1\n649,1,0,2024-01-01,7\n"


def _zip(files: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, text in files.items():
            zf.writestr(name, text)
    return buffer.getvalue()


class FakeResponse:
    def __init__(self, content: bytes) -> None:
        self.content = content

    def raise_for_status(self) -> None:
        return None


class FakeSession:
    def __init__(self, content: bytes) -> None:
        self.content = content
        self.urls: list[str] = []

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        self.urls.append(url)
        return FakeResponse(self.content)


def test_extract_named_csv():
    archive = _zip({"readme.txt": "hi", "data/649.csv": CSV_TEXT, "other.csv": "x"})
    assert extract_csv(archive, "649.csv") == CSV_TEXT


def test_extract_falls_back_to_first_csv():
    archive = _zip({"readme.txt": "hi", "draws.CSV": CSV_TEXT})
    assert extract_csv(archive, "LOTTOMAX.csv") == CSV_TEXT


def test_extract_without_csv():
    with pytest.raises(ValueError):
        extract_csv(_zip({"readme.txt": "hi"}), "649.csv")


def test_update_source_writes_file(tmp_path: Path):
    session = FakeSession(_zip({"649.csv": CSV_TEXT}))
    source = DataSource("Lotto 6/49", "https://example.test/649.zip", "649.csv", "649.csv")

    assert update_source(session, source, tmp_path, timeout_seconds=5) == 1
    assert (tmp_path / "649.csv").read_text(encoding="utf-8") == CSV_TEXT
    assert session.urls == ["https://example.test/649.zip"]
