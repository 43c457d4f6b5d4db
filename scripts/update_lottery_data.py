"""Download the latest historical draw files from PlayNow (BCLC).

Each game is published as a ZIP archive holding one CSV. The CSV is
extracted into the data directory under the file name the app expects.

Usage:
  python scripts/update_lottery_data.py --data-dir data
"""

from __future__ import annotations

import argparse
import io
import logging
import zipfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import requests
from tqdm import tqdm

try:
    from dotenv import load_dotenv
except Exception:  # pragma: no cover
    load_dotenv = None  # type: ignore[assignment]

from lottogen.games import GAMES
from lottogen.services.history_service import build_http_session, parse_history_text


logger = logging.getLogger(__name__)

PLAYNOW_BASE_URL = "https://www.playnow.com/resources/documents/downloadable-numbers"


@dataclass(frozen=True)
class DataSource:
    name: str
    url: str
    output_file: str
    csv_name: str


DATA_SOURCES: tuple[DataSource, ...] = (
    DataSource("Lotto 6/49", f"{PLAYNOW_BASE_URL}/649.zip", GAMES["sixFourtyNine"].file_name, "649.csv"),
    DataSource("Lotto Max", f"{PLAYNOW_BASE_URL}/LOTTOMAX.zip", GAMES["lottoMax"].file_name, "LOTTOMAX.csv"),
    # BC/49 is published inside the 6/49 archive.
    DataSource("BC/49", f"{PLAYNOW_BASE_URL}/649.zip", GAMES["bcSixFourtyNine"].file_name, "649.csv"),
)


def extract_csv(archive: bytes, csv_name: str) -> str:
    """Return the text of the wanted CSV inside a ZIP archive."""

    with zipfile.ZipFile(io.BytesIO(archive)) as zf:
        names = zf.namelist()
        wanted = csv_name.lower()
        entry = next((n for n in names if wanted in n.lower()), None)
        if entry is None:
            entry = next((n for n in names if n.lower().endswith(".csv")), None)
        if entry is None:
            raise ValueError(f"CSV file not found in ZIP: {csv_name}")
        return zf.read(entry).decode("utf-8-sig")


def update_source(http: requests.Session, source: DataSource, data_dir: Path, timeout_seconds: float) -> int:
    """Download one archive, write its CSV, return the number of parsed draws."""

    resp = http.get(source.url, timeout=timeout_seconds)
    resp.raise_for_status()

    text = extract_csv(resp.content, source.csv_name)
    output = data_dir / source.output_file
    output.write_text(text, encoding="utf-8")

    draws = parse_history_text(text)
    logger.info("Updated %s (%s draws, %.2f KB)", output, len(draws), output.stat().st_size / 1024)
    return len(draws)


def main(argv: Sequence[str] | None = None) -> int:
    """Refresh every historical draw file."""

    if load_dotenv is not None:
        load_dotenv()

    parser = argparse.ArgumentParser(description="Download historical lottery draws from PlayNow")
    parser.add_argument("--data-dir", dest="data_dir", type=str, default="data")
    parser.add_argument("--timeout", dest="timeout_seconds", type=float, default=30.0)
    parser.add_argument("--retries", dest="retries", type=int, default=3)
    parser.add_argument("--backoff", dest="backoff", type=float, default=0.3)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    data_dir = Path(args.data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    http = _session(args.retries, args.backoff)

    failed: list[str] = []
    for source in tqdm(DATA_SOURCES, desc="Updating"):
        try:
            update_source(http, source, data_dir, timeout_seconds=float(args.timeout_seconds))
        except (requests.RequestException, ValueError, zipfile.BadZipFile, OSError):
            logger.exception("Failed to update %s", source.name)
            failed.append(source.name)

    logger.info("Update summary: %s succeeded, %s failed", len(DATA_SOURCES) - len(failed), len(failed))
    if failed:
        logger.warning("Some updates failed: %s", ", ".join(failed))
        return 1
    return 0


def _session(retries: int, backoff: float) -> requests.Session:
    http = build_http_session(retries=retries, backoff_factor=backoff)
    http.headers.update(
        {
            "User-Agent": (
                "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
                "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
            )
        }
    )
    return http


if __name__ == "__main__":
    raise SystemExit(main())
