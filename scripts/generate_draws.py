"""Generate lottery draws from the command line.

Usage:
  python scripts/generate_draws.py --game sixFourtyNine --draws 5
  python scripts/generate_draws.py --game lottoMax --preset 1year --export out/

Options:
  --exclude-top 3 --exclude-bottom 3 --threshold 2 --warm-up 1000
  --exclude 7,13   (manual exclusions)
  --start 2024-01-01 --end 2024-06-30   (with --preset custom)
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from datetime import date, datetime
from pathlib import Path

try:
    from dotenv import load_dotenv
except Exception:  # pragma: no cover
    load_dotenv = None  # type: ignore[assignment]

from lottogen.config import get_config
from lottogen.errors import AppError
from lottogen.games import GAMES, get_game
from lottogen.services.date_filter_service import DATE_PRESETS, describe_filter
from lottogen.services.draw_service import DrawService
from lottogen.services.export_service import ExportMetadata, generate_filename, to_csv_text
from lottogen.services.generation_service import GenerationRequest, GenerationService
from lottogen.services.history_service import HistoryCache


logger = logging.getLogger(__name__)


def _parse_day(raw: str) -> date:
    return datetime.strptime(raw, "%Y-%m-%d").date()


def _parse_numbers(raw: str) -> list[int]:
    return [int(n) for n in raw.replace(" ", ",").split(",") if n.strip()]


def main(argv: Sequence[str] | None = None) -> int:
    if load_dotenv is not None:
        load_dotenv()
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate lottery draws excluding hot/cold numbers")
    parser.add_argument("--game", choices=list(GAMES), default="sixFourtyNine")
    parser.add_argument("--draws", dest="draw_count", type=int, default=1)
    parser.add_argument("--exclude-top", dest="exclude_top", type=int, default=3)
    parser.add_argument("--exclude-bottom", dest="exclude_bottom", type=int, default=3)
    parser.add_argument("--exclude", dest="exclude", type=_parse_numbers, default=[])
    parser.add_argument("--threshold", type=int, default=2)
    parser.add_argument("--warm-up", dest="warm_up", type=int, default=1000)
    parser.add_argument("--warm-up-once", dest="warm_up_once", action="store_true")
    parser.add_argument("--preset", choices=DATE_PRESETS, default="all")
    parser.add_argument("--start", type=_parse_day, default=None)
    parser.add_argument("--end", type=_parse_day, default=None)
    parser.add_argument("--data-dir", dest="data_dir", type=str, default=config.DATA_DIR)
    parser.add_argument("--export", dest="export_dir", type=str, default=None, help="Write a CSV export into this directory")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(message)s")

    game = get_game(args.game)
    request = GenerationRequest(
        game=game,
        exclude_top=args.exclude_top,
        exclude_bottom=args.exclude_bottom,
        manual_exclusions=tuple(args.exclude),
        threshold=args.threshold,
        warm_up=args.warm_up,
        warm_up_once=args.warm_up_once,
        draw_count=args.draw_count,
        preset=args.preset,
        start=args.start,
        end=args.end,
    )

    cache = HistoryCache(data_dir=args.data_dir, base_url=config.DATA_BASE_URL, timeout=config.HTTP_TIMEOUT)
    service = GenerationService(DrawService(max_attempts=config.MAX_DRAW_ATTEMPTS, max_batch_size=config.MAX_BATCH_SIZE))

    try:
        outcome = service.generate(cache.draws(game), request)
    except AppError as exc:
        logger.error("%s", exc.message)
        return 1

    print(f"Generated numbers for {game.label} game:")
    for numbers in outcome.draws:
        print(numbers)

    if args.export_dir:
        metadata = ExportMetadata(
            game=game.label,
            generated_at=datetime.now(),
            total_draws=len(outcome.draws),
            configuration=request.settings,
            generator_version=config.GENERATOR_VERSION,
            excluded_numbers=outcome.excluded,
            date_filter=describe_filter(args.preset, outcome.date_range),
        )
        out_dir = Path(args.export_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        path = out_dir / generate_filename(metadata)
        path.write_text(to_csv_text(outcome.draws, metadata), encoding="utf-8")
        logger.info("Exported %s draws to %s", len(outcome.draws), path)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
