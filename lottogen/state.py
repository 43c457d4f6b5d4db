"""Access to the per-app session state (history cache, generation pipeline).

State lives on the Flask app object instead of module globals, so each app
(and each test) gets its own cache lifetime.
"""

from __future__ import annotations

from flask import current_app

from lottogen.games import GameConfig
from lottogen.services.generation_service import GenerationService
from lottogen.services.history_service import HistoricalDraw, HistoryCache


def get_history_cache() -> HistoryCache:
    """Get the current app's historical draw cache."""

    cache: HistoryCache | None = current_app.extensions.get("history_cache")
    if cache is None:
        raise RuntimeError("History cache not initialized")
    return cache


def get_generation_service() -> GenerationService:
    service: GenerationService | None = current_app.extensions.get("generation_service")
    if service is None:
        raise RuntimeError("Generation service not initialized")
    return service


def get_history(game: GameConfig) -> list[HistoricalDraw]:
    return get_history_cache().draws(game)
