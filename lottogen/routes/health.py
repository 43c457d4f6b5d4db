"""Health check and game registry routes."""

from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint

from lottogen import __version__
from lottogen.games import list_games
from lottogen.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Health check endpoint."""

    return ok({"status": "ok", "version": __version__})


@health_bp.get("/games")
def games():
    """Supported games with their ranges and prize tables."""

    return ok([asdict(game) for game in list_games()])
