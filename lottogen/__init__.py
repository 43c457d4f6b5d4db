"""Flask application package."""

from __future__ import annotations

from typing import Any

from flask import Flask

try:
    from dotenv import load_dotenv
except Exception:  # pragma: no cover
    load_dotenv = None  # type: ignore[assignment]

__version__ = "1.0.0"


def create_app(overrides: dict[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: config values applied after the environment config
            (tests point DATA_DIR at fixture files this way).

    Returns:
        Configured Flask application.
    """
    if load_dotenv is not None:
        load_dotenv()

    from lottogen.config import get_config
    from lottogen.error_handlers import register_error_handlers
    from lottogen.logging_config import configure_logging
    from lottogen.routes.analysis import analysis_bp
    from lottogen.routes.draw import draw_bp
    from lottogen.routes.export import export_bp
    from lottogen.routes.health import health_bp
    from lottogen.services.draw_service import DrawService
    from lottogen.services.generation_service import GenerationService
    from lottogen.services.history_service import HistoryCache

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    register_error_handlers(app)

    app.extensions["history_cache"] = HistoryCache(
        data_dir=app.config["DATA_DIR"],
        base_url=app.config["DATA_BASE_URL"],
        timeout=float(app.config["HTTP_TIMEOUT"]),
    )
    app.extensions["generation_service"] = GenerationService(
        DrawService(
            max_attempts=int(app.config["MAX_DRAW_ATTEMPTS"]),
            max_batch_size=int(app.config["MAX_BATCH_SIZE"]),
        )
    )

    app.register_blueprint(health_bp)
    app.register_blueprint(draw_bp)
    app.register_blueprint(analysis_bp)
    app.register_blueprint(export_bp)

    return app
