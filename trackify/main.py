import logging

from .core.config import get_settings, Settings
from .core.logging import init_logging
from .db.dal import Database
from .db.migrate import apply_migrations
from .services.tracker import ExpenseTracker


def create_tracker(settings_override: Settings | None = None) -> ExpenseTracker:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB). Falls back to cached get_settings().
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    # Ensure database schema (idempotent) so fresh DBs have tables
    try:
        apply_migrations(settings.db_path)  # type: ignore[arg-type]
    except Exception:
        # Failing to init DB is fatal; re-raise after logging
        logging.getLogger("trackify").exception("failed to apply migrations on startup")
        raise

    tracker = ExpenseTracker(Database(settings.db_path), settings=settings)  # type: ignore[arg-type]
    logging.getLogger("trackify").info(
        "tracker ready",
        extra={"app": settings.app_name, "version": settings.version, "currency": tracker.currency.code},
    )
    return tracker
