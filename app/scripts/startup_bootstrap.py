from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from app.db.models import Base, DiagnosisResult
from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _diagnosis_results_needs_create(bind: Engine) -> bool:
    inspector = inspect(bind)
    if not inspector.has_table(DiagnosisResult.__tablename__):
        return True

    columns = {c["name"] for c in inspector.get_columns(DiagnosisResult.__tablename__)}
    required = {"id", "symptoms", "gender", "year_of_birth", "diagnosis", "is_valid", "timestamp"}
    missing = required - columns
    if missing:
        raise RuntimeError(f"diagnosis_results is missing columns: {sorted(missing)}; run alembic upgrade head")
    return False


def bootstrap(bind: Engine | None = None) -> bool:
    """Create the diagnosis_results table when absent. Returns True if it was created."""
    bind = bind or default_engine
    if not _diagnosis_results_needs_create(bind):
        logger.info("diagnosis_results schema already up to date")
        return False

    logger.info("Creating diagnosis_results table")
    Base.metadata.create_all(bind=bind, tables=[DiagnosisResult.__table__])
    return True


def main() -> None:
    _configure_logging()
    try:
        bootstrap()
    except Exception:
        # Never crash startup process due to bootstrap tasks.
        logger.exception("Startup bootstrap terminated with unexpected error")


if __name__ == "__main__":
    main()
