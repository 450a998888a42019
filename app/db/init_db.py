import logging

from app.db.base import Base
import app.db.models  # noqa: F401  registers every model on Base.metadata

logger = logging.getLogger(__name__)


def init_db(engine) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
