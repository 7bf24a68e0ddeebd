import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from emma import models  # noqa: F401
from emma.core.logging_config import configure_logging
from emma.db.base import Base
from emma.db.session import engine

logger = logging.getLogger(__name__)


def init_db(bind: Engine | None = None) -> list[str]:
    """Create missing tables and return their names; existing tables are left alone."""
    target = bind or engine
    existing = set(inspect(target).get_table_names())
    Base.metadata.create_all(bind=target)
    created = [name for name in Base.metadata.tables if name not in existing]
    for name in created:
        logger.info("Created table %s", name)
    return created


if __name__ == "__main__":
    configure_logging()
    init_db()
