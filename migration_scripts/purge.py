import logging
from typing import Callable, Dict

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from mealprep import models

logger = logging.getLogger(__name__)


def purge_all(session_factory: Callable[[], Session]) -> Dict[str, int]:
    """
    Deletes every row from every table, dependent tables first, in one transaction.
    """
    deleted: Dict[str, int] = {}
    with session_factory() as session, session.begin():
        logger.info("Purging all data...")
        for table in reversed(models.Base.metadata.sorted_tables):
            deleted[table.name] = session.execute(delete(table)).rowcount
            logger.info(f"Deleted {deleted[table.name]} rows from {table.name}")
    logger.info("Purge complete.")
    return deleted


def table_counts(session_factory: Callable[[], Session]) -> Dict[str, int]:
    """Row count per table, in dependency order."""
    with session_factory() as session:
        return {
            table.name: session.scalar(select(func.count()).select_from(table))
            for table in models.Base.metadata.sorted_tables
        }
