import argparse
import logging
import sys

from mealprep import models
from mealprep.core.config import settings
from mealprep.db.session import make_engine, make_session_factory
from migration_scripts.import_csv import MigrationError, run_migration
from migration_scripts.purge import purge_all, table_counts

logger = logging.getLogger(__name__)


def migrate_all(session_factory, data_dir: str) -> None:
    logger.info("=== MIGRATING ALL DATA ===")
    counts = run_migration(session_factory, data_dir)
    logger.info(f"=== MIGRATE ALL COMPLETE ({sum(counts.values())} rows) ===")


def verify(session_factory) -> None:
    for table, count in table_counts(session_factory).items():
        logger.info(f"{table}: {count} rows")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Master Migration Script")
    parser.add_argument(
        "action",
        choices=["migrate-all", "purge-all", "verify"],
        help="Action to perform",
    )
    parser.add_argument("--data-dir", default=settings.DATA_DIR, help="Directory holding the CSV files")
    parser.add_argument("--database-url", default=settings.DATABASE_URL)

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    engine = make_engine(args.database_url)
    session_factory = make_session_factory(engine)
    try:
        if args.action == "migrate-all":
            models.Base.metadata.create_all(bind=engine)
            migrate_all(session_factory, args.data_dir)
        elif args.action == "purge-all":
            purge_all(session_factory)
        elif args.action == "verify":
            verify(session_factory)
    except MigrationError as e:
        logger.error(f"Migration error: {e}")
        return 1
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
