"""
Loads the CSV snapshots into the database.

Tables are imported one at a time, in dependency order, each inside its own
transaction. A failure rolls back the table being imported and stops the
migration; tables imported before it stay committed.
"""
import logging
import os
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Type

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mealprep import models
from migration_scripts.utils import coerce_value, read_csv_rows

logger = logging.getLogger(__name__)


class MigrationError(Exception):
    """Raised when a table cannot be imported; the table's transaction was rolled back."""


@dataclass(frozen=True)
class ImportStep:
    csv_file: str
    model: Type[models.Base]
    columns: List[str]

    @property
    def table_name(self) -> str:
        return self.model.__tablename__


# Order matters: recipes, ingredients, tags and search terms before the rows that reference them
IMPORT_STEPS: Sequence[ImportStep] = (
    ImportStep("recipes.csv", models.Recipe, ["recipe_id", "name", "description", "serving_size", "servings"]),
    ImportStep("ingredients.csv", models.Ingredient, ["ingredient_id", "ingredient_name"]),
    ImportStep("recipe_ingredients.csv", models.RecipeIngredient, ["recipe_id", "ingredient_id"]),
    ImportStep("steps.csv", models.Step, ["recipe_id", "step_number", "step_description"]),
    ImportStep("tags.csv", models.Tag, ["tag_name"]),
    ImportStep("recipe_tags.csv", models.RecipeTag, ["recipe_id", "tag_name"]),
    ImportStep("search_terms.csv", models.SearchTerm, ["search_term"]),
    ImportStep("recipe_search_terms.csv", models.RecipeSearchTerm, ["recipe_id", "search_term"]),
)


def import_table(session: Session, step: ImportStep, data_dir: str) -> int:
    """
    Imports one CSV file into its table in a single transaction.
    Returns the number of rows inserted; an empty file inserts nothing.
    """
    path = os.path.join(data_dir, step.csv_file)
    # ValueError covers pandas ParserError and files that are not valid UTF-8
    try:
        rows = read_csv_rows(path, step.columns)
    except (OSError, ValueError) as e:
        logger.error(f"Error reading file {path}: {e}")
        raise MigrationError(f"Could not read {path}") from e

    logger.info(f"Parsed {len(rows)} rows from {path}")
    if not rows:
        logger.info(f"No data found in {path}. Skipping import.")
        return 0

    table = step.model.__table__
    try:
        with session.begin():
            records = [
                {col: coerce_value(row[col], table.c[col]) for col in step.columns}
                for row in rows
            ]
            session.execute(insert(table), records)
    except (SQLAlchemyError, ValueError) as e:
        logger.error(f"Error importing into {step.table_name}, rolled back: {e}")
        raise MigrationError(f"Import of {path} into {step.table_name} failed") from e

    logger.info(f"Data imported into {step.table_name}")
    return len(rows)


def run_migration(
    session_factory: Callable[[], Session],
    data_dir: str,
    steps: Sequence[ImportStep] = IMPORT_STEPS,
) -> Dict[str, int]:
    """
    Runs every import step in order and returns rows inserted per table.
    The first failing step aborts the remaining ones.
    """
    counts: Dict[str, int] = {}
    with session_factory() as session:
        for step in steps:
            counts[step.table_name] = import_table(session, step, data_dir)
            logger.info(f"{step.table_name} migration completed.")
    return counts
