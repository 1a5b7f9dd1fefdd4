# crud.py
# Contains the query and mutation functions behind the HTTP routes.

import logging
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, Query, selectinload

from mealprep import models
from mealprep.filters import RecipeFilters, SortOption, apply_filters, apply_sorting, page_offset

# Get a logger instance
logger = logging.getLogger(__name__)


# --- Recipe Functions ---
def get_recipe(db: Session, recipe_id: int) -> Optional[models.Recipe]:
    return db.get(models.Recipe, recipe_id)


def _paginate_recipes(
    query: Query,
    filters: RecipeFilters,
    sort: Optional[SortOption],
    page: int,
    page_size: int,
) -> Tuple[List[models.Recipe], int]:
    query = apply_filters(query, filters)
    total_count = query.count()
    recipes = (
        apply_sorting(query, sort)
        .options(selectinload(models.Recipe.ingredients))
        .offset(page_offset(page, page_size))
        .limit(page_size)
        .all()
    )
    return recipes, total_count


def search_recipes(
    db: Session,
    filters: RecipeFilters,
    sort: Optional[SortOption] = None,
    page: int = 1,
    page_size: int = 10,
) -> Tuple[List[models.Recipe], int]:
    """
    Retrieve one page of recipes matching the filters, plus the total match count.
    """
    logger.debug(f"Searching recipes with {filters!r}, sort={sort}, page={page}")
    return _paginate_recipes(db.query(models.Recipe), filters, sort, page, page_size)


def get_filter_options(db: Session) -> Tuple[List[str], List[str], List[str]]:
    """
    Distinct tag names, search terms and ingredient names, alphabetically.
    """
    tags = [row[0] for row in db.query(models.Tag.tag_name).distinct().order_by(models.Tag.tag_name)]
    search_terms = [
        row[0]
        for row in db.query(models.SearchTerm.search_term).distinct().order_by(models.SearchTerm.search_term)
    ]
    ingredients = [
        row[0]
        for row in db.query(models.Ingredient.ingredient_name)
        .distinct()
        .order_by(models.Ingredient.ingredient_name)
    ]
    return tags, search_terms, ingredients


# --- Favorite Functions ---
def search_favorites(
    db: Session,
    filters: RecipeFilters,
    sort: Optional[SortOption] = None,
    page: int = 1,
    page_size: int = 10,
) -> Tuple[List[models.Recipe], int]:
    """
    Same as search_recipes, restricted to favorited recipes.
    """
    logger.debug(f"Searching favorites with {filters!r}, sort={sort}, page={page}")
    query = db.query(models.Recipe).join(
        models.Favorite, models.Favorite.recipe_id == models.Recipe.recipe_id
    )
    return _paginate_recipes(query, filters, sort, page, page_size)


def add_favorite(db: Session, recipe_id: int) -> bool:
    """
    Insert-or-ignore. Returns True when a new favorite row was created.
    """
    if db.get(models.Favorite, recipe_id) is not None:
        logger.debug(f"Recipe {recipe_id} is already a favorite")
        return False

    db.add(models.Favorite(recipe_id=recipe_id))
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert of the same recipe
        db.rollback()
        logger.debug(f"Recipe {recipe_id} was favorited concurrently")
        return False
    return True


def remove_favorite(db: Session, recipe_id: int) -> int:
    deleted = db.query(models.Favorite).filter(models.Favorite.recipe_id == recipe_id).delete()
    db.commit()
    logger.debug(f"Removed {deleted} favorite row(s) for recipe {recipe_id}")
    return deleted


# --- Meal Planner Functions ---
def save_meal_plan_entry(db: Session, day: str, meal_type: str, recipe_id: int) -> models.MealPlanEntry:
    """
    Upsert the (day, meal_type) slot; the last write wins.
    """
    entry = db.merge(models.MealPlanEntry(day=day, meal_type=meal_type, recipe_id=recipe_id))
    db.commit()
    return entry


def get_meal_plan(db: Session):
    return (
        db.query(
            models.MealPlanEntry.day,
            models.MealPlanEntry.meal_type,
            models.Recipe.name.label("recipe_name"),
        )
        .join(models.Recipe, models.MealPlanEntry.recipe_id == models.Recipe.recipe_id)
        .order_by(models.MealPlanEntry.day, models.MealPlanEntry.meal_type)
        .all()
    )


def clear_meal_plan(db: Session) -> int:
    deleted = db.query(models.MealPlanEntry).delete()
    db.commit()
    logger.debug(f"Cleared {deleted} meal plan entries")
    return deleted
