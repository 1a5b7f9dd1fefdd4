# api/favorites.py
# Handles favoriting recipes and listing the favorites.

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mealprep import crud
from mealprep import schemas
from mealprep.api.recipes import total_pages
from mealprep.core.config import Settings, get_settings
from mealprep.db.session import get_db
from mealprep.filters import RecipeFilters, SortOption, recipe_filters

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("", response_model=schemas.FavoriteResults)
def read_favorites(
        filters: RecipeFilters = Depends(recipe_filters),
        sort: Optional[str] = Query(default=None),
        page: int = Query(default=1, description="1-based page number"),
        db: Session = Depends(get_db),
        settings: Settings = Depends(get_settings),
):
    """
    Retrieve one page of favorited recipes. Filtering, sorting and paging work like /search.
    """
    try:
        recipes, total_count = crud.search_favorites(
            db, filters, sort=SortOption.parse(sort), page=page, page_size=settings.PAGE_SIZE
        )
    except SQLAlchemyError:
        logger.exception("Error fetching favorite recipes")
        raise HTTPException(status_code=500, detail="Error fetching favorite recipes.")

    return schemas.FavoriteResults(
        favorites=recipes,
        total_count=total_count,
        total_pages=total_pages(total_count, settings.PAGE_SIZE),
    )


@router.post("/add", response_model=schemas.ActionResult)
def add_favorite(favorite: schemas.FavoriteRequest, db: Session = Depends(get_db)):
    """
    Add a recipe to the favorites. Adding an existing favorite is not an error.
    """
    logger.debug(f"Adding recipe {favorite.recipe_id} to favorites")
    try:
        if crud.get_recipe(db, favorite.recipe_id) is None:
            logger.warning(f"Recipe with ID {favorite.recipe_id} not found.")
            raise HTTPException(status_code=404, detail="Recipe not found")
        added = crud.add_favorite(db, favorite.recipe_id)
    except SQLAlchemyError:
        logger.exception(f"Error adding recipe {favorite.recipe_id} to favorites")
        raise HTTPException(status_code=500, detail="Error adding recipe to favorites.")

    if added:
        return schemas.ActionResult(success=True, message="Recipe added to favorites!")
    return schemas.ActionResult(success=False, message="Recipe already in favorites.")


@router.post("/remove", response_model=schemas.ActionResult)
def remove_favorite(favorite: schemas.FavoriteRequest, db: Session = Depends(get_db)):
    try:
        crud.remove_favorite(db, favorite.recipe_id)
    except SQLAlchemyError:
        logger.exception(f"Error removing recipe {favorite.recipe_id} from favorites")
        raise HTTPException(status_code=500, detail="Error removing recipe from favorites.")

    return schemas.ActionResult(success=True, message="Recipe removed from favorites!")
