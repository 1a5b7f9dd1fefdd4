# api/recipes.py
# Handles the recipe search and filter-option endpoints.

import logging
import math
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

# Import local modules
from mealprep import crud
from mealprep import schemas
from mealprep.core.config import Settings, get_settings
from mealprep.db.session import get_db
from mealprep.filters import RecipeFilters, SortOption, recipe_filters

# Create an API router
router = APIRouter()

# Get a logger instance
logger = logging.getLogger(__name__)


def total_pages(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size) if page_size else 0


@router.get("/search", response_model=schemas.SearchResults)
def search_recipes(
        filters: RecipeFilters = Depends(recipe_filters),
        sort: Optional[str] = Query(
            default=None, description="'alphabetical' (name A-Z) or 'servings' (most first)"
        ),
        page: int = Query(default=1, description="1-based page number"),
        db: Session = Depends(get_db),
        settings: Settings = Depends(get_settings),
):
    """
    Retrieve one page of recipes matching the optional tag, search term and ingredient filters.
    """
    logger.debug(f"Searching recipes: {filters!r} sort={sort} page={page}")
    try:
        recipes, total_count = crud.search_recipes(
            db, filters, sort=SortOption.parse(sort), page=page, page_size=settings.PAGE_SIZE
        )
    except SQLAlchemyError:
        logger.exception("Error fetching search results")
        raise HTTPException(status_code=500, detail="An error occurred while fetching search results.")

    return schemas.SearchResults(
        recipes=recipes,
        total_count=total_count,
        total_pages=total_pages(total_count, settings.PAGE_SIZE),
    )


@router.get("/filters", response_model=schemas.FilterOptions)
def read_filter_options(db: Session = Depends(get_db)):
    """
    Distinct tags, search terms and ingredient names for the filter drop-downs.
    """
    try:
        tags, search_terms, ingredients = crud.get_filter_options(db)
    except SQLAlchemyError:
        logger.exception("Error fetching filters")
        raise HTTPException(status_code=500, detail="An error occurred while fetching filters.")

    return schemas.FilterOptions(tags=tags, search_terms=search_terms, ingredients=ingredients)
