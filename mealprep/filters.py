# mealprep/filters.py
from typing import Any, Optional
import enum

from fastapi import Query as FastAPIQuery
from pydantic import BaseModel, field_validator
from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from mealprep import models

# Largest OFFSET handed to the database; fits a 32-bit signed integer
MAX_OFFSET = 2**31 - 1


class SortOption(str, enum.Enum):
    ALPHABETICAL = "alphabetical"
    SERVINGS = "servings"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["SortOption"]:
        """Unknown or missing sort keys mean 'unsorted'."""
        try:
            return cls(value)
        except ValueError:
            return None


class RecipeFilters(BaseModel):
    """
    Optional tag / search term / ingredient filters shared by the search and
    favorites listings. None, empty and whitespace-only values all mean
    "do not filter on this field".
    """
    tag: Optional[str] = None
    search_term: Optional[str] = None
    ingredient: Optional[str] = None

    @field_validator("tag", "search_term", "ingredient", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None


def recipe_filters(
    tag: Optional[str] = FastAPIQuery(default=None, description="Exact tag name"),
    search_term: Optional[str] = FastAPIQuery(
        default=None, alias="searchTerm", description="Exact search term"
    ),
    ingredient: Optional[str] = FastAPIQuery(default=None, description="Exact ingredient name"),
) -> RecipeFilters:
    return RecipeFilters(tag=tag, search_term=search_term, ingredient=ingredient)


def apply_filters(query: Query, filters: RecipeFilters) -> Query:
    # Each filter is an EXISTS over the association table, so recipes are never duplicated.
    if filters.tag is not None:
        query = query.filter(models.Recipe.tags.any(models.Tag.tag_name == filters.tag))

    if filters.search_term is not None:
        query = query.filter(
            models.Recipe.search_terms.any(models.SearchTerm.search_term == filters.search_term)
        )

    if filters.ingredient is not None:
        query = query.filter(
            models.Recipe.ingredients.any(models.Ingredient.ingredient_name == filters.ingredient)
        )

    return query


def apply_sorting(query: Query, sort: Optional[SortOption]) -> Query:
    if sort is SortOption.ALPHABETICAL:
        query = query.order_by(asc(models.Recipe.name))
    elif sort is SortOption.SERVINGS:
        query = query.order_by(desc(models.Recipe.servings))
    # recipe_id keeps page boundaries stable, and is the whole ordering when unsorted
    return query.order_by(models.Recipe.recipe_id)


def page_offset(page: int, page_size: int) -> int:
    """
    1-based page to row offset. Pages below 1 are treated as the first page.
    The offset is capped at MAX_OFFSET so that pages far past the end still
    bind as a database integer and simply return no rows.
    """
    return min((max(page, 1) - 1) * page_size, MAX_OFFSET)
