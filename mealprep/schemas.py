# schemas.py
# Defines the Pydantic models (schemas) for request validation and response serialization.
# JSON field names follow the camelCase used by the browser front-end.

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Optional, Any

# Recipe ids are stored as 64-bit signed integers
MAX_RECIPE_ID = 2**63 - 1


# --- Recipe Listing Schemas ---

class RecipeSummary(BaseModel):
    recipe_id: int
    name: str
    description: Optional[str] = None
    servings: Optional[int] = None
    # Distinct ingredient names joined with ", "
    ingredients: Optional[str] = None

    @model_validator(mode='before')
    @classmethod
    def transform_from_orm(cls, data: Any) -> Any:
        if hasattr(data, "recipe_id"):  # Is an ORM object
            names = sorted({i.ingredient_name for i in data.ingredients})
            return {
                "recipe_id": data.recipe_id,
                "name": data.name,
                "description": data.description,
                "servings": data.servings,
                "ingredients": ", ".join(names) if names else None,
            }
        return data

    model_config = ConfigDict(from_attributes=True)


class RecipePage(BaseModel):
    total_count: int = Field(..., alias="totalCount")
    total_pages: int = Field(..., alias="totalPages")

    model_config = ConfigDict(populate_by_name=True)


class SearchResults(RecipePage):
    recipes: List[RecipeSummary]


class FavoriteResults(RecipePage):
    favorites: List[RecipeSummary]


class FilterOptions(BaseModel):
    tags: List[str]
    search_terms: List[str] = Field(..., alias="searchTerms")
    ingredients: List[str]

    model_config = ConfigDict(populate_by_name=True)


# --- Favorite Schemas ---

class FavoriteRequest(BaseModel):
    recipe_id: int = Field(..., ge=1, le=MAX_RECIPE_ID)


class ActionResult(BaseModel):
    success: bool
    message: str


# --- Meal Planner Schemas ---

class MealPlanSave(BaseModel):
    day: str
    meal: str
    recipe_id: int = Field(..., alias="recipeId", ge=1, le=MAX_RECIPE_ID)

    model_config = ConfigDict(populate_by_name=True)


class MealPlanItem(BaseModel):
    day: str
    meal_type: str
    recipe_name: str

    model_config = ConfigDict(from_attributes=True)


class MealPlan(BaseModel):
    meal_plan: List[MealPlanItem] = Field(..., alias="mealPlan")

    model_config = ConfigDict(populate_by_name=True)


# --- Dashboard Chart Schemas ---

class ChartDataset(BaseModel):
    label: str = ""
    data: List[int] = []
    background_color: List[str] = Field(default_factory=list, alias="backgroundColor")
    recipe_names: List[str] = Field(default_factory=list, alias="recipeNames")

    model_config = ConfigDict(populate_by_name=True)


class ChartData(BaseModel):
    labels: List[str] = []
    datasets: List[ChartDataset]
