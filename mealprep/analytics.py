# analytics.py
# Canned dashboard queries and their conversion into chart data.
#
# Every query identifier maps to one AnalyticsQuery describing which result
# columns hold the chart label and value, so rows are read the same way for
# the whole result set.

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from sqlalchemy import func, select, Select
from sqlalchemy.orm import Session

from mealprep import models, schemas

logger = logging.getLogger(__name__)

SINGLE_COLOR = "rgba(54, 162, 235, 0.7)"

DISTINCT_COLORS = [
    "rgba(255, 99, 71, 0.7)",    # Tomato Red
    "rgba(30, 144, 255, 0.7)",   # Dodger Blue
    "rgba(50, 205, 50, 0.7)",    # Lime Green
    "rgba(255, 165, 0, 0.7)",    # Orange
    "rgba(138, 43, 226, 0.7)",   # Blue Violet
    "rgba(240, 128, 128, 0.7)",  # Light Coral
    "rgba(0, 139, 139, 0.7)",    # Dark Cyan
    "rgba(255, 20, 147, 0.7)",   # Deep Pink
    "rgba(70, 130, 180, 0.7)",   # Steel Blue
    "rgba(154, 205, 50, 0.7)",   # Yellow Green
    "rgba(255, 215, 0, 0.7)",    # Gold
    "rgba(0, 100, 0, 0.7)",      # Dark Green
    "rgba(205, 92, 92, 0.7)",    # Indian Red
    "rgba(75, 0, 130, 0.7)",     # Indigo
    "rgba(255, 140, 0, 0.7)",    # Dark Orange
    "rgba(127, 255, 212, 0.7)",  # Aquamarine
    "rgba(220, 20, 60, 0.7)",    # Crimson
    "rgba(139, 69, 19, 0.7)",    # Saddle Brown
    "rgba(0, 191, 255, 0.7)",    # Deep Sky Blue
    "rgba(34, 139, 34, 0.7)",    # Forest Green
]


@dataclass(frozen=True)
class AnalyticsQuery:
    key: str
    title: str
    dataset_label: str
    build: Callable[[], Select]
    label_column: str
    value_column: str
    single_color: bool = False
    recipe_names_column: Optional[str] = None

    def color_for(self, index: int) -> str:
        if self.single_color:
            return SINGLE_COLOR
        return DISTINCT_COLORS[index % len(DISTINCT_COLORS)]

    def empty_chart(self) -> schemas.ChartData:
        return schemas.ChartData(datasets=[schemas.ChartDataset(label=self.dataset_label)])

    def to_chart_data(self, rows) -> schemas.ChartData:
        chart = self.empty_chart()
        dataset = chart.datasets[0]
        for index, row in enumerate(rows):
            chart.labels.append(row[self.label_column])
            dataset.data.append(row[self.value_column])
            dataset.background_color.append(self.color_for(index))
            if self.recipe_names_column and row[self.recipe_names_column]:
                dataset.recipe_names.append(row[self.recipe_names_column])
        return chart


# --- Query builders ---

def popular_vegetarian() -> Select:
    popularity = func.count(models.RecipeTag.tag_name).label("Popularity")
    return (
        select(models.Recipe.name.label("Recipe"), popularity)
        .join(models.RecipeTag, models.RecipeTag.recipe_id == models.Recipe.recipe_id)
        .where(models.RecipeTag.tag_name == "vegetarian")
        .group_by(models.Recipe.recipe_id, models.Recipe.name)
        .order_by(popularity.desc(), models.Recipe.name)
        .limit(5)
    )


def specific_ingredient() -> Select:
    return (
        select(
            models.Ingredient.ingredient_name.label("Ingredient"),
            func.count(models.Recipe.recipe_id).label("RecipeCount"),
            func.aggregate_strings(models.Recipe.name, ", ").label("RecipeNames"),
        )
        .select_from(models.Recipe)
        .join(models.RecipeIngredient, models.RecipeIngredient.recipe_id == models.Recipe.recipe_id)
        .join(models.Ingredient, models.Ingredient.ingredient_id == models.RecipeIngredient.ingredient_id)
        .where(models.Ingredient.ingredient_name.in_(["garlic", "olive oil"]))
        .group_by(models.Ingredient.ingredient_name)
        .order_by(models.Ingredient.ingredient_name)
    )


def common_low_calorie_tag() -> Select:
    count = func.count().label("Count")
    return (
        select(models.RecipeTag.tag_name.label("Tag"), count)
        .join(models.Recipe, models.Recipe.recipe_id == models.RecipeTag.recipe_id)
        .where(models.RecipeTag.tag_name == "low-calorie")
        .group_by(models.RecipeTag.tag_name)
        .order_by(count.desc())
        .limit(1)
    )


def top_steps() -> Select:
    steps = func.count(models.Step.step_number).label("Steps")
    return (
        select(models.Recipe.name.label("Recipe"), steps)
        .join(models.Step, models.Step.recipe_id == models.Recipe.recipe_id)
        .group_by(models.Recipe.recipe_id, models.Recipe.name)
        .order_by(steps.desc(), models.Recipe.name)
        .limit(5)
    )


def top_ingredients() -> Select:
    usage = func.count(models.RecipeIngredient.ingredient_id).label("Usage")
    return (
        select(models.Ingredient.ingredient_name.label("Ingredient"), usage)
        .join(models.RecipeIngredient, models.RecipeIngredient.ingredient_id == models.Ingredient.ingredient_id)
        .group_by(models.Ingredient.ingredient_name)
        .order_by(usage.desc(), models.Ingredient.ingredient_name)
        .limit(10)
    )


def meal_type() -> Select:
    return (
        select(
            models.RecipeTag.tag_name.label("MealType"),
            func.count(models.Recipe.recipe_id).label("RecipeCount"),
            func.aggregate_strings(models.Recipe.name, ", ").label("RecipeNames"),
        )
        .select_from(models.Recipe)
        .join(models.RecipeTag, models.RecipeTag.recipe_id == models.Recipe.recipe_id)
        .where(models.RecipeTag.tag_name.in_(["brunch", "desserts"]))
        .group_by(models.RecipeTag.tag_name)
        .order_by(models.RecipeTag.tag_name)
    )


def top_tags_for_top_ingredients() -> Select:
    usage = func.count(models.RecipeIngredient.ingredient_id).label("Usage")
    top = (
        select(models.RecipeIngredient.ingredient_id, usage)
        .group_by(models.RecipeIngredient.ingredient_id)
        .order_by(usage.desc(), models.RecipeIngredient.ingredient_id)
        .limit(3)
        .cte("top_ingredients")
    )
    tag_count = func.count(models.RecipeTag.recipe_id).label("TagCount")
    return (
        select(models.RecipeTag.tag_name.label("Tag"), tag_count)
        .join(models.RecipeIngredient, models.RecipeIngredient.recipe_id == models.RecipeTag.recipe_id)
        .join(top, top.c.ingredient_id == models.RecipeIngredient.ingredient_id)
        .group_by(models.RecipeTag.tag_name)
        .order_by(tag_count.desc(), models.RecipeTag.tag_name)
        .limit(20)
    )


def tags_for_chocolate_recipes() -> Select:
    frequency = func.count().label("Frequency")
    return (
        select(models.Tag.tag_name.label("Tag"), frequency)
        .select_from(models.RecipeIngredient)
        .join(models.Ingredient, models.Ingredient.ingredient_id == models.RecipeIngredient.ingredient_id)
        .join(models.RecipeTag, models.RecipeTag.recipe_id == models.RecipeIngredient.recipe_id)
        .join(models.Tag, models.Tag.tag_name == models.RecipeTag.tag_name)
        .where(models.Ingredient.ingredient_name.like("%chocolate%"))
        .group_by(models.Tag.tag_name)
        .order_by(frequency.desc(), models.Tag.tag_name)
        .limit(10)
    )


ANALYTICS_QUERIES: Dict[str, AnalyticsQuery] = {
    q.key: q
    for q in [
        AnalyticsQuery(
            key="popularVegetarian",
            title="Most popular vegetarian recipes",
            dataset_label="Popularity",
            build=popular_vegetarian,
            label_column="Recipe",
            value_column="Popularity",
            single_color=True,
        ),
        AnalyticsQuery(
            key="specificIngredient",
            title="Recipes using garlic or olive oil",
            dataset_label="Recipes by Ingredient",
            build=specific_ingredient,
            label_column="Ingredient",
            value_column="RecipeCount",
            recipe_names_column="RecipeNames",
        ),
        AnalyticsQuery(
            key="commonLowCalorieTag",
            title="Low-calorie recipes",
            dataset_label="Low-Calorie Recipes",
            build=common_low_calorie_tag,
            label_column="Tag",
            value_column="Count",
        ),
        AnalyticsQuery(
            key="topSteps",
            title="Recipes with the most steps",
            dataset_label="Number of Steps",
            build=top_steps,
            label_column="Recipe",
            value_column="Steps",
            single_color=True,
        ),
        AnalyticsQuery(
            key="topIngredients",
            title="Most used ingredients",
            dataset_label="Most Used Ingredients",
            build=top_ingredients,
            label_column="Ingredient",
            value_column="Usage",
        ),
        AnalyticsQuery(
            key="mealType",
            title="Brunch and dessert recipes",
            dataset_label="Recipes by Meal Type",
            build=meal_type,
            label_column="MealType",
            value_column="RecipeCount",
            recipe_names_column="RecipeNames",
        ),
        AnalyticsQuery(
            key="topTagsForTopIngredients",
            title="Tags of recipes using the top 3 ingredients",
            dataset_label="Tags for Top Ingredients",
            build=top_tags_for_top_ingredients,
            label_column="Tag",
            value_column="TagCount",
        ),
        AnalyticsQuery(
            key="tagsForChocolateRecipes",
            title="Tags of chocolate recipes",
            dataset_label="Tags for Chocolate Recipes",
            build=tags_for_chocolate_recipes,
            label_column="Tag",
            value_column="Frequency",
        ),
    ]
}


def get_query(key: Optional[str]) -> Optional[AnalyticsQuery]:
    if key is None:
        return None
    return ANALYTICS_QUERIES.get(key)


def run_query(db: Session, query: AnalyticsQuery) -> schemas.ChartData:
    logger.debug(f"Running dashboard query {query.key}")
    rows: List = db.execute(query.build()).mappings().all()
    return query.to_chart_data(rows)
