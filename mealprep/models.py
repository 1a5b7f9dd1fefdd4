# models.py
# Defines the SQLAlchemy ORM models for the database tables.

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from mealprep.db.session import Base


class Recipe(Base):
    """
    Recipe model for the 'recipes' table.
    """
    __tablename__ = "recipes"

    recipe_id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    serving_size = Column(String, nullable=True)
    servings = Column(Integer, nullable=True)

    # Relationships
    ingredients = relationship(
        "Ingredient",
        secondary="recipe_ingredients",
        order_by="Ingredient.ingredient_name",
        viewonly=True,
    )
    tags = relationship("Tag", secondary="recipe_tags", viewonly=True)
    search_terms = relationship("SearchTerm", secondary="recipe_search_terms", viewonly=True)

    steps = relationship(
        "Step", back_populates="recipe", order_by="Step.step_number", cascade="all, delete-orphan"
    )


class Ingredient(Base):
    """
    Master list of ingredients.
    """
    __tablename__ = "ingredients"

    ingredient_id = Column(Integer, primary_key=True, autoincrement=False)
    ingredient_name = Column(String, index=True, nullable=False)


class RecipeIngredient(Base):
    """
    Association between Recipe and Ingredient.
    """
    __tablename__ = "recipe_ingredients"

    recipe_id = Column(Integer, ForeignKey("recipes.recipe_id"), primary_key=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.ingredient_id"), primary_key=True, index=True)


class Step(Base):
    """
    A numbered preparation step for a recipe.
    """
    __tablename__ = "steps"

    recipe_id = Column(Integer, ForeignKey("recipes.recipe_id"), primary_key=True)
    step_number = Column(Integer, primary_key=True)
    step_description = Column(Text, nullable=True)

    recipe = relationship("Recipe", back_populates="steps")


class Tag(Base):
    __tablename__ = "tags"

    tag_name = Column(String, primary_key=True)


class RecipeTag(Base):
    __tablename__ = "recipe_tags"

    recipe_id = Column(Integer, ForeignKey("recipes.recipe_id"), primary_key=True)
    tag_name = Column(String, ForeignKey("tags.tag_name"), primary_key=True, index=True)


class SearchTerm(Base):
    __tablename__ = "search_terms"

    search_term = Column(String, primary_key=True)


class RecipeSearchTerm(Base):
    __tablename__ = "recipe_search_terms"

    recipe_id = Column(Integer, ForeignKey("recipes.recipe_id"), primary_key=True)
    search_term = Column(String, ForeignKey("search_terms.search_term"), primary_key=True, index=True)


class Favorite(Base):
    """
    A favorited recipe. At most one row per recipe.
    """
    __tablename__ = "favorites"

    recipe_id = Column(Integer, ForeignKey("recipes.recipe_id"), primary_key=True)

    recipe = relationship("Recipe")


class MealPlanEntry(Base):
    """
    Assignment of a recipe to a (day, meal type) slot of the meal planner.
    """
    __tablename__ = "meal_planner"

    day = Column(String, primary_key=True)
    meal_type = Column(String, primary_key=True)
    recipe_id = Column(Integer, ForeignKey("recipes.recipe_id"), nullable=False, index=True)

    recipe = relationship("Recipe")
