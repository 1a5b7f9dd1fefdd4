import pytest
from typing import Generator, Iterable
from fastapi.testclient import TestClient

# It is important to set environment variables before importing app modules
import os
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["ENVIRONMENT"] = "testing"

from mealprep import models
from mealprep.core.config import Settings
from mealprep.db.session import Base, make_engine, make_session_factory
from mealprep.main import create_app

# Create a test database
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = make_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = make_session_factory(engine)


@pytest.fixture(scope="session", autouse=True)
def db_engine():
    # Create tables
    Base.metadata.create_all(bind=engine)
    yield engine
    # Drop tables
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    os.remove("./test.db")


@pytest.fixture(autouse=True)
def clean_tables(db_engine):
    yield
    # Routes commit through their own sessions, so wipe rows rather than rolling back
    with db_engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture
def session_factory(db_engine):
    return TestingSessionLocal


@pytest.fixture(scope="function")
def db(db_engine) -> Generator:
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_engine) -> Generator:
    app = create_app(Settings(), engine=db_engine)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_recipe(db):
    """
    Factory creating a recipe together with its tags, search terms,
    ingredients and steps. Shared tags/terms/ingredients are reused.
    """
    def _make_recipe(
        recipe_id: int,
        name: str,
        servings: int = None,
        description: str = None,
        tags: Iterable[str] = (),
        search_terms: Iterable[str] = (),
        ingredients: Iterable[str] = (),
        steps: int = 0,
    ) -> models.Recipe:
        recipe = models.Recipe(recipe_id=recipe_id, name=name, servings=servings, description=description)
        db.add(recipe)

        for tag in tags:
            if db.get(models.Tag, tag) is None:
                db.add(models.Tag(tag_name=tag))
        for term in search_terms:
            if db.get(models.SearchTerm, term) is None:
                db.add(models.SearchTerm(search_term=term))

        ingredient_ids = []
        for ingredient_name in ingredients:
            ingredient = (
                db.query(models.Ingredient)
                .filter(models.Ingredient.ingredient_name == ingredient_name)
                .first()
            )
            if ingredient is None:
                next_id = (db.query(models.Ingredient).count() or 0) + 1
                ingredient = models.Ingredient(ingredient_id=next_id, ingredient_name=ingredient_name)
                db.add(ingredient)
                db.flush()
            ingredient_ids.append(ingredient.ingredient_id)
        db.flush()

        for tag in tags:
            db.add(models.RecipeTag(recipe_id=recipe_id, tag_name=tag))
        for term in search_terms:
            db.add(models.RecipeSearchTerm(recipe_id=recipe_id, search_term=term))
        for ingredient_id in ingredient_ids:
            db.add(models.RecipeIngredient(recipe_id=recipe_id, ingredient_id=ingredient_id))
        for number in range(1, steps + 1):
            db.add(models.Step(recipe_id=recipe_id, step_number=number, step_description=f"Step {number}"))

        db.commit()
        return recipe

    return _make_recipe
