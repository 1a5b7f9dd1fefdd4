from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError


@pytest.fixture
def catalog(make_recipe):
    """25 recipes named Recipe 01..Recipe 25, inserted in reverse name order."""
    for recipe_id in range(1, 26):
        make_recipe(
            recipe_id=recipe_id,
            name=f"Recipe {26 - recipe_id:02d}",
            servings=recipe_id,
            tags=["vegetarian"] if recipe_id % 5 == 0 else [],
        )


def test_search_without_filters_pages_sum_to_total(client: TestClient, catalog):
    seen = []
    for page in (1, 2, 3):
        response = client.get("/search", params={"page": page})
        assert response.status_code == 200
        data = response.json()
        assert data["totalCount"] == 25
        assert data["totalPages"] == 3
        seen.extend(r["recipe_id"] for r in data["recipes"])

    assert len(seen) == 25
    assert sorted(seen) == list(range(1, 26))


def test_search_page_two_returns_rows_eleven_to_twenty(client: TestClient, catalog):
    response = client.get("/search", params={"sort": "alphabetical", "page": 2})
    names = [r["name"] for r in response.json()["recipes"]]
    assert names == [f"Recipe {n:02d}" for n in range(11, 21)]


def test_search_unsorted_uses_recipe_id_order(client: TestClient, catalog):
    response = client.get("/search", params={"sort": "bogus"})
    ids = [r["recipe_id"] for r in response.json()["recipes"]]
    assert ids == list(range(1, 11))


def test_search_sort_by_servings_descending(client: TestClient, catalog):
    response = client.get("/search", params={"sort": "servings"})
    servings = [r["servings"] for r in response.json()["recipes"]]
    assert servings == list(range(25, 15, -1))


def test_search_tag_filter_returns_only_tagged_recipes(client: TestClient, catalog):
    response = client.get("/search", params={"tag": "vegetarian"})
    data = response.json()
    assert data["totalCount"] == 5
    assert {r["recipe_id"] for r in data["recipes"]} == {5, 10, 15, 20, 25}


def test_search_empty_filters_are_ignored(client: TestClient, catalog):
    response = client.get("/search", params={"tag": "", "searchTerm": "  ", "ingredient": ""})
    assert response.json()["totalCount"] == 25


def test_search_page_below_one_is_first_page(client: TestClient, catalog):
    first = client.get("/search", params={"page": 1}).json()
    zero = client.get("/search", params={"page": 0}).json()
    negative = client.get("/search", params={"page": -3}).json()
    assert zero == first
    assert negative == first


def test_search_page_past_end_is_empty(client: TestClient, catalog):
    data = client.get("/search", params={"page": 9}).json()
    assert data["recipes"] == []
    assert data["totalCount"] == 25


def test_search_huge_page_is_empty(client: TestClient, catalog):
    response = client.get("/search", params={"page": 10**20})
    assert response.status_code == 200
    data = response.json()
    assert data["recipes"] == []
    assert data["totalCount"] == 25
    assert data["totalPages"] == 3


def test_search_non_numeric_page_is_rejected(client: TestClient):
    response = client.get("/search", params={"page": "two"})
    assert response.status_code == 422


def test_search_combined_filters_and_ingredient_list(client: TestClient, make_recipe):
    make_recipe(1, "Garlic Pasta", tags=["dinner"], search_terms=["pasta"],
                ingredients=["spaghetti", "garlic", "olive oil"])
    make_recipe(2, "Garlic Bread", tags=["dinner"], search_terms=["bread"],
                ingredients=["bread", "garlic", "butter"])
    make_recipe(3, "Pancakes", tags=["brunch"], search_terms=["pasta"], ingredients=["flour"])
    make_recipe(4, "Plain Water")

    response = client.get("/search", params={"tag": "dinner", "ingredient": "garlic", "searchTerm": "pasta"})
    data = response.json()
    assert data["totalCount"] == 1
    [recipe] = data["recipes"]
    assert recipe["name"] == "Garlic Pasta"
    assert recipe["ingredients"] == "garlic, olive oil, spaghetti"

    everything = client.get("/search").json()["recipes"]
    by_name = {r["name"]: r for r in everything}
    assert len(everything) == 4
    assert by_name["Plain Water"]["ingredients"] is None


def test_search_database_error_returns_500(client: TestClient):
    with patch("mealprep.crud.search_recipes", side_effect=SQLAlchemyError("connection lost")):
        response = client.get("/search")
    assert response.status_code == 500
    assert response.json() == {"detail": "An error occurred while fetching search results."}


def test_filter_options(client: TestClient, make_recipe):
    make_recipe(1, "Salad", tags=["vegetarian", "low-calorie"], search_terms=["salad"],
                ingredients=["lettuce", "tomato"])
    make_recipe(2, "Soup", tags=["vegetarian"], search_terms=["soup"], ingredients=["tomato"])

    response = client.get("/filters")
    assert response.status_code == 200
    assert response.json() == {
        "tags": ["low-calorie", "vegetarian"],
        "searchTerms": ["salad", "soup"],
        "ingredients": ["lettuce", "tomato"],
    }


def test_filter_options_database_error(client: TestClient):
    with patch("mealprep.crud.get_filter_options", side_effect=SQLAlchemyError("boom")):
        response = client.get("/filters")
    assert response.status_code == 500
