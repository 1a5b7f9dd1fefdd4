from typing import Generator

import pytest
from fastapi.testclient import TestClient

from mealprep.core.config import Settings
from mealprep.main import create_app


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_dashboard_renders_without_chart(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Recipe Dashboard" in response.text
    assert "chartData" not in response.text
    # Every canned query is offered in the picker
    assert 'value="tagsForChocolateRecipes"' in response.text


def test_pages_render(client: TestClient):
    for path, heading in [
        ("/search-page", "Search and Filter Recipes"),
        ("/favorites-page", "Favorite Recipes"),
        ("/meal-planner", "Meal Planner"),
    ]:
        response = client.get(path)
        assert response.status_code == 200, path
        assert heading in response.text


def test_security_headers(client: TestClient):
    response = client.get("/health")
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "script-src 'self'" in response.headers["Content-Security-Policy"]


def test_cors_headers(client: TestClient):
    # Simulate a cross-origin request by setting the Origin header
    headers = {"Origin": "http://localhost:3000"}
    response = client.get("/health", headers=headers)
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


@pytest.fixture
def limited_client(db_engine) -> Generator:
    app = create_app(Settings(RATE_LIMIT="2/minute"), engine=db_engine)
    app.state.limiter.enabled = True
    with TestClient(app) as c:
        yield c


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/filters"),
        ("get", "/search"),
        ("get", "/favorites"),
        ("get", "/meal-planner/fetch"),
        ("post", "/meal-planner/clear"),
        ("get", "/query"),
        ("get", "/health"),
    ],
)
def test_rate_limit_applies_to_every_route(limited_client: TestClient, method, path):
    statuses = [
        getattr(limited_client, method)(path, follow_redirects=False).status_code for _ in range(4)
    ]
    assert 429 not in statuses[:2]
    assert statuses[2:] == [429, 429]


def test_rate_limit_response(limited_client: TestClient):
    limited_client.get("/filters")
    limited_client.get("/filters")

    response = limited_client.get("/filters")
    assert response.status_code == 429
    assert response.json()["detail"].startswith("Rate limit exceeded")
    assert int(response.headers["Retry-After"]) >= 1


def test_rate_limit_disabled_under_test(client: TestClient):
    statuses = {client.get("/health").status_code for _ in range(5)}
    assert statuses == {200}
