import itertools
import json
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from mealprep.core.logging_middleware import StructuredLoggingMiddleware

# Minimal app: the middleware alone, without settings on app.state
app = FastAPI()
app.add_middleware(StructuredLoggingMiddleware)


@app.get("/search")
async def listing_request():
    return {"recipes": []}


@app.get("/boom")
async def failing_request():
    raise ValueError("planned error")


bare_client = TestClient(app)


@pytest.fixture
def events():
    """Structured events emitted during the test, decoded from JSON."""
    with patch("mealprep.core.logging_middleware.structured_logger") as mock_logger:
        yield lambda: [json.loads(call.args[0]) for call in mock_logger.info.call_args_list]


@pytest.fixture
def clock():
    with patch("mealprep.core.logging_middleware.time") as mock_time:
        mock_time.time.return_value = 1700000000.0
        yield mock_time.perf_counter


def test_error_is_always_logged(events):
    # BaseHTTPMiddleware re-raises, so the exception reaches the test client
    with patch("random.random", return_value=0.99), pytest.raises(ValueError):
        bare_client.get("/boom")

    (event,) = events()
    assert event["status_code"] == 500
    assert event["error"] == "ValueError: planned error"
    assert event["path"] == "/boom"
    assert event["endpoint"] == "failing_request"


def test_slow_listing_request_carries_filters(events, clock):
    clock.side_effect = [1000.0, 1000.6]  # 600ms

    with patch("random.random", return_value=0.99):
        bare_client.get("/search", params={"tag": "vegetarian", "page": "2", "utm_source": "mail"})

    (event,) = events()
    assert event["duration_ms"] >= 500
    assert event["endpoint"] == "listing_request"
    assert event["listing"] == {"tag": "vegetarian", "page": "2"}
    assert event["environment"] is None
    assert event["error"] is None


@pytest.mark.parametrize("sample,logged", [(0.01, True), (0.10, False)])
def test_fast_requests_are_sampled(events, clock, sample, logged):
    # Iterator avoids StopIteration if the framework reads the clock again
    clock.side_effect = itertools.count(start=100.0, step=0.01)

    with patch("random.random", return_value=sample):
        bare_client.get("/search")

    assert bool(events()) is logged


def test_app_environment_is_logged(events, client):
    with patch("random.random", return_value=0.0):
        client.get("/health")

    (event,) = events()
    assert event["environment"] == "testing"
    assert event["endpoint"] == "health"
