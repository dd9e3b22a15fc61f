import math

import pytest
from fastapi.testclient import TestClient

from stats_analyzer.main import app


@pytest.fixture(scope="module")
def client():
    # Entering the context runs the lifespan, which flips the readiness flag
    with TestClient(app) as c:
        yield c


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "version": app.version}


def test_ready(client):
    r = client.get("/ready")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"
    assert "standardDeviation" in r.json()["statistics"]


def test_summary(client):
    r = client.post("/summary", json={"numbers": [4, 8, 2, 4, 5]})
    assert r.status_code == 200
    data = r.json()
    assert data["average"] == 4.6
    assert data["maximum"] == 8
    assert data["minimum"] == 2
    assert data["median"] == 4
    assert data["mode"] == [4]
    assert data["range"] == 6
    assert math.isclose(data["standardDeviation"], math.sqrt(3.84))


def test_summary_even_length(client):
    r = client.post("/summary", json={"numbers": [1, 2, 3, 4]})
    assert r.status_code == 200
    assert r.json()["median"] == 2.5
    assert r.json()["mode"] == [1, 2, 3, 4]


@pytest.mark.parametrize("name", ["average", "maximum", "median", "minimum", "mode", "range", "standardDeviation"])
def test_statistic_matches_summary(client, name):
    numbers = [10, 1, 10, 1, 5, 2.5]
    expected = client.post("/summary", json={"numbers": numbers}).json()[name]
    r = client.post(f"/statistics/{name}", json={"numbers": numbers})
    assert r.status_code == 200
    assert r.json() == {"statistic": name, "value": expected}


def test_unknown_statistic(client):
    r = client.post("/statistics/variance", json={"numbers": [1, 2]})
    assert r.status_code == 400


@pytest.mark.parametrize(
    "body",
    [
        {"numbers": []},
        {"numbers": [1, "x", 3]},
        {"numbers": ["3"]},
        {"numbers": [True, 2]},
        {"numbers": None},
        {"numbers": "1,2,3"},
        {},
        {"numbers": [1], "extra": 1},
    ],
)
def test_summary_bad_request(client, body):
    r = client.post("/summary", json=body)
    assert r.status_code == 400
    assert "detail" in r.json()


def test_summary_rejects_non_finite(client):
    r = client.post(
        "/summary",
        content='{"numbers": [1, NaN, Infinity]}',
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400


def test_metrics(client):
    client.post("/summary", json={"numbers": [1, 2, 3]})
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "stats_analyzer_request_total" in r.text
    assert 'path="/summary"' in r.text
    assert "stats_analyzer_sample_size_bucket" in r.text


def test_summary_rejects_int_beyond_float_range(client):
    r = client.post("/summary", json={"numbers": [1, 10**400]})
    assert r.status_code == 400


def test_summary_near_float_limits(client):
    r = client.post("/summary", json={"numbers": [1e308, 1e308]})
    assert r.status_code == 200
    data = r.json()
    assert data["average"] == 1e308
    assert data["median"] == 1e308
    assert data["standardDeviation"] == 0
