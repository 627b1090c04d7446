from unittest.mock import patch

from recall_app.db import db
from recall_app.models import MemoryName


def test_names_returns_twenty_unique_active_names(client, seed_pool):
    pool = seed_pool()
    resp = client.get("/api/names")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["poolSize"] == len(pool)
    assert len(body["names"]) == 20
    assert len(set(body["names"])) == 20
    assert set(body["names"]) <= set(pool)


def test_inactive_names_are_not_served(client, seed_pool):
    seed_pool([f"Active{i}" for i in range(20)])
    seed_pool([f"Retired{i}" for i in range(10)], active=False)
    body = client.get("/api/names").get_json()
    assert body["poolSize"] == 20
    assert all(n.startswith("Active") for n in body["names"])


def test_small_pool_is_422(client, seed_pool):
    seed_pool([f"Only{i}" for i in range(19)])
    resp = client.get("/api/names")
    assert resp.status_code == 422
    assert resp.get_json() == {"error": "Not enough active names in memory_names table."}


def test_empty_pool_without_fallback_is_422(client):
    assert client.get("/api/names").status_code == 422


def test_blank_names_do_not_count(client, seed_pool):
    seed_pool([f"Real{i}" for i in range(19)] + ["   "])
    assert client.get("/api/names").status_code == 422


def test_backend_failure_is_500(client):
    with patch("recall_app.games.name_recall.routes.get_store", side_effect=RuntimeError("db down")):
        resp = client.get("/api/names")
    assert resp.status_code == 500
    assert "error" in resp.get_json()


def test_pool_changes_are_picked_up(client, seed_pool):
    seed_pool([f"Only{i}" for i in range(19)])
    assert client.get("/api/names").status_code == 422
    db.session.add(MemoryName(name="Twentieth"))
    db.session.commit()
    assert client.get("/api/names").status_code == 200


def test_pool_report(client, seed_pool):
    seed_pool()
    resp = client.get("/api/pool_report?reload=1")
    assert resp.status_code == 200
    assert resp.get_json()["pool"]["pool_size"] == 30
    assert resp.get_json()["pool"]["source"] == "db"


def test_index_lists_endpoints(client):
    body = client.get("/").get_json()
    assert body["endpoints"]["names"] == "/api/names"
    assert body["display_count"] == 20


def test_security_headers(client):
    resp = client.get("/")
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
