import json
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from recall_app import db
from recall_app.games.name_recall.logic.scorer import STATUS_LABELS
from recall_app.models import MemoryResult

GOOD = {
    "email": "player@example.com",
    "namesPresented": ["Nora", "Miles", "Selene"],
    "answersSubmitted": ["nora", "selene", "extra"],
    "score": 2,
    "status": "fail",
}


def test_valid_result_is_persisted(client):
    resp = client.post("/api/results", json=GOOD)
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}

    row = MemoryResult.query.one()
    assert row.email == "player@example.com"
    assert row.names_presented == ["Nora", "Miles", "Selene"]
    assert row.answers_submitted == ["nora", "selene", "extra"]
    assert row.score == 2
    assert row.status == "fail"


@pytest.mark.parametrize("status", ["fail", "good", "better", "excellent"])
def test_all_status_labels_accepted(client, status):
    assert client.post("/api/results", json={**GOOD, "status": status}).status_code == 200


@pytest.mark.parametrize("changes", [
    {"status": "perfect"},
    {"status": None},
    {"email": ""},
    {"email": "   "},
    {"email": 42},
    {"namesPresented": "Nora,Miles"},
    {"answersSubmitted": None},
    {"score": "2"},
    {"score": True},
])
def test_invalid_payloads_are_400(client, changes):
    resp = client.post("/api/results", json={**GOOD, **changes})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Invalid payload."}
    assert MemoryResult.query.count() == 0


def test_missing_fields_are_400(client):
    body = dict(GOOD)
    body.pop("score")
    assert client.post("/api/results", json=body).status_code == 400


def test_non_json_body_is_400(client):
    resp = client.post("/api/results", data="not json", content_type="text/plain")
    assert resp.status_code == 400


def test_float_scores_are_numbers(client):
    assert client.post("/api/results", json={**GOOD, "score": 2.0}).status_code == 200


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity", "1e400", "1" + "0" * 400])
def test_scores_outside_float_range_are_400(client, literal):
    raw = json.dumps(GOOD).replace('"score": 2', '"score": ' + literal)
    resp = client.post("/api/results", data=raw, content_type="application/json")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Invalid payload."}
    assert MemoryResult.query.count() == 0


def test_database_failure_is_500(client):
    with patch("recall_app.games.name_recall.routes.save_result",
               side_effect=OperationalError("INSERT", {}, Exception("gone"))):
        resp = client.post("/api/results", json=GOOD)
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Unable to persist result."}


def test_status_check_constraint_rejects_unknown_labels(app):
    db.session.add(MemoryResult(email="p@x.io", names_presented=[], answers_submitted=[],
                                score=0, status="perfect"))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()
    for label in STATUS_LABELS:
        db.session.add(MemoryResult(email="p@x.io", names_presented=[], answers_submitted=[],
                                    score=0, status=label))
    db.session.commit()
    assert MemoryResult.query.count() == len(STATUS_LABELS)
