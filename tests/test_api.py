from datetime import date
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_db, get_extractor, get_insights
from api.main import create_app
from database.exceptions import DuplicateError, NotFoundError
from llm.validation import validate_extraction
from models import Course, FairwayOutcome, Round, TeeBox, User
from scorecard import (
    InsightResponseError,
    InvalidImageError,
    InvalidShapeError,
    ServiceTimeoutError,
    ServiceUnavailableError,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def _tee_box() -> TeeBox:
    return TeeBox(
        id="tee-1",
        course_id="course-1",
        name="Blue",
        front_nine_par=[4, 4, 3, 5, 4, 4, 3, 4, 5],
        back_nine_par=[4, 3, 4, 5, 4, 4, 3, 4, 5],
    )


def _round(round_id="r1", played=date(2024, 6, 1), score=5) -> Round:
    return Round(
        id=round_id,
        user_id="user-1",
        date_played=played,
        course_id="course-1",
        tee_box_id="tee-1",
        front_nine_scores=[score] * 9,
        back_nine_scores=[score] * 9,
        front_nine_putts=[2] * 9,
        back_nine_putts=[2] * 9,
        front_nine_fairways=[FairwayOutcome.HIT] * 9,
        back_nine_fairways=[FairwayOutcome.UNSET] * 9,
        front_nine_gir=[score <= 4] * 9,
        back_nine_gir=[score <= 4] * 9,
        total_score=score * 18,
        total_putts=36,
        total_fairways_hit=9,
        total_gir=18 if score <= 4 else 0,
    )


def _payload(**overrides) -> dict:
    data = {
        "front_nine_scores": [4] * 9,
        "back_nine_scores": [5] * 9,
        "front_nine_putts": [2] * 9,
        "back_nine_putts": [2] * 9,
        "front_nine_fairways": [True] * 9,
        "back_nine_fairways": ["left"] * 9,
        "front_nine_gir": [True] * 9,
        "back_nine_gir": [False] * 9,
        "total_score": 81,
        "total_putts": 36,
        "total_fairways_hit": 9,
        "total_gir": 9,
        "course_id": "",
        "tee_box_id": "",
        "date_played": "2024-06-01",
        "submission_type": "scanned",
        "course_name": "Pebble",
    }
    data.update(overrides)
    return data


def _holes(**entries):
    holes = [{"hole_number": i} for i in range(1, 19)]
    for key, values in entries.items():
        index = int(key.split("_")[1]) - 1
        holes[index].update(values)
    return holes


# ================================================================
# Fixtures
# ================================================================

@pytest.fixture
def fake_db():
    db = MagicMock()
    db.courses.list_courses = AsyncMock(return_value=[Course(id="course-1", name="Pebble Creek")])
    db.courses.search_courses = AsyncMock(return_value=[Course(id="course-1", name="Pebble Creek")])
    db.courses.get_course = AsyncMock(return_value=Course(id="course-1", name="Pebble Creek"))
    db.courses.list_tee_boxes = AsyncMock(return_value=[_tee_box()])
    db.courses.get_tee_box = AsyncMock(return_value=_tee_box())
    db.rounds.create_round = AsyncMock(side_effect=lambda r: r.model_copy(update={"id": "new-round"}))
    db.rounds.get_round = AsyncMock(return_value=_round())
    db.rounds.get_rounds_for_user = AsyncMock(return_value=[])
    db.rounds.delete_round = AsyncMock(return_value=True)
    db.users.create_user = AsyncMock(side_effect=lambda u: u.model_copy(update={"id": "user-1"}))
    db.users.get_user = AsyncMock(return_value=None)
    db.users.get_user_by_auth_uid = AsyncMock(return_value=User(id="user-1", auth_uid="uid-1"))
    return db


@pytest.fixture
def extractor():
    return MagicMock()


@pytest.fixture
def insights():
    service = MagicMock()
    service.analyze = AsyncMock(return_value="Work on par 5s.")
    service.answer = AsyncMock(return_value="Your putting is steady.")
    return service


@pytest.fixture
def client(fake_db, extractor, insights):
    app = create_app()
    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_extractor] = lambda: extractor
    app.dependency_overrides[get_insights] = lambda: insights
    return TestClient(app)


# ================================================================
# Courses
# ================================================================

def test_list_and_search_courses(client, fake_db):
    assert client.get("/api/courses").json()[0]["name"] == "Pebble Creek"
    client.get("/api/courses", params={"q": "peb"})
    fake_db.courses.search_courses.assert_awaited_once_with("peb")


def test_course_not_found(client, fake_db):
    fake_db.courses.get_course.return_value = None
    assert client.get("/api/courses/missing").status_code == 404
    assert client.get("/api/courses/missing/tee-boxes").status_code == 404


def test_tee_box_pars(client):
    body = client.get("/api/courses/tee-boxes/tee-1/pars").json()
    assert body["pars"][2] == 3
    assert body["total_par"] == 72


# ================================================================
# Scan
# ================================================================

def test_extract_returns_reconciled_scorecard(client, fake_db, extractor):
    extractor.extract = AsyncMock(return_value=validate_extraction(_payload()))
    fake_db.courses.list_courses.return_value = [Course(id="course-1", name="Pebble Creek")]

    resp = client.post("/api/scan/extract", files={"file": ("card.png", PNG_BYTES, "image/png")})
    assert resp.status_code == 200
    body = resp.json()
    assert body["scorecard"]["summary"]["total_score"] == 81
    assert body["scorecard"]["holes"][0]["gir"] is True
    assert body["scorecard"]["holes"][9]["fairway_outcome"] == "left"
    assert body["resolution"]["course_id"] == "course-1"
    assert body["resolution"]["date_played"] == "2024-06-01"
    assert "tee box" in body["resolution"]["missing"]
    assert body["extraction"]["total_score"] == 81


@pytest.mark.parametrize("error,status", [
    (InvalidImageError(), 422),
    (InvalidShapeError(), 422),
    (ServiceTimeoutError(), 504),
    (ServiceUnavailableError(), 502),
])
def test_extract_error_mapping(client, extractor, error, status):
    extractor.extract = AsyncMock(side_effect=error)
    resp = client.post("/api/scan/extract", files={"file": ("card.png", PNG_BYTES, "image/png")})
    assert resp.status_code == status
    assert resp.json()["detail"] == error.user_message



def test_extract_network_failure_is_bad_gateway(client):
    from llm.scorecard_extractor import GeminiScorecardExtractor

    reader_client = MagicMock()
    reader_client.aio.models.generate_content = AsyncMock(side_effect=httpx.ConnectError("dns failure"))
    client.app.dependency_overrides[get_extractor] = lambda: GeminiScorecardExtractor(client=reader_client)

    resp = client.post("/api/scan/extract", files={"file": ("card.png", PNG_BYTES, "image/png")})
    assert resp.status_code == 502
    assert resp.json()["detail"] == ServiceUnavailableError.user_message

def test_summary_applies_tee_box_pars(client):
    holes = _holes(hole_3={"score": 4, "putts": 2})
    resp = client.post("/api/scan/summary", json={"holes": holes, "tee_box_id": "tee-1"})
    assert resp.status_code == 200
    hole = resp.json()["scorecard"]["holes"][2]
    assert hole["par"] == 3
    assert hole["score_label"] == "Bogey"
    assert hole["gir"] is True


def test_summary_rejects_incomplete_scorecard(client):
    resp = client.post("/api/scan/summary", json={"holes": _holes()[:17]})
    assert resp.status_code == 422


# ================================================================
# Rounds
# ================================================================

def test_save_round(client, fake_db):
    holes = _holes(hole_1={"score": 4, "putts": 2, "fairway_outcome": "hit"}, hole_2={"score": 6, "putts": 1})
    resp = client.post("/api/rounds", json={
        "user_id": "user-1",
        "course_id": "course-1",
        "tee_box_id": "tee-1",
        "date_played": "2024-06-01",
        "submission_type": "scanned",
        "holes": holes,
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == "new-round"
    assert body["total_score"] == 10
    assert body["total_putts"] == 3
    assert body["total_gir"] == 1
    assert body["total_fairways_hit"] == 1
    assert body["front_nine_scores"][:3] == [4, 6, 0]


def test_save_round_without_course_is_unresolved(client, fake_db):
    resp = client.post("/api/rounds", json={"user_id": "user-1", "holes": _holes()})
    assert resp.status_code == 422
    fake_db.rounds.create_round.assert_not_called()


def test_save_round_missing_tee_box(client, fake_db):
    fake_db.rounds.create_round.side_effect = NotFoundError("Tee box not found")
    resp = client.post("/api/rounds", json={
        "user_id": "user-1", "course_id": "course-1", "tee_box_id": "gone", "holes": _holes(),
    })
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Tee box not found"



def test_save_round_rejects_invalid_date(client, fake_db):
    resp = client.post("/api/rounds", json={
        "user_id": "user-1", "course_id": "course-1", "tee_box_id": "tee-1",
        "date_played": "2024-13-45", "holes": _holes(),
    })
    assert resp.status_code == 422
    fake_db.rounds.create_round.assert_not_called()


def test_save_round_blank_date_is_today(client, fake_db):
    resp = client.post("/api/rounds", json={
        "user_id": "user-1", "course_id": "course-1", "tee_box_id": "tee-1",
        "date_played": "", "holes": _holes(),
    })
    assert resp.status_code == 201
    assert resp.json()["date_played"] == date.today().isoformat()

def test_round_history(client, fake_db):
    fake_db.rounds.get_rounds_for_user.return_value = [
        _round("r1", date(2024, 6, 1), 5),
        _round("r2", date(2024, 5, 1), 4),
    ]
    body = client.get("/api/rounds/user/user-1", params={"sort": "score", "order": "asc"}).json()
    assert [r["id"] for r in body["rounds"]] == ["r2", "r1"]
    assert body["averages"]["avg_score"] == 81
    assert body["groups"]["2024"]["June"] == ["r1"]


def test_round_history_rejects_unknown_filter(client):
    assert client.get("/api/rounds/user/user-1", params={"year": "2019"}).status_code == 422


def test_delete_round_scoped_to_user(client, fake_db):
    assert client.delete("/api/rounds/r1", params={"user_id": "user-1"}).status_code == 200
    fake_db.rounds.delete_round.assert_awaited_once_with("r1", "user-1")

    fake_db.rounds.delete_round.return_value = False
    assert client.delete("/api/rounds/r1", params={"user_id": "someone-else"}).status_code == 404


# ================================================================
# Stats and insights
# ================================================================

def test_stats(client, fake_db):
    fake_db.rounds.get_rounds_for_user.return_value = [_round("r1", score=4)]
    body = client.get("/api/stats/user-1").json()
    assert body["averages"]["avg_score"] == 72
    assert {row["par"] for row in body["scoring_by_par"]} == {3, 4, 5}
    assert body["score_trend"].startswith("Not enough")


def test_analyze_requires_rounds(client, insights):
    resp = client.post("/api/insights/analyze", json={"user_id": "user-1"})
    assert resp.status_code == 400
    insights.analyze.assert_not_called()


def test_analyze_and_chat(client, fake_db, insights):
    fake_db.rounds.get_rounds_for_user.return_value = [_round()]
    assert client.post("/api/insights/analyze", json={"user_id": "user-1"}).json() == {"analysis": "Work on par 5s."}
    resp = client.post("/api/insights/chat", json={"user_id": "user-1", "question": "Putting?"})
    assert resp.json() == {"answer": "Your putting is steady."}


def test_chat_service_timeout(client, insights):
    insights.answer.side_effect = ServiceTimeoutError()
    resp = client.post("/api/insights/chat", json={"user_id": "user-1", "question": "Putting?"})
    assert resp.status_code == 504



def test_chat_empty_answer_message(client, fake_db, insights):
    insights.answer.side_effect = InsightResponseError("No answer from AI")
    resp = client.post("/api/insights/chat", json={"user_id": "user-1", "question": "Putting?"})
    assert resp.status_code == 502
    assert resp.json()["detail"] == InsightResponseError.user_message
    assert "scorecard" not in resp.json()["detail"]

# ================================================================
# Users
# ================================================================

def test_create_user_and_duplicate(client, fake_db):
    resp = client.post("/api/users", json={"auth_uid": "uid-1", "email": "a@b.com"})
    assert resp.status_code == 201
    assert resp.json()["id"] == "user-1"

    fake_db.users.create_user.side_effect = DuplicateError("User already exists")
    assert client.post("/api/users", json={"auth_uid": "uid-1"}).status_code == 409


def test_get_user_by_auth_uid(client, fake_db):
    assert client.get("/api/users/by-auth/uid-1").json()["auth_uid"] == "uid-1"
    fake_db.users.get_user_by_auth_uid.return_value = None
    assert client.get("/api/users/by-auth/nobody").status_code == 404


def test_health_without_database(client):
    body = client.get("/api/health").json()
    assert body == {"status": "degraded", "database": False}
