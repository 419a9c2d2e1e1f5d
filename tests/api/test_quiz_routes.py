from __future__ import annotations

from uuid import uuid4

from fastapi.testclient import TestClient

from quizhub.main import create_app
from tests.api.api_fixtures import QUIZ_PAYLOAD, auth, seed_users


def test_quiz_create_get_and_submit(api_db_path) -> None:
    owner_id, player_id = seed_users(api_db_path, "owner", "player")

    with TestClient(create_app()) as client:
        created = client.post("/api/quizzes", json=QUIZ_PAYLOAD, headers=auth(owner_id))
        assert created.status_code == 201
        quiz = created.json()
        assert quiz["max_score"] == 30
        assert "correct_option" not in quiz["questions"][0]

        fetched = client.get(f"/api/quizzes/{quiz['id']}")
        assert fetched.status_code == 200
        assert [question["position"] for question in fetched.json()["questions"]] == [0, 1]

        submitted = client.post(
            f"/api/quizzes/{quiz['id']}/submit",
            json={"answers": [1, None]},
            headers=auth(player_id),
        )
        assert submitted.status_code == 200
        body = submitted.json()
        assert (body["score"], body["max_score"]) == (10, 30)
        assert [item["correct_option"] for item in body["results"]] == [1, 0]
        assert body["stats"] == {
            "total_quizzes": 1,
            "total_score": 10,
            "average_score": 10.0,
            "badges": [],
        }

        leaderboard = client.get("/api/users/leaderboard", params={"limit": 1})
        assert leaderboard.status_code == 200
        assert [entry["username"] for entry in leaderboard.json()["entries"]] == ["player"]


def test_quiz_errors(api_db_path) -> None:
    (owner_id,) = seed_users(api_db_path, "owner")

    with TestClient(create_app()) as client:
        assert client.get(f"/api/quizzes/{uuid4()}").status_code == 404
        assert client.post("/api/quizzes", json=QUIZ_PAYLOAD).status_code == 401

        bad_category = client.post(
            "/api/quizzes",
            json={**QUIZ_PAYLOAD, "category": "Cooking"},
            headers=auth(owner_id),
        )
        assert bad_category.status_code == 422
        assert bad_category.json()["detail"]["code"] == "E_QUIZ_INVALID"

        unknown_user = client.post("/api/quizzes", json=QUIZ_PAYLOAD, headers=auth(999))
        assert unknown_user.status_code == 404
