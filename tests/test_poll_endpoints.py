from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from voter_api.main import create_app


def parse_date(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
def client():
    with TestClient(create_app()) as client:
        client.post("/voters", json={"voterId": 1, "name": "Jane Smith", "email": "jane@example.com"})
        yield client


@pytest.fixture
def add_polls(client):
    def _add_polls(poll_ids, vote_date="2024-11-05T09:30:00Z"):
        for poll_id in poll_ids:
            response = client.post(f"/voters/1/polls/{poll_id}", json={"voteDate": vote_date})
            assert response.status_code == 200
    return _add_polls


def test_add_poll(client):
    response = client.post("/voters/1/polls/1", json={"voteDate": "2024-11-05T09:30:00Z"})

    assert response.status_code == 200
    body = response.json()
    assert body["pollId"] == 1
    assert body["voteId"] == 1
    assert parse_date(body["voteDate"]) == parse_date("2024-11-05T09:30:00Z")


def test_add_poll_without_body_uses_current_time(client):
    response = client.post("/voters/1/polls/4")

    assert response.status_code == 200
    assert parse_date(response.json()["voteDate"]).tzinfo is not None


def test_add_poll_missing_voter_returns_404(client):
    response = client.post("/voters/9/polls/1", json={"voteDate": "2024-11-05T09:30:00Z"})

    assert response.status_code == 404


def test_add_duplicate_poll_returns_500(client, add_polls):
    add_polls([1])

    response = client.post("/voters/1/polls/1", json={"voteDate": "2024-12-01T00:00:00Z"})

    assert response.status_code == 500
    assert len(client.get("/voters/1/polls").json()) == 1


def test_add_poll_bad_date_returns_400(client):
    response = client.post("/voters/1/polls/1", json={"voteDate": "yesterday-ish"})

    assert response.status_code == 400


def test_list_polls_in_insertion_order(client, add_polls):
    add_polls([1, 2])

    response = client.get("/voters/1/polls")

    assert response.status_code == 200
    assert [p["pollId"] for p in response.json()] == [1, 2]


def test_list_polls_empty(client):
    response = client.get("/voters/1/polls")

    assert response.status_code == 200
    assert response.json() == []


def test_list_polls_missing_voter_returns_404(client):
    assert client.get("/voters/3/polls").status_code == 404


def test_get_poll(client, add_polls):
    add_polls([1])

    response = client.get("/voters/1/polls/1")

    assert response.status_code == 200
    assert response.json()["pollId"] == 1
    assert response.json()["voteId"] == 1


def test_get_missing_poll_returns_404(client, add_polls):
    add_polls([1])

    assert client.get("/voters/1/polls/2").status_code == 404


def test_get_poll_bad_id_returns_400(client):
    assert client.get("/voters/1/polls/first").status_code == 400


def test_update_poll(client, add_polls):
    add_polls([1, 2])

    response = client.put("/voters/1/polls/1", json={"voteDate": "2025-01-01T12:00:00Z"})

    assert response.status_code == 200
    polls = client.get("/voters/1/polls").json()
    assert [p["pollId"] for p in polls] == [1, 2]
    assert polls[0]["voteId"] == 1
    assert parse_date(polls[0]["voteDate"]) == parse_date("2025-01-01T12:00:00Z")
    assert parse_date(polls[1]["voteDate"]) == parse_date("2024-11-05T09:30:00Z")


def test_update_poll_without_date_returns_400(client, add_polls):
    add_polls([1])

    response = client.put("/voters/1/polls/1", json={})

    assert response.status_code == 400


def test_update_missing_poll_returns_404(client):
    response = client.put("/voters/1/polls/8", json={"voteDate": "2025-01-01T12:00:00Z"})

    assert response.status_code == 404


def test_delete_poll(client, add_polls):
    add_polls([1, 2, 3])

    response = client.delete("/voters/1/polls/2")

    assert response.status_code == 200
    assert response.text == "Delete OK"
    assert [p["pollId"] for p in client.get("/voters/1/polls").json()] == [1, 3]


def test_delete_missing_poll_returns_404(client):
    assert client.delete("/voters/1/polls/1").status_code == 404


def test_vote_id_after_delete_is_fresh(client, add_polls):
    add_polls([1, 2])
    client.delete("/voters/1/polls/1")

    response = client.post("/voters/1/polls/3", json={"voteDate": "2024-11-05T09:30:00Z"})

    assert response.json()["voteId"] == 3


def test_add_poll_accepts_legacy_date_key(client):
    response = client.post("/voters/1/polls/2", json={"VoteDate": "2024-11-05T09:30:00Z"})

    assert response.status_code == 200
    assert parse_date(response.json()["voteDate"]) == parse_date("2024-11-05T09:30:00Z")
