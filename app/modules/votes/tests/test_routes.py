import json

import pytest

VOTE = {
    "dataset_id": "ds-vote",
    "user_id": "user-7",
    "dataset_name": "Wind speeds",
    "dataset_description": "Hourly wind",
    "user_name": "Victor",
    "calification": 4,
}


def test_add_dataset_vote(test_client):
    response = test_client.post("/api/add_dataset_vote", json=VOTE)
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data["created"] is True
    assert data["calification"] == 4


def test_add_dataset_vote_accepts_numeric_string(test_client):
    response = test_client.post("/api/add_dataset_vote", json={**VOTE, "calification": "3"})
    assert response.status_code == 200
    assert json.loads(response.data)["calification"] == 3


@pytest.mark.parametrize("calification", [0, 6, "abc", -1, True, False])
def test_add_dataset_vote_out_of_range(test_client, calification):
    response = test_client.post("/api/add_dataset_vote", json={**VOTE, "calification": calification})
    assert response.status_code == 400
    assert "calification" in json.loads(response.data)["errors"]


def test_add_dataset_vote_missing_field(test_client):
    payload = {k: v for k, v in VOTE.items() if k != "user_name"}
    response = test_client.post("/api/add_dataset_vote", json=payload)
    assert response.status_code == 400


def test_votes_by_dataset_and_user(test_client):
    test_client.post("/api/add_dataset_vote", json=VOTE)

    by_dataset = json.loads(test_client.get("/api/get_votes_by_dataset?dataset_id=ds-vote").data)
    by_user = json.loads(test_client.get("/api/get_votes_by_user?user_id=user-7").data)

    assert [v["calification"] for v in by_dataset] == [4]
    assert [v["dataset_id"] for v in by_user] == ["ds-vote"]


def test_votes_require_ids(test_client):
    assert test_client.get("/api/get_votes_by_dataset").status_code == 400
    assert test_client.get("/api/get_votes_by_user").status_code == 400


def test_dataset_rating(test_client):
    test_client.post("/api/add_dataset_vote", json=VOTE)
    test_client.post("/api/add_dataset_vote", json={**VOTE, "user_id": "user-8", "calification": 2})
    data = json.loads(test_client.get("/api/get_dataset_rating?dataset_id=ds-vote").data)
    assert data == {"dataset_id": "ds-vote", "votes": 2, "average": 3.0}


def test_boolean_calification_stores_nothing(test_client):
    response = test_client.post("/api/add_dataset_vote", json={**VOTE, "calification": True})
    assert response.status_code == 400
    assert json.loads(test_client.get("/api/get_votes_by_dataset?dataset_id=ds-vote").data) == []
