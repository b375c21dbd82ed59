import io
import json

from votecast.models import Vote

MATCHING_PROBE = [0.99, 0.02, 0.0, 0.0]


def test_unauthenticated_requests_redirect_to_login(client):
    response = client.get("/dashboard")

    assert response.status_code == 302
    assert "/login" in response.headers["Location"]


def test_unauthenticated_json_requests_get_401(client):
    response = client.post("/elections/1/vote", json={"candidate_id": 1})

    assert response.status_code == 401
    assert response.get_json()["ok"] is False


def test_dashboard_lists_only_voter_visible_elections(auth_client, make_election):
    active = make_election(status="active")
    ended = make_election(status="ended")
    make_election(status="scheduled")
    make_election(status="paused")

    response = auth_client.get("/dashboard")

    assert response.status_code == 200
    data = response.get_json()
    assert data["face_registered"] is True
    assert {row["id"] for row in data["elections"]} == {active.id, ended.id}
    assert all(row["has_voted"] is False for row in data["elections"])


def test_face_registration(client, unregistered_voter):
    with client.session_transaction() as session:
        session["_user_id"] = str(unregistered_voter.id)

    response = client.post("/face-registration", json={"embedding": [0, 1, 0, 0]})

    assert response.status_code == 200
    assert unregistered_voter.face_registered is True


def test_face_registration_without_capture(auth_client):
    response = auth_client.post("/face-registration", json={})

    assert response.status_code == 400
    assert "camera" in response.get_json()["error"]


def test_election_detail_hides_scheduled_elections(auth_client, make_election):
    election = make_election(status="scheduled")

    response = auth_client.get(f"/elections/{election.id}")

    assert response.status_code == 404


def test_cast_vote_returns_receipt_then_rejects_second_attempt(
    auth_client, voter, make_election
):
    election = make_election()
    alice, bob = election.candidates

    first = auth_client.post(
        f"/elections/{election.id}/vote",
        json={"candidate_id": alice.id, "face_probe": MATCHING_PROBE},
    )
    assert first.status_code == 201
    receipt = first.get_json()["receipt"]
    assert receipt.startswith("VR-")

    second = auth_client.post(
        f"/elections/{election.id}/vote",
        json={"candidate_id": bob.id, "face_probe": MATCHING_PROBE},
    )
    assert second.status_code == 409
    assert second.get_json() == {
        "ok": False,
        "error": "You have already voted in this election.",
    }

    ballot = Vote.query.filter_by(election_id=election.id, voter_id=voter.id).one()
    assert ballot.candidate_id == alice.id
    assert ballot.vote_receipt == receipt

    lookup = auth_client.get(f"/elections/{election.id}/receipt")
    assert lookup.get_json()["receipt"] == receipt

    detail = auth_client.get(f"/elections/{election.id}")
    assert detail.get_json()["has_voted"] is True


def test_cast_vote_with_uploaded_probe(auth_client, make_election):
    election = make_election()
    probe = io.BytesIO(json.dumps(MATCHING_PROBE).encode())

    response = auth_client.post(
        f"/elections/{election.id}/vote",
        data={
            "candidate_id": str(election.candidates[1].id),
            "face_probe": (probe, "probe.json"),
        },
        content_type="multipart/form-data",
    )

    assert response.status_code == 201


def test_cast_vote_requires_candidate(auth_client, make_election):
    election = make_election()

    response = auth_client.post(
        f"/elections/{election.id}/vote", json={"face_probe": MATCHING_PROBE}
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "Please select a candidate."


def test_cast_vote_on_paused_election(auth_client, make_election):
    election = make_election(status="paused")

    response = auth_client.post(
        f"/elections/{election.id}/vote",
        json={"candidate_id": election.candidates[0].id, "face_probe": MATCHING_PROBE},
    )

    assert response.status_code == 404
    assert Vote.query.count() == 0


def test_cast_vote_with_wrong_face(auth_client, make_election):
    election = make_election()

    response = auth_client.post(
        f"/elections/{election.id}/vote",
        json={"candidate_id": election.candidates[0].id, "face_probe": [0, 0, 1, 0]},
    )

    assert response.status_code == 403
    assert Vote.query.count() == 0


def test_receipt_lookup_without_ballot(auth_client, make_election):
    election = make_election()

    response = auth_client.get(f"/elections/{election.id}/receipt")

    assert response.status_code == 404
    assert response.get_json() == {
        "ok": False,
        "error": "You have not voted in this election.",
    }


def test_results_withheld_until_published(auth_client, make_election, add_ballots):
    election = make_election(status="ended")
    add_ballots(election, election.candidates[0], 3)

    response = auth_client.get(f"/elections/{election.id}/results")

    assert response.status_code == 404
    assert "results" not in response.get_json()


def test_published_results(auth_client, make_election, add_ballots):
    election = make_election(status="ended", published=True)
    alice, bob = election.candidates
    add_ballots(election, alice, 1)
    add_ballots(election, bob, 3)

    response = auth_client.get(f"/elections/{election.id}/results")

    assert response.status_code == 200
    data = response.get_json()
    assert data["total_votes"] == 4
    assert [row["candidate"]["name"] for row in data["results"]] == ["Bob", "Alice"]
    assert [row["percent"] for row in data["results"]] == [75.0, 25.0]
    assert data["winner"]["id"] == bob.id


def test_cast_vote_with_face_capture_sent_as_form_text(auth_client, make_election):
    election = make_election()
    candidate = election.candidates[0]

    response = auth_client.post(
        f"/elections/{election.id}/vote",
        data={"candidate_id": str(candidate.id), "face_probe": json.dumps(MATCHING_PROBE)},
    )

    assert response.status_code == 201
    assert Vote.query.filter_by(candidate_id=candidate.id).count() == 1


def test_cast_vote_with_blank_form_capture(auth_client, make_election):
    election = make_election()

    response = auth_client.post(
        f"/elections/{election.id}/vote",
        data={"candidate_id": str(election.candidates[0].id), "face_probe": ""},
    )

    assert response.status_code == 400
    assert "camera" in response.get_json()["error"]
    assert Vote.query.count() == 0


def test_face_registration_with_non_object_body(auth_client):
    response = auth_client.post("/face-registration", json=[0, 1, 0, 0])

    assert response.status_code == 400
    assert response.get_json()["ok"] is False


def test_cast_vote_with_non_object_body(auth_client, make_election):
    election = make_election()

    response = auth_client.post(f"/elections/{election.id}/vote", json=[1, 2])

    assert response.status_code == 400
    assert Vote.query.count() == 0
