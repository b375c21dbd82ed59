from flask import jsonify, request
from flask_login import current_user, login_required

from votecast.errors import BallotNotFound, ElectionUnavailable, ValidationError
from votecast.models import Election
from votecast.routes.helpers import request_data
from votecast.services.elections import VOTER_VISIBLE_STATUSES, voter_visible_elections
from votecast.services.face import FaceCapture, register_face
from votecast.services.voting import cast_ballot, find_ballot, tally_election


def _visible_election(election_id):
    election = Election.query.get(election_id)
    if election is None or election.status not in VOTER_VISIBLE_STATUSES:
        raise ElectionUnavailable("This election is not available.")
    return election


def register_voter_routes(app):
    @app.route("/dashboard")
    @login_required
    def dashboard():
        voted_election_ids = {vote.election_id for vote in current_user.votes}
        elections = []
        for election in voter_visible_elections():
            row = election.to_dict()
            row["has_voted"] = election.id in voted_election_ids
            elections.append(row)

        return jsonify(
            {
                "ok": True,
                "user": {
                    "id": current_user.id,
                    "full_name": current_user.full_name,
                    "email": current_user.email,
                },
                "face_registered": current_user.face_registered,
                "elections": elections,
            }
        )

    @app.route("/face-registration", methods=["POST"])
    @login_required
    def face_registration():
        data = request_data()
        register_face(current_user, data.get("embedding"))
        return jsonify({"ok": True, "message": "Face registered successfully!"})

    @app.route("/elections/<int:election_id>")
    @login_required
    def election_detail(election_id):
        election = _visible_election(election_id)
        candidates = sorted(election.candidates, key=lambda c: (c.name.lower(), c.id))
        return jsonify(
            {
                "ok": True,
                "election": election.to_dict(),
                "candidates": [candidate.to_dict() for candidate in candidates],
                "has_voted": find_ballot(election.id, current_user.id) is not None,
            }
        )

    @app.route("/elections/<int:election_id>/vote", methods=["POST"])
    @login_required
    def cast_vote(election_id):
        data = request_data()
        probe = request.files.get("face_probe") or data.get("face_probe")

        with FaceCapture(probe) as capture:
            raw_candidate_id = data.get("candidate_id")
            try:
                candidate_id = int(raw_candidate_id)
            except (TypeError, ValueError):
                raise ValidationError("Please select a candidate.")

            ballot = cast_ballot(current_user, election_id, candidate_id, capture)

        return (
            jsonify(
                {
                    "ok": True,
                    "receipt": ballot.vote_receipt,
                    "voted_at": ballot.voted_at.isoformat(),
                    "message": f"Vote cast successfully! Receipt: {ballot.vote_receipt}",
                }
            ),
            201,
        )

    @app.route("/elections/<int:election_id>/receipt")
    @login_required
    def vote_receipt(election_id):
        ballot = find_ballot(election_id, current_user.id)
        if ballot is None:
            raise BallotNotFound()

        return jsonify(
            {
                "ok": True,
                "election_id": ballot.election_id,
                "candidate_id": ballot.candidate_id,
                "receipt": ballot.vote_receipt,
                "face_verified": ballot.face_verified,
                "voted_at": ballot.voted_at.isoformat(),
            }
        )

    @app.route("/elections/<int:election_id>/results")
    @login_required
    def election_results(election_id):
        election = _visible_election(election_id)
        result = tally_election(election)

        winner = result["winner"]
        return jsonify(
            {
                "ok": True,
                "election": election.to_dict(),
                "total_votes": result["total_votes"],
                "results": [
                    {
                        "candidate": row["candidate"].to_dict(),
                        "count": row["count"],
                        "percent": row["percent"],
                    }
                    for row in result["candidate_results"]
                ],
                "winner": winner.to_dict() if winner else None,
                "winners": [candidate.to_dict() for candidate in result["winners"]],
                "is_tie": result["is_tie"],
            }
        )
