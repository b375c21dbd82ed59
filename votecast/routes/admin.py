from flask import current_app, jsonify, request
from flask_login import current_user

from votecast.models import Candidate, Election
from votecast.routes.helpers import admin_required, parse_datetime, request_data
from votecast.services.audit import recent_admin_actions
from votecast.services.elections import (
    create_candidate,
    create_election,
    dashboard_stats,
    delete_candidate,
    delete_election,
    list_voters,
    publish_results,
    transition_election,
)


def _election_row(election):
    row = election.to_dict()
    row["candidate_count"] = len(election.candidates)
    row["vote_count"] = len(election.votes)
    return row


def register_admin_routes(app):
    @app.route("/admin")
    @admin_required
    def admin_dashboard():
        return jsonify({"ok": True, "stats": dashboard_stats()})

    @app.route("/admin/elections", methods=["GET", "POST"])
    @admin_required
    def admin_elections():
        if request.method == "GET":
            elections = Election.query.order_by(
                Election.created_at.desc(), Election.id.desc()
            ).all()
            return jsonify(
                {"ok": True, "elections": [_election_row(e) for e in elections]}
            )

        data = request_data()
        election = create_election(
            current_user,
            title=data.get("title"),
            description=data.get("description"),
            start_time=parse_datetime(data.get("start_time"), "Start time"),
            end_time=parse_datetime(data.get("end_time"), "End time"),
        )
        return jsonify({"ok": True, "election": election.to_dict()}), 201

    @app.route("/admin/elections/<int:election_id>/status", methods=["POST"])
    @admin_required
    def update_election_status(election_id):
        election = Election.query.get_or_404(election_id)
        transition_election(current_user, election, request_data().get("status"))
        return jsonify({"ok": True, "election": election.to_dict()})

    @app.route("/admin/elections/<int:election_id>/publish", methods=["POST"])
    @admin_required
    def publish_election_results(election_id):
        election = Election.query.get_or_404(election_id)
        publish_results(current_user, election)
        return jsonify({"ok": True, "election": election.to_dict()})

    @app.route("/admin/elections/<int:election_id>/delete", methods=["POST"])
    @admin_required
    def remove_election(election_id):
        election = Election.query.get_or_404(election_id)
        delete_election(current_user, election)
        return jsonify({"ok": True})

    @app.route(
        "/admin/elections/<int:election_id>/candidates", methods=["GET", "POST"]
    )
    @admin_required
    def election_candidates(election_id):
        election = Election.query.get_or_404(election_id)

        if request.method == "GET":
            candidates = sorted(
                election.candidates, key=lambda c: (c.name.lower(), c.id)
            )
            return jsonify(
                {"ok": True, "candidates": [c.to_dict() for c in candidates]}
            )

        data = request_data()
        candidate = create_candidate(
            current_user,
            election,
            name=data.get("name"),
            party=data.get("party"),
            manifesto=data.get("manifesto"),
            photo_url=data.get("photo_url"),
        )
        return jsonify({"ok": True, "candidate": candidate.to_dict()}), 201

    @app.route("/admin/candidates/<int:candidate_id>/delete", methods=["POST"])
    @admin_required
    def remove_candidate(candidate_id):
        candidate = Candidate.query.get_or_404(candidate_id)
        delete_candidate(current_user, candidate)
        return jsonify({"ok": True})

    @app.route("/admin/voters")
    @admin_required
    def admin_voters():
        return jsonify(
            {
                "ok": True,
                "voters": [
                    {
                        "id": voter.id,
                        "full_name": voter.full_name,
                        "email": voter.email,
                        "face_registered": voter.face_registered,
                        "created_at": voter.created_at.isoformat(),
                    }
                    for voter in list_voters()
                ],
            }
        )

    @app.route("/admin/audit-log")
    @admin_required
    def admin_audit_log():
        limit = current_app.config["AUDIT_LOG_PAGE_SIZE"]
        entries = recent_admin_actions(limit)
        return jsonify({"ok": True, "entries": [entry.to_dict() for entry in entries]})
