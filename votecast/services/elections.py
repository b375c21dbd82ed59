from votecast.errors import AuthorizationDenied, InvalidTransition, ValidationError
from votecast.extensions import db
from votecast.models import Candidate, Election, User, Vote
from votecast.services.audit import record_admin_action
from votecast.services.validation import clean_text

# Transitions are admin-triggered only; start/end times never move an election.
ALLOWED_TRANSITIONS = {
    "scheduled": {"active"},
    "active": {"paused", "ended"},
    "paused": {"active", "ended"},
    "ended": set(),
}

VOTER_VISIBLE_STATUSES = ("active", "ended")


def require_admin(user):
    if user is None or not user.is_authenticated or not user.is_admin:
        raise AuthorizationDenied()


def create_election(admin, title, description, start_time, end_time):
    require_admin(admin)

    title = clean_text(title, "Election title")
    if not title:
        raise ValidationError("Election title is required.")
    if start_time is None or end_time is None:
        raise ValidationError("Start and end times are required.")
    if end_time < start_time:
        raise ValidationError("End time must not be before start time.")

    election = Election(
        title=title,
        description=clean_text(description, "Description") or None,
        start_time=start_time,
        end_time=end_time,
        status="scheduled",
        results_published=False,
        created_by=admin.id,
    )
    db.session.add(election)
    db.session.flush()
    record_admin_action(
        admin, "create_election", {"election_id": election.id, "title": title}
    )
    db.session.commit()
    return election


def transition_election(admin, election, new_status):
    require_admin(admin)

    new_status = clean_text(new_status, "Status").lower()
    allowed = ALLOWED_TRANSITIONS.get(election.status, set())
    if new_status not in allowed:
        raise InvalidTransition(
            f"Cannot move an election from {election.status} to {new_status or 'nothing'}."
        )

    old_status = election.status
    election.status = new_status
    record_admin_action(
        admin,
        "update_election_status",
        {"election_id": election.id, "from": old_status, "to": new_status},
    )
    db.session.commit()
    return election


def publish_results(admin, election):
    require_admin(admin)

    if election.status != "ended":
        raise InvalidTransition("Results can only be published once the election has ended.")
    if election.results_published:
        raise InvalidTransition("Results for this election are already published.")

    election.results_published = True
    record_admin_action(admin, "publish_results", {"election_id": election.id})
    db.session.commit()
    return election


def delete_election(admin, election):
    require_admin(admin)

    election_id = election.id
    title = election.title
    db.session.delete(election)
    record_admin_action(
        admin, "delete_election", {"election_id": election_id, "title": title}
    )
    db.session.commit()


def create_candidate(admin, election, name, party=None, manifesto=None, photo_url=None):
    require_admin(admin)

    name = clean_text(name, "Candidate name")
    if not name:
        raise ValidationError("Candidate name is required.")

    candidate = Candidate(
        election_id=election.id,
        name=name,
        party=clean_text(party, "Party") or None,
        manifesto=clean_text(manifesto, "Manifesto") or None,
        photo_url=clean_text(photo_url, "Photo URL") or None,
    )
    db.session.add(candidate)
    db.session.flush()
    record_admin_action(
        admin,
        "create_candidate",
        {"candidate_id": candidate.id, "election_id": election.id, "name": name},
    )
    db.session.commit()
    return candidate


def delete_candidate(admin, candidate):
    require_admin(admin)

    candidate_id = candidate.id
    election_id = candidate.election_id
    db.session.delete(candidate)
    record_admin_action(
        admin,
        "delete_candidate",
        {"candidate_id": candidate_id, "election_id": election_id},
    )
    db.session.commit()


def list_voters():
    return User.query.order_by(User.created_at.desc(), User.id.desc()).all()


def dashboard_stats():
    return {
        "total_voters": User.query.count(),
        "total_elections": Election.query.count(),
        "active_elections": Election.query.filter_by(status="active").count(),
        "total_votes": Vote.query.count(),
    }


def voter_visible_elections():
    return (
        Election.query.filter(Election.status.in_(VOTER_VISIBLE_STATUSES))
        .order_by(Election.created_at.desc(), Election.id.desc())
        .all()
    )
