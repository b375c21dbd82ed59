from flask import current_app
from sqlalchemy.exc import IntegrityError

from votecast.errors import (
    CandidateMismatch,
    CandidateNotFound,
    DuplicateVote,
    ElectionUnavailable,
    FaceNotRegistered,
    VotecastError,
)
from votecast.extensions import db
from votecast.models import Candidate, Election, Vote
from votecast.services.face import verify_identity
from votecast.services.security import generate_vote_receipt


def find_ballot(election_id, voter_id):
    return Vote.query.filter_by(election_id=election_id, voter_id=voter_id).first()


def cast_ballot(voter, election_id, candidate_id, capture):
    """Record ``voter``'s single ballot for an election and return it.

    ``capture`` is a :class:`~votecast.services.face.FaceCapture` holding the
    probe for identity re-verification. It is released however this returns.

    The insert is attempted once. The (election, voter) unique constraint is
    the only guard against concurrent casts, so a violation is reported as a
    duplicate vote and never retried.
    """
    with capture:
        election = Election.query.get(election_id)
        if election is None or election.status != "active":
            raise ElectionUnavailable()

        if not voter.face_registered:
            raise FaceNotRegistered()

        if find_ballot(election.id, voter.id) is not None:
            current_app.logger.warning(
                "Rejected second ballot from user %s in election %s",
                voter.id,
                election.id,
            )
            raise DuplicateVote()

        candidate = Candidate.query.get(candidate_id) if candidate_id is not None else None
        if candidate is None:
            raise CandidateNotFound()
        if candidate.election_id != election.id:
            raise CandidateMismatch()

        verify_identity(voter, capture)

        ballot = Vote(
            election_id=election.id,
            candidate_id=candidate.id,
            voter_id=voter.id,
            vote_receipt=generate_vote_receipt(),
            face_verified=True,
        )
        db.session.add(ballot)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            if find_ballot(election.id, voter.id) is not None:
                current_app.logger.warning(
                    "Concurrent ballot from user %s in election %s lost the insert",
                    voter.id,
                    election.id,
                )
                raise DuplicateVote()
            raise VotecastError("Your vote could not be recorded. Please try again.")

    current_app.logger.info(
        "Ballot %s recorded for election %s", ballot.id, ballot.election_id
    )
    return ballot
