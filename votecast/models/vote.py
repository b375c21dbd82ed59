from datetime import datetime

from votecast.extensions import db


class Vote(db.Model):
    """A cast ballot. Rows are written once and never updated."""

    __tablename__ = "votes"
    __table_args__ = (
        db.UniqueConstraint("election_id", "voter_id", name="uq_votes_election_voter"),
    )

    id = db.Column(db.Integer, primary_key=True)
    election_id = db.Column(
        db.Integer, db.ForeignKey("elections.id", ondelete="CASCADE"), nullable=False
    )
    candidate_id = db.Column(
        db.Integer, db.ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False
    )
    voter_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    vote_receipt = db.Column(db.String(64), unique=True, nullable=False)
    face_verified = db.Column(db.Boolean, nullable=False, default=False)
    voted_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
