from datetime import datetime

from votecast.extensions import db

ELECTION_STATUSES = ("scheduled", "active", "paused", "ended")


class Election(db.Model):
    __tablename__ = "elections"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    start_time = db.Column(db.DateTime, nullable=False)
    end_time = db.Column(db.DateTime, nullable=False)
    status = db.Column(
        db.Enum(*ELECTION_STATUSES, name="election_status"),
        nullable=False,
        default="scheduled",
    )
    results_published = db.Column(db.Boolean, nullable=False, default=False)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    candidates = db.relationship(
        "Candidate",
        backref="election",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="Candidate.id",
    )
    votes = db.relationship(
        "Vote", backref="election", lazy=True, cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "status": self.status,
            "results_published": self.results_published,
        }
