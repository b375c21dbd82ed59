from datetime import datetime

from votecast.extensions import db


class Candidate(db.Model):
    __tablename__ = "candidates"

    id = db.Column(db.Integer, primary_key=True)
    election_id = db.Column(
        db.Integer, db.ForeignKey("elections.id", ondelete="CASCADE"), nullable=False
    )
    name = db.Column(db.String(200), nullable=False)
    party = db.Column(db.String(200), nullable=True)
    photo_url = db.Column(db.String(500), nullable=True)
    manifesto = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    votes = db.relationship(
        "Vote", backref="candidate", lazy=True, cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "election_id": self.election_id,
            "name": self.name,
            "party": self.party,
            "photo_url": self.photo_url,
            "manifesto": self.manifesto,
        }
