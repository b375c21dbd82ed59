from datetime import datetime

from flask_login import UserMixin

from votecast.extensions import db


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    face_registered = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    roles = db.relationship(
        "UserRole", backref="user", lazy=True, cascade="all, delete-orphan"
    )
    face_data = db.relationship(
        "FaceData",
        backref="user",
        uselist=False,
        lazy=True,
        cascade="all, delete-orphan",
    )
    votes = db.relationship("Vote", backref="voter", lazy=True)

    def has_role(self, role):
        return any(user_role.role == role for user_role in self.roles)

    @property
    def is_admin(self):
        return self.has_role("admin")
