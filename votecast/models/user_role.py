from datetime import datetime

from votecast.extensions import db

ROLES = ("user", "admin")


class UserRole(db.Model):
    __tablename__ = "user_roles"
    __table_args__ = (
        db.UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    role = db.Column(db.Enum(*ROLES, name="app_role"), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
