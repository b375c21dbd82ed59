from flask import current_app

from votecast.extensions import db
from votecast.models import AuditLog


def record_admin_action(admin, action, details=None):
    """Stage an audit row in the current session; the caller commits."""
    entry = AuditLog(admin_id=admin.id, action=action, details=details or {})
    db.session.add(entry)
    current_app.logger.info("Admin %s: %s %s", admin.id, action, details or {})
    return entry


def recent_admin_actions(limit):
    return (
        AuditLog.query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .limit(limit)
        .all()
    )
