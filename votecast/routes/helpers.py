from datetime import datetime, timezone
from functools import wraps

from flask import request
from flask_login import current_user, login_required

from votecast.errors import ValidationError
from votecast.services.elections import require_admin
from votecast.services.validation import clean_text


def request_data():
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    if request.is_json:
        return {}
    return request.form


def parse_datetime(raw, field):
    raw = clean_text(raw, field)
    if not raw:
        raise ValidationError(f"{field} is required.")
    try:
        value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"{field} must be an ISO 8601 date and time.")
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def admin_required(view):
    @wraps(view)
    @login_required
    def wrapped(*args, **kwargs):
        require_admin(current_user)
        return view(*args, **kwargs)

    return wrapped
