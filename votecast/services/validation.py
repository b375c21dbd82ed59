from votecast.errors import ValidationError


def clean_text(value, field, strip=True):
    """Return a submitted field as text, or ``""`` when it was left out."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be text.")
    return value.strip() if strip else value
