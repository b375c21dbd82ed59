import string
import time
import uuid

from werkzeug.security import check_password_hash, generate_password_hash

RECEIPT_PREFIX = "VR"
RECEIPT_SUFFIX_LENGTH = 9
_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(value):
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits)) or "0"


def generate_vote_receipt(now=None):
    """Return a receipt such as ``VR-1760000000000-k3j9x0a2b``.

    The receipt is a confirmation token shown to the voter, unique with high
    probability. It is not a proof that the ballot was counted.
    """
    millis = int((time.time() if now is None else now) * 1000)
    suffix = _to_base36(uuid.uuid4().int)[-RECEIPT_SUFFIX_LENGTH:].rjust(
        RECEIPT_SUFFIX_LENGTH, "0"
    )
    return f"{RECEIPT_PREFIX}-{millis}-{suffix}"


def hash_password(password):
    return generate_password_hash(password, method="pbkdf2:sha256")


def verify_password(password_hash, password):
    return check_password_hash(password_hash, password)
