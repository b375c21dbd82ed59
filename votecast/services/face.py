import json

import numpy as np
from flask import current_app

from votecast.errors import MediaAccessDenied, ValidationError, VerificationFailed
from votecast.extensions import db
from votecast.models import FaceData


class FaceCapture:
    """A probe captured for one identity check.

    ``source`` is either a sequence of floats or a file-like object holding a
    JSON array. The capture must be used as a context manager so the
    underlying stream is released on every exit path.
    """

    def __init__(self, source):
        self.source = source
        self.released = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    def release(self):
        if self.released:
            return
        close = getattr(self.source, "close", None)
        if callable(close):
            close()
        self.released = True

    def read_embedding(self):
        if self.released:
            raise MediaAccessDenied("The camera capture has already been released.")
        if self.source is None:
            raise MediaAccessDenied()

        raw = self.source
        if hasattr(raw, "read"):
            raw = raw.read()
        return decode_embedding(raw, VerificationFailed)


def decode_embedding(raw, error_cls=ValidationError):
    """Turn a submitted embedding into a list, JSON-decoding text payloads."""
    if isinstance(raw, (str, bytes)):
        if not raw.strip():
            raise MediaAccessDenied()
        try:
            raw = json.loads(raw)
        except ValueError:
            raise error_cls("The face capture could not be read.")

    if raw is None or (isinstance(raw, (list, tuple)) and not raw):
        raise MediaAccessDenied()
    return raw


def parse_embedding(raw, dim, error_cls=ValidationError):
    try:
        vector = np.asarray(raw, dtype=np.float32)
    except (TypeError, ValueError):
        raise error_cls("Face data must be a list of numbers.")

    if vector.ndim != 1 or vector.size != dim:
        raise error_cls(f"Face data must contain exactly {dim} values.")
    if not np.all(np.isfinite(vector)):
        raise error_cls("Face data contains invalid values.")
    if np.linalg.norm(vector) == 0:
        raise error_cls("Face data must not be all zeros.")
    return vector


def cosine_similarity(a, b):
    if a is None or b is None:
        return -1.0
    a = a.astype(np.float32)
    b = b.astype(np.float32)
    den = np.linalg.norm(a) * np.linalg.norm(b)
    if den == 0:
        return -1.0
    return float(np.dot(a, b) / den)


def register_face(voter, raw_embedding):
    raw_embedding = decode_embedding(raw_embedding)
    vector = parse_embedding(raw_embedding, current_app.config["FACE_EMBEDDING_DIM"])
    encoding = json.dumps([float(value) for value in vector])

    face_data = voter.face_data
    if face_data is None:
        face_data = FaceData(face_encoding=encoding)
        voter.face_data = face_data
    else:
        face_data.face_encoding = encoding

    voter.face_registered = True
    db.session.commit()
    current_app.logger.info("Face template registered for user %s", voter.id)
    return face_data


def verify_identity(voter, capture, threshold=None):
    """Compare the capture against the voter's stored template.

    Fails closed: a missing template, an unreadable probe or a similarity
    below ``threshold`` all raise :class:`VerificationFailed`.
    """
    if threshold is None:
        threshold = current_app.config["FACE_MATCH_THRESHOLD"]
    dim = current_app.config["FACE_EMBEDDING_DIM"]

    if voter.face_data is None:
        raise VerificationFailed("No registered face data was found for your account.")

    probe = parse_embedding(capture.read_embedding(), dim, error_cls=VerificationFailed)
    try:
        template = parse_embedding(
            json.loads(voter.face_data.face_encoding), dim, error_cls=VerificationFailed
        )
    except ValueError:
        raise VerificationFailed("Stored face data is unreadable. Please register again.")

    score = cosine_similarity(probe, template)
    if score < threshold:
        current_app.logger.warning(
            "Face verification rejected for user %s (score %.3f < %.3f)",
            voter.id,
            score,
            threshold,
        )
        raise VerificationFailed()
    return score
