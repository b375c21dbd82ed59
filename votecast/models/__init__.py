from votecast.models.audit_log import AuditLog
from votecast.models.candidate import Candidate
from votecast.models.election import ELECTION_STATUSES, Election
from votecast.models.face_data import FaceData
from votecast.models.user import User
from votecast.models.user_role import ROLES, UserRole
from votecast.models.vote import Vote

__all__ = [
    "User",
    "UserRole",
    "FaceData",
    "Election",
    "Candidate",
    "Vote",
    "AuditLog",
    "ELECTION_STATUSES",
    "ROLES",
]
