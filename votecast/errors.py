class VotecastError(Exception):
    """Base class for errors surfaced to the user as ``{"ok": false, "error": ...}``."""

    status_code = 400
    default_message = "The request could not be completed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(VotecastError):
    default_message = "The submitted data is invalid."


class AuthorizationDenied(VotecastError):
    status_code = 403
    default_message = "Access denied. Admin privileges required."


class ElectionUnavailable(VotecastError):
    status_code = 404
    default_message = "This election is not available for voting."


class CandidateNotFound(VotecastError):
    status_code = 404
    default_message = "Candidate not found."


class ResultsNotPublished(VotecastError):
    status_code = 404
    default_message = "Results for this election have not been published."


class CandidateMismatch(VotecastError):
    default_message = "The selected candidate is not standing in this election."


class DuplicateVote(VotecastError):
    status_code = 409
    default_message = "You have already voted in this election."


class InvalidTransition(VotecastError):
    status_code = 409


class FaceNotRegistered(VotecastError):
    status_code = 403
    default_message = "Please register your face before voting."


class MediaAccessDenied(VotecastError):
    default_message = "Failed to access camera. Please allow camera permissions."


class VerificationFailed(VotecastError):
    status_code = 403
    default_message = "Face verification failed."


class BallotNotFound(VotecastError):
    status_code = 404
    default_message = "You have not voted in this election."
