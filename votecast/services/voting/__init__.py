from votecast.services.voting.ballot import cast_ballot, find_ballot
from votecast.services.voting.tally import tally_election

__all__ = [
    "cast_ballot",
    "find_ballot",
    "tally_election",
]
