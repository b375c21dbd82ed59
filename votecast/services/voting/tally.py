from collections import Counter

from votecast.errors import ResultsNotPublished
from votecast.models import Vote


def _ranking_key(row):
    return (-row["count"], row["candidate"].name.lower(), row["candidate"].id)


def tally_election(election):
    """Count an election's ballots from the raw vote rows.

    Nothing is computed until the results are published. Rows come back
    ranked by vote count, ties broken by candidate name.
    """
    if not election.results_published:
        raise ResultsNotPublished()

    counts = Counter(
        candidate_id
        for (candidate_id,) in Vote.query.filter_by(election_id=election.id)
        .with_entities(Vote.candidate_id)
        .all()
    )

    rows = [
        {"candidate": candidate, "count": counts[candidate.id]}
        for candidate in election.candidates
    ]
    total_votes = sum(row["count"] for row in rows)
    for row in rows:
        row["percent"] = row["count"] / total_votes * 100 if total_votes else 0
    rows.sort(key=_ranking_key)

    top_vote_count = rows[0]["count"] if rows else 0
    winners = [
        row["candidate"]
        for row in rows
        if top_vote_count and row["count"] == top_vote_count
    ]

    return {
        "total_votes": total_votes,
        "candidate_results": rows,
        "winner": winners[0] if len(winners) == 1 else None,
        "winners": winners,
        "is_tie": len(winners) > 1,
        "top_vote_count": top_vote_count,
    }
