"""Vote aggregation domain service."""

from typing import Iterable
from uuid import UUID

import logfire

from agora.domain.repository import VoteRepository
from agora.domain.value import VotableType

from .base import Service


class VoteAggregator(Service):
    """Computes net scores from active votes.

    Scores are derived on every call and never cached.
    """

    def __init__(self, vote_repository: VoteRepository) -> None:
        """Initialize vote aggregator.

        Args:
            vote_repository: Vote repository
        """
        self.vote_repository = vote_repository

    async def compute_score(self, votable_type: VotableType, subject_id: UUID) -> int:
        """Compute the net score of a single subject.

        Args:
            votable_type: Type of subject (post or comment)
            subject_id: Subject ID

        Returns:
            Sum of active vote values, 0 when there are none
        """
        scores = await self.compute_scores(votable_type, [subject_id])
        return scores[subject_id]

    async def compute_scores(
        self, votable_type: VotableType, subject_ids: Iterable[UUID]
    ) -> dict[UUID, int]:
        """Compute net scores for a batch of subjects.

        Every requested ID gets an entry; IDs without active votes score 0.
        Storage errors propagate unchanged.

        Args:
            votable_type: Type of subjects (post or comment)
            subject_ids: Subject IDs (duplicates are collapsed)

        Returns:
            Mapping of subject ID to score
        """
        requested = list(dict.fromkeys(subject_ids))
        if not requested:
            return {}

        with logfire.span(
            "vote_aggregator.compute_scores",
            votable_type=votable_type.value,
            count=len(requested),
        ):
            # Single batch query to avoid N+1
            votes_by_subject = await self.vote_repository.find_active_by_votables(
                votable_type=votable_type,
                votable_ids=requested,
            )

            scores = {subject_id: 0 for subject_id in requested}
            for subject_id, votes in votes_by_subject.items():
                if subject_id not in scores:
                    continue
                scores[subject_id] = sum(
                    int(vote.value) for vote in votes if vote.deleted_at is None
                )

            logfire.debug(
                "Scores computed",
                votable_type=votable_type.value,
                count=len(scores),
                voted=len(votes_by_subject),
            )
            return scores
