"""Deterministic ranking of posts and comments."""

from datetime import datetime
from typing import Mapping, NamedTuple, Optional, Sequence, Union
from uuid import UUID

from agora.domain.model import Subject
from agora.domain.value import SortMode


class NewestKey(NamedTuple):
    """Sort key for Newest mode: created_at DESC, id DESC."""

    created_at: datetime
    id: str


class TopKey(NamedTuple):
    """Sort key for Top mode: score DESC, created_at DESC, id DESC."""

    score: int
    created_at: datetime
    id: str


SortKey = Union[NewestKey, TopKey]


class RankingComparator:
    """Total order over subjects for a sort mode.

    Keys compare as tuples and the listing order is descending, so a
    larger key ranks earlier. Ids compare as their canonical UUID text,
    which makes distinct subjects never tie.
    """

    def __init__(self, sort_mode: SortMode) -> None:
        self.sort_mode = sort_mode

    def sort_key(self, subject: Subject, score: Optional[int] = None) -> SortKey:
        """Build the sort key of a subject.

        Args:
            subject: Post or comment
            score: Net score, required in Top mode

        Raises:
            ValueError: Top mode without a score
        """
        if self.sort_mode is SortMode.NEWEST:
            return NewestKey(subject.created_at, str(subject.id))
        if score is None:
            raise ValueError("Top ordering requires a score")
        return TopKey(int(score), subject.created_at, str(subject.id))

    @staticmethod
    def compare_keys(a: SortKey, b: SortKey) -> int:
        """Negative if ``a`` ranks before ``b``, positive if after, 0 if equal."""
        if a == b:
            return 0
        return -1 if a > b else 1

    def compare(
        self,
        a: Subject,
        b: Subject,
        score_a: Optional[int] = None,
        score_b: Optional[int] = None,
    ) -> int:
        """Compare two subjects in listing order."""
        return self.compare_keys(self.sort_key(a, score_a), self.sort_key(b, score_b))

    def sort(
        self,
        subjects: Sequence[Subject],
        scores: Optional[Mapping[UUID, int]] = None,
    ) -> list[Subject]:
        """Return subjects in listing order.

        Args:
            subjects: Candidates to order
            scores: Net score per subject ID, required in Top mode

        Raises:
            ValueError: Top mode without scores
        """
        if self.sort_mode is SortMode.TOP:
            if scores is None:
                raise ValueError("Top ordering requires scores")
            return sorted(
                subjects,
                key=lambda subject: self.sort_key(subject, scores[subject.id]),
                reverse=True,
            )
        return sorted(subjects, key=self.sort_key, reverse=True)
