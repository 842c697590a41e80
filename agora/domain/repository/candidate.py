"""Candidate source interface for listings."""

from abc import ABC, abstractmethod
from typing import Sequence

from agora.domain.model import Subject
from agora.domain.value import FilterExpr


class CandidateRepository(ABC):
    """Source of rankable subjects for the pagination engine.

    Implementations return every non-deleted subject matching the filter,
    in no particular order. Ordering and slicing happen in the domain.
    """

    @abstractmethod
    async def find_matching(self, criteria: FilterExpr) -> Sequence[Subject]:
        """Find all non-deleted subjects matching a filter.

        Args:
            criteria: Filter expression interpreted by the storage backend

        Returns:
            Matching subjects (unordered)

        Raises:
            ValidationError: If the filter references an unknown field
        """
        pass
