"""PostgreSQL implementation of Vote repository."""

from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Sequence
from uuid import UUID

import logfire
from sqlalchemy import and_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Vote
from agora.domain.repository import VoteRepository
from agora.domain.value import UserId, VotableType
from agora.persistence.mappers import row_to_vote, vote_to_dict
from agora.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    The partial unique index on (user_id, votable_type, votable_id) over
    active rows keeps at most one active vote per user per item, and
    ``upsert`` resolves races against it with ON CONFLICT.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _active_for(
        self, user_id: UserId, votable_type: VotableType, votable_id: UUID
    ):
        return and_(
            votes_table.c.user_id == user_id,
            votes_table.c.votable_type == votable_type.value,
            votes_table.c.votable_id == votable_id,
            votes_table.c.deleted_at.is_(None),
        )

    async def find_active_by_votables(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> Dict[UUID, List[Vote]]:
        """Find active votes for a batch of items (single query)."""
        if not votable_ids:
            return {}

        with logfire.span(
            "vote_repository.find_active_by_votables",
            votable_type=votable_type.value,
            count=len(votable_ids),
        ):
            stmt = select(votes_table).where(
                and_(
                    votes_table.c.votable_type == votable_type.value,
                    votes_table.c.votable_id.in_(votable_ids),
                    votes_table.c.deleted_at.is_(None),
                )
            )
            result = await self.session.execute(stmt)

            votes: Dict[UUID, List[Vote]] = defaultdict(list)
            for row in result.fetchall():
                vote = row_to_vote(row._asdict())
                votes[vote.votable_id].append(vote)
            return dict(votes)

    async def find_active_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's active vote on a specific item."""
        stmt = select(votes_table).where(
            self._active_for(user_id, votable_type, votable_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def upsert(self, vote: Vote) -> Vote:
        """Insert the vote, or update the value of the existing active one."""
        with logfire.span(
            "vote_repository.upsert",
            votable_type=vote.votable_type.value,
            votable_id=str(vote.votable_id),
        ):
            stmt = insert(votes_table).values(**vote_to_dict(vote))
            stmt = stmt.on_conflict_do_update(
                index_elements=[
                    votes_table.c.user_id,
                    votes_table.c.votable_type,
                    votes_table.c.votable_id,
                ],
                index_where=votes_table.c.deleted_at.is_(None),
                set_={
                    "value": stmt.excluded.value,
                    "updated_at": stmt.excluded.updated_at,
                },
            ).returning(*votes_table.c)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()
            return row_to_vote(row._asdict())

    async def soft_delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> bool:
        """Tombstone a user's active vote on an item."""
        now = datetime.now()
        stmt = (
            update(votes_table)
            .where(self._active_for(user_id, votable_type, votable_id))
            .values(deleted_at=now, updated_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
