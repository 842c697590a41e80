"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

import logfire
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Comment
from agora.domain.repository import CommentRepository
from agora.domain.value import CommentId, FilterExpr
from agora.persistence.filter import compile_filter
from agora.persistence.mappers import comment_to_dict, row_to_comment
from agora.persistence.tables import comments_table

# Columns listing filters may reference
FILTERABLE_FIELDS = frozenset(
    {"id", "post_id", "author_id", "parent_id", "depth", "text", "created_at"}
)


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, deleted or not."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_matching(self, criteria: FilterExpr) -> List[Comment]:
        """Find all non-deleted comments matching a filter."""
        with logfire.span("comment_repository.find_matching"):
            stmt = select(comments_table).where(
                comments_table.c.deleted_at.is_(None),
                compile_filter(criteria, comments_table, FILTERABLE_FIELDS),
            )
            result = await self.session.execute(stmt)
            comments = [row_to_comment(row._asdict()) for row in result.fetchall()]
            logfire.debug("Comment candidates fetched", count=len(comments))
            return comments

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)
        stmt = insert(comments_table).values(**comment_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[comments_table.c.id],
            set_={
                key: value for key, value in comment_dict.items() if key != "id"
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return comment
