"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Post
from agora.domain.repository import PostRepository
from agora.domain.value import FilterExpr, PostId
from agora.persistence.filter import compile_filter
from agora.persistence.mappers import post_to_dict, row_to_post
from agora.persistence.tables import posts_table

# Columns listing filters may reference
FILTERABLE_FIELDS = frozenset(
    {"id", "community_id", "author_id", "title", "body", "created_at", "updated_at"}
)


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID, deleted or not."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def find_matching(self, criteria: FilterExpr) -> List[Post]:
        """Find all non-deleted posts matching a filter."""
        with logfire.span("post_repository.find_matching"):
            stmt = select(posts_table).where(
                posts_table.c.deleted_at.is_(None),
                compile_filter(criteria, posts_table, FILTERABLE_FIELDS),
            )
            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]
            logfire.debug("Post candidates fetched", count=len(posts))
            return posts

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        post_dict = post_to_dict(post)
        stmt = insert(posts_table).values(**post_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[posts_table.c.id],
            set_={
                key: value for key, value in post_dict.items() if key != "id"
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return post
