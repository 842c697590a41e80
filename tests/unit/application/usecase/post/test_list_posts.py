"""Unit tests for ListPostsUseCase."""

from datetime import timedelta, timezone
from uuid import uuid4

import pytest

from agora.application.usecase.post import ListPostsRequest, ListPostsUseCase
from agora.domain.error import ValidationError
from agora.domain.repository import PostRepository, VoteRepository
from agora.domain.value import SortMode, VoteValue
from tests.conftest import BASE_TIME, make_post, make_vote
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListPostsUseCase:
    """Tests for ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_first_page_is_keyset_by_default(self, unit_env):
        """Without cursor or page the first keyset page is returned."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        for i in range(3):
            await post_repo.save(make_post(created_at=BASE_TIME + timedelta(minutes=i)))

        # Act
        response = await use_case.execute(ListPostsRequest(limit=2))

        # Assert
        assert len(response.data) == 2
        assert response.next_cursor is not None
        assert response.pagination is None

    @pytest.mark.asyncio
    async def test_page_selects_offset_mode(self, unit_env):
        """A page number returns offset metadata and no cursor."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        for _ in range(3):
            await post_repo.save(make_post())

        # Act
        response = await use_case.execute(ListPostsRequest(page=1, limit=2))

        # Assert
        assert response.next_cursor is None
        assert response.pagination.records == 3
        assert response.pagination.pages == 2

    @pytest.mark.asyncio
    async def test_cursor_and_page_together_are_rejected(self, unit_env):
        """The two pagination modes cannot be mixed."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(ListPostsRequest(cursor="abc", page=1))

    @pytest.mark.asyncio
    async def test_top_sort_reports_scores(self, unit_env):
        """Top listings rank by score and expose it."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)
        popular = await post_repo.save(make_post(created_at=BASE_TIME))
        recent = await post_repo.save(
            make_post(created_at=BASE_TIME + timedelta(days=1))
        )
        await vote_repo.upsert(make_vote(popular.id, VoteValue.UP))

        # Act
        response = await use_case.execute(ListPostsRequest(sort=SortMode.TOP))

        # Assert
        assert [item.post_id for item in response.data] == [
            str(popular.id),
            str(recent.id),
        ]
        assert [item.score for item in response.data] == [1, 0]

    @pytest.mark.asyncio
    async def test_filters_by_community_and_author(self, unit_env):
        """Community and author filters narrow the listing."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        community_id, author_id = uuid4(), uuid4()
        wanted = await post_repo.save(
            make_post(community_id=community_id, author_id=author_id)
        )
        await post_repo.save(make_post(community_id=community_id))
        await post_repo.save(make_post(author_id=author_id))

        # Act
        response = await use_case.execute(
            ListPostsRequest(community_id=str(community_id), author_id=str(author_id))
        )

        # Assert
        assert [item.post_id for item in response.data] == [str(wanted.id)]

    @pytest.mark.asyncio
    async def test_search_matches_title_or_body(self, unit_env):
        """Free text searches title and body, ignoring case."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        in_title = await post_repo.save(make_post(title="Ribosome structure"))
        in_body = await post_repo.save(make_post(body="New RIBOSOME data"))
        await post_repo.save(make_post(title="Unrelated"))

        # Act
        response = await use_case.execute(ListPostsRequest(q="  ribosome "))

        # Assert
        assert {item.post_id for item in response.data} == {
            str(in_title.id),
            str(in_body.id),
        }

    @pytest.mark.asyncio
    async def test_short_search_is_ignored(self, unit_env):
        """One-character queries do not filter."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        await post_repo.save(make_post(title="Alpha"))
        await post_repo.save(make_post(title="Omega"))

        # Act
        response = await use_case.execute(ListPostsRequest(q="z"))

        # Assert
        assert len(response.data) == 2

    @pytest.mark.asyncio
    async def test_time_window(self, unit_env):
        """since and until bound creation time inclusively."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        inside = await post_repo.save(make_post(created_at=BASE_TIME))
        await post_repo.save(make_post(created_at=BASE_TIME - timedelta(days=2)))
        await post_repo.save(make_post(created_at=BASE_TIME + timedelta(days=2)))

        # Act
        response = await use_case.execute(
            ListPostsRequest(
                since=BASE_TIME - timedelta(days=1), until=BASE_TIME
            )
        )

        # Assert
        assert [item.post_id for item in response.data] == [str(inside.id)]

    @pytest.mark.asyncio
    async def test_aware_time_window_is_accepted(self, unit_env):
        """Timezone-aware bounds are compared in local time."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        await post_repo.save(make_post(created_at=BASE_TIME))
        since = (BASE_TIME - timedelta(days=30)).astimezone(timezone.utc)

        # Act
        response = await use_case.execute(ListPostsRequest(since=since))

        # Assert
        assert len(response.data) == 1

    @pytest.mark.asyncio
    async def test_inverted_time_window_is_rejected(self, unit_env):
        """since later than until is a validation error."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                ListPostsRequest(since=BASE_TIME, until=BASE_TIME - timedelta(days=1))
            )
