"""Unit tests for CreatePostUseCase and GetPostUseCase."""

from uuid import UUID, uuid4

import pytest

from agora.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
)
from agora.domain.error import NotFoundError
from agora.domain.repository import PostRepository, VoteRepository
from agora.domain.value import VoteState, VoteValue
from tests.conftest import BASE_TIME, make_post, make_vote
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_create_post_stores_post_with_zero_score(self, unit_env):
        """A new post is persisted and starts at score 0."""
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        community_id, author_id = uuid4(), uuid4()

        # Act
        response = await use_case.execute(
            CreatePostRequest(
                community_id=str(community_id),
                title="Sequencing costs in 2025",
                body="Discussion thread",
                author_id=str(author_id),
            )
        )

        # Assert
        assert response.score == 0
        assert response.author_id == str(author_id)
        saved = await post_repo.find_by_id(UUID(response.post_id))
        assert saved is not None
        assert saved.community_id == community_id


class TestGetPostUseCase:
    """Tests for GetPostUseCase."""

    @pytest.mark.asyncio
    async def test_anonymous_caller_gets_score_without_vote(self, unit_env):
        """Anonymous readers see the score and no vote."""
        # Arrange
        use_case = await unit_env.get(GetPostUseCase)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)
        post = await post_repo.save(make_post())
        await vote_repo.upsert(make_vote(post.id, VoteValue.DOWN))

        # Act
        response = await use_case.execute(GetPostRequest(post_id=str(post.id)))

        # Assert
        assert response.score == -1
        assert response.my_vote == VoteState.NONE

    @pytest.mark.asyncio
    async def test_caller_sees_own_vote(self, unit_env):
        """Authenticated readers see their own vote state."""
        # Arrange
        use_case = await unit_env.get(GetPostUseCase)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)
        post = await post_repo.save(make_post())
        voter = uuid4()
        await vote_repo.upsert(make_vote(post.id, VoteValue.UP, user_id=voter))

        # Act
        response = await use_case.execute(
            GetPostRequest(post_id=str(post.id), user_id=str(voter))
        )

        # Assert
        assert response.score == 1
        assert response.my_vote == VoteState.UPVOTE

    @pytest.mark.asyncio
    async def test_deleted_post_is_not_found(self, unit_env):
        """Deleted posts are hidden."""
        # Arrange
        use_case = await unit_env.get(GetPostUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(deleted_at=BASE_TIME))

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(GetPostRequest(post_id=str(post.id)))
