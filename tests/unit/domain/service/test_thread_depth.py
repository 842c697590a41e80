"""Unit tests for ThreadDepthValidator."""

from uuid import uuid4

import pytest

from agora.domain.error import (
    DepthExceededError,
    InvalidParentChainError,
    ParentNotFoundError,
)
from agora.domain.repository import CommentRepository
from agora.domain.service import CommentService, ThreadDepthValidator
from agora.domain.value import CommentId, PostId, UserId
from agora.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import BASE_TIME, make_comment
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def build_chain(repo, post_id, length):
    """Save a chain of ``length`` comments, each replying to the previous one."""
    chain = []
    parent_id = None
    for depth in range(length):
        comment = make_comment(post_id, parent_id=parent_id, depth=depth)
        await repo.save(comment)
        chain.append(comment)
        parent_id = comment.id
    return chain


class TestValidateNewCommentDepth:
    """Tests for depth computation and limits."""

    @pytest.mark.asyncio
    async def test_top_level_comment_has_depth_zero(self, unit_env):
        """No parent means depth 0."""
        # Arrange
        validator = await unit_env.get(ThreadDepthValidator)

        # Act
        depth = await validator.validate_new_comment_depth(PostId(uuid4()), None)

        # Assert
        assert depth == 0

    @pytest.mark.asyncio
    async def test_reply_is_one_deeper_than_parent(self, unit_env):
        """A reply to a top-level comment sits at depth 1."""
        # Arrange
        validator = await unit_env.get(ThreadDepthValidator)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        (root,) = await build_chain(comment_repo, post_id, 1)

        # Act
        depth = await validator.validate_new_comment_depth(post_id, root.id)

        # Assert
        assert depth == 1

    @pytest.mark.asyncio
    async def test_reply_at_max_depth_is_accepted(self, unit_env):
        """Replying to a depth-7 comment yields depth 8, the deepest allowed."""
        # Arrange
        validator = await unit_env.get(ThreadDepthValidator)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        chain = await build_chain(comment_repo, post_id, 8)

        # Act
        depth = await validator.validate_new_comment_depth(post_id, chain[-1].id)

        # Assert
        assert depth == 8

    @pytest.mark.asyncio
    async def test_reply_past_max_depth_is_rejected(self, unit_env):
        """Replying to a depth-8 comment would reach depth 9."""
        # Arrange
        validator = await unit_env.get(ThreadDepthValidator)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        chain = await build_chain(comment_repo, post_id, 9)

        # Act & Assert
        with pytest.raises(DepthExceededError) as exc_info:
            await validator.validate_new_comment_depth(post_id, chain[-1].id)
        assert exc_info.value.max_depth == 8

    @pytest.mark.asyncio
    async def test_configured_max_depth_is_honoured(self):
        """A smaller limit rejects shallower replies."""
        # Arrange
        repo = InMemoryCommentRepository()
        validator = ThreadDepthValidator(comment_repository=repo, max_depth=2)
        post_id = PostId(uuid4())
        chain = await build_chain(repo, post_id, 3)

        # Act
        accepted = await validator.validate_new_comment_depth(post_id, chain[1].id)

        # Assert
        assert accepted == 2
        with pytest.raises(DepthExceededError):
            await validator.validate_new_comment_depth(post_id, chain[2].id)

    @pytest.mark.asyncio
    async def test_missing_parent_raises(self, unit_env):
        """Unknown parent ids are rejected."""
        # Arrange
        validator = await unit_env.get(ThreadDepthValidator)

        # Act & Assert
        with pytest.raises(ParentNotFoundError):
            await validator.validate_new_comment_depth(
                PostId(uuid4()), CommentId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_deleted_parent_raises(self, unit_env):
        """Deleted comments cannot be replied to."""
        # Arrange
        validator = await unit_env.get(ThreadDepthValidator)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        parent = await comment_repo.save(make_comment(post_id, deleted_at=BASE_TIME))

        # Act & Assert
        with pytest.raises(ParentNotFoundError):
            await validator.validate_new_comment_depth(post_id, parent.id)

    @pytest.mark.asyncio
    async def test_parent_from_other_post_raises(self, unit_env):
        """A reply must stay within its post."""
        # Arrange
        validator = await unit_env.get(ThreadDepthValidator)
        comment_repo = await unit_env.get(CommentRepository)
        parent = await comment_repo.save(make_comment(uuid4()))

        # Act & Assert
        with pytest.raises(InvalidParentChainError):
            await validator.validate_new_comment_depth(PostId(uuid4()), parent.id)

    @pytest.mark.asyncio
    async def test_ancestor_from_other_post_raises(self, unit_env):
        """A corrupted chain that leaves the post is rejected."""
        # Arrange
        validator = await unit_env.get(ThreadDepthValidator)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        stray = await comment_repo.save(make_comment(uuid4()))
        parent = await comment_repo.save(
            make_comment(post_id, parent_id=stray.id, depth=1)
        )

        # Act & Assert
        with pytest.raises(InvalidParentChainError):
            await validator.validate_new_comment_depth(post_id, parent.id)

    @pytest.mark.asyncio
    async def test_missing_ancestor_raises(self, unit_env):
        """A chain pointing at a nonexistent ancestor is rejected."""
        # Arrange
        validator = await unit_env.get(ThreadDepthValidator)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        parent = await comment_repo.save(
            make_comment(post_id, parent_id=uuid4(), depth=1)
        )

        # Act & Assert
        with pytest.raises(InvalidParentChainError):
            await validator.validate_new_comment_depth(post_id, parent.id)

    @pytest.mark.asyncio
    async def test_deleted_ancestor_still_counts(self, unit_env):
        """Deleted ancestors keep their place in the chain."""
        # Arrange
        validator = await unit_env.get(ThreadDepthValidator)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        root = await comment_repo.save(make_comment(post_id, deleted_at=BASE_TIME))
        parent = await comment_repo.save(
            make_comment(post_id, parent_id=root.id, depth=1)
        )

        # Act
        depth = await validator.validate_new_comment_depth(post_id, parent.id)

        # Assert
        assert depth == 2


class TestCreateComment:
    """Tests for CommentService.create_comment depth handling."""

    @pytest.mark.asyncio
    async def test_created_reply_records_depth(self, unit_env):
        """The stored reply carries the computed depth."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        root = await comment_service.create_comment(
            post_id=post_id, author_id=UserId(uuid4()), text="Top level"
        )

        # Act
        reply = await comment_service.create_comment(
            post_id=post_id,
            author_id=UserId(uuid4()),
            text="A reply",
            parent_id=root.id,
        )

        # Assert
        assert root.depth == 0
        assert reply.depth == 1
        assert reply.parent_id == root.id
        assert await comment_service.get_comment_by_id(reply.id) == reply
