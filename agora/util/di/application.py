"""Application layer DI providers."""

from dishka import Scope, provide

from agora.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentUseCase,
    ListCommentsUseCase,
    ListRepliesUseCase,
)
from agora.application.usecase.post import (
    CreatePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
)
from agora.application.usecase.vote import ClearVoteUseCase, SetVoteUseCase
from agora.config import PaginationSettings
from agora.domain.repository import CommentRepository, PostRepository, VoteRepository
from agora.domain.service import (
    CommentService,
    PostService,
    VoteAggregator,
    VoteService,
)
from agora.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider."""

    scope = Scope.REQUEST

    # Post use cases
    @provide
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    @provide
    def get_get_post_use_case(
        self,
        post_service: PostService,
        vote_aggregator: VoteAggregator,
        vote_repository: VoteRepository,
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            post_service=post_service,
            vote_aggregator=vote_aggregator,
            vote_repository=vote_repository,
        )

    @provide
    def get_list_posts_use_case(
        self,
        post_repository: PostRepository,
        vote_aggregator: VoteAggregator,
        pagination_settings: PaginationSettings,
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            post_repository=post_repository,
            vote_aggregator=vote_aggregator,
            pagination_settings=pagination_settings,
        )

    # Comment use cases
    @provide
    def get_create_comment_use_case(
        self, post_service: PostService, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            post_service=post_service, comment_service=comment_service
        )

    @provide
    def get_get_comment_use_case(
        self,
        comment_service: CommentService,
        vote_aggregator: VoteAggregator,
        vote_repository: VoteRepository,
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(
            comment_service=comment_service,
            vote_aggregator=vote_aggregator,
            vote_repository=vote_repository,
        )

    @provide
    def get_list_comments_use_case(
        self,
        post_service: PostService,
        comment_repository: CommentRepository,
        vote_aggregator: VoteAggregator,
        pagination_settings: PaginationSettings,
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            post_service=post_service,
            comment_repository=comment_repository,
            vote_aggregator=vote_aggregator,
            pagination_settings=pagination_settings,
        )

    @provide
    def get_list_replies_use_case(
        self,
        comment_service: CommentService,
        comment_repository: CommentRepository,
        vote_aggregator: VoteAggregator,
        pagination_settings: PaginationSettings,
    ) -> ListRepliesUseCase:
        """Provide list replies use case."""
        return ListRepliesUseCase(
            comment_service=comment_service,
            comment_repository=comment_repository,
            vote_aggregator=vote_aggregator,
            pagination_settings=pagination_settings,
        )

    # Vote use cases
    @provide
    def get_set_vote_use_case(self, vote_service: VoteService) -> SetVoteUseCase:
        """Provide set vote use case."""
        return SetVoteUseCase(vote_service=vote_service)

    @provide
    def get_clear_vote_use_case(self, vote_service: VoteService) -> ClearVoteUseCase:
        """Provide clear vote use case."""
        return ClearVoteUseCase(vote_service=vote_service)
