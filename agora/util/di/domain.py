"""Domain layer DI providers."""

from dishka import Scope, provide

from agora.config import AuthSettings, ThreadSettings
from agora.domain.repository import CommentRepository, PostRepository, VoteRepository
from agora.domain.service import (
    CommentService,
    IdentityService,
    PostService,
    ThreadDepthValidator,
    VoteAggregator,
    VoteService,
)
from agora.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_identity_service(self, auth_settings: AuthSettings) -> IdentityService:
        """Provide caller identity domain service."""
        return IdentityService(auth_settings=auth_settings)

    @provide
    def get_vote_aggregator(self, vote_repository: VoteRepository) -> VoteAggregator:
        """Provide vote aggregator."""
        return VoteAggregator(vote_repository=vote_repository)

    @provide
    def get_thread_depth_validator(
        self, comment_repository: CommentRepository, thread_settings: ThreadSettings
    ) -> ThreadDepthValidator:
        """Provide thread depth validator."""
        return ThreadDepthValidator(
            comment_repository=comment_repository,
            max_depth=thread_settings.max_depth,
        )

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        thread_depth_validator: ThreadDepthValidator,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            thread_depth_validator=thread_depth_validator,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        vote_aggregator: VoteAggregator,
        post_service: PostService,
        comment_service: CommentService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            vote_aggregator=vote_aggregator,
            post_service=post_service,
            comment_service=comment_service,
        )
