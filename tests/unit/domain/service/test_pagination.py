"""Unit tests for PaginationOrchestrator."""

import base64
import json
from datetime import timedelta
from uuid import UUID, uuid4

import pytest

from agora.domain.error import (
    MalformedCursorError,
    MismatchedSortModeError,
    ValidationError,
)
from agora.domain.service import CursorCodec, PaginationOrchestrator, VoteAggregator
from agora.domain.value import Eq, SortMode, VotableType, VoteValue, match_all
from agora.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemoryVoteRepository,
)
from tests.conftest import BASE_TIME, make_comment, make_post, make_vote


def numbered_id(n: int) -> UUID:
    return UUID(int=n)


@pytest.fixture
def vote_repo():
    return InMemoryVoteRepository()


@pytest.fixture
def post_repo():
    return InMemoryPostRepository()


@pytest.fixture
def post_orchestrator(post_repo, vote_repo):
    return PaginationOrchestrator(
        repository=post_repo,
        vote_aggregator=VoteAggregator(vote_repository=vote_repo),
        votable_type=VotableType.POST,
    )


async def add_votes(vote_repo, votable_id, value, count, votable_type=VotableType.POST):
    for _ in range(count):
        await vote_repo.upsert(make_vote(votable_id, value, votable_type))


async def walk(orchestrator, criteria, sort_mode, limit):
    """Follow cursors until the listing is exhausted."""
    pages = []
    cursor = None
    while True:
        page = await orchestrator.list_subjects(
            criteria, sort_mode, cursor=cursor, limit=limit
        )
        pages.append(page)
        if not page.has_next:
            return pages
        cursor = page.next_cursor


class TestKeysetPagination:
    """Tests for cursor-based listing."""

    @pytest.mark.asyncio
    async def test_newest_comments_split_into_two_pages(self, vote_repo):
        """28 comments at limit 20 give a full page and a page of 8."""
        # Arrange
        comment_repo = InMemoryCommentRepository()
        orchestrator = PaginationOrchestrator(
            repository=comment_repo,
            vote_aggregator=VoteAggregator(vote_repository=vote_repo),
            votable_type=VotableType.COMMENT,
        )
        post_id = uuid4()
        comments = [
            make_comment(
                post_id,
                comment_id=numbered_id(i),
                created_at=BASE_TIME + timedelta(minutes=i),
            )
            for i in range(28)
        ]
        for comment in comments:
            await comment_repo.save(comment)
        criteria = Eq(field="post_id", value=post_id)

        # Act
        first = await orchestrator.list_subjects(criteria, SortMode.NEWEST)
        second = await orchestrator.list_subjects(
            criteria, SortMode.NEWEST, cursor=first.next_cursor
        )

        # Assert
        assert len(first.items) == 20
        assert first.has_next is True
        assert first.next_cursor is not None
        assert [r.subject.id for r in first.items] == [
            numbered_id(i) for i in range(27, 7, -1)
        ]
        assert len(second.items) == 8
        assert second.has_next is False
        assert second.next_cursor is None
        assert [r.subject.id for r in second.items] == [
            numbered_id(i) for i in range(7, -1, -1)
        ]

    @pytest.mark.asyncio
    async def test_top_orders_by_score_with_tie_break(
        self, post_orchestrator, post_repo, vote_repo
    ):
        """Equal scores are ordered by creation time, then id."""
        # Arrange
        p1 = make_post(post_id=numbered_id(1), created_at=BASE_TIME)
        p2 = make_post(post_id=numbered_id(2), created_at=BASE_TIME)
        p3 = make_post(post_id=numbered_id(3), created_at=BASE_TIME - timedelta(hours=1))
        p4 = make_post(post_id=numbered_id(4), created_at=BASE_TIME + timedelta(hours=1))
        for post in (p1, p2, p3, p4):
            await post_repo.save(post)
        for post in (p1, p2, p3):
            await add_votes(vote_repo, post.id, VoteValue.UP, 2)
        await add_votes(vote_repo, p4.id, VoteValue.DOWN, 1)

        # Act
        page = await post_orchestrator.list_subjects(match_all(), SortMode.TOP)

        # Assert
        assert [r.subject.id for r in page.items] == [p2.id, p1.id, p3.id, p4.id]
        assert [r.score for r in page.items] == [2, 2, 2, -1]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sort_mode", [SortMode.NEWEST, SortMode.TOP])
    @pytest.mark.parametrize("limit", [1, 3, 7, 25])
    async def test_walk_returns_every_item_once(
        self, post_orchestrator, post_repo, vote_repo, sort_mode, limit
    ):
        """Following cursors visits each post exactly once, in order."""
        # Arrange
        posts = [
            make_post(
                post_id=numbered_id(i),
                created_at=BASE_TIME + timedelta(minutes=i % 4),
            )
            for i in range(1, 21)
        ]
        for post in posts:
            await post_repo.save(post)
            await add_votes(vote_repo, post.id, VoteValue.UP, post.id.int % 3)

        # Act
        pages = await walk(post_orchestrator, match_all(), sort_mode, limit)

        # Assert
        seen = [r.subject.id for page in pages for r in page.items]
        assert sorted(seen) == sorted(p.id for p in posts)
        assert len(seen) == len(set(seen))
        full = await post_orchestrator.list_subjects(match_all(), sort_mode, limit=100)
        assert seen == [r.subject.id for r in full.items]
        assert all(len(page.items) == limit for page in pages[:-1])

    @pytest.mark.asyncio
    async def test_deleted_cursor_item_resumes_after_its_key(
        self, post_orchestrator, post_repo
    ):
        """When the last seen item disappears the walk still continues."""
        # Arrange
        posts = [
            make_post(post_id=numbered_id(i), created_at=BASE_TIME + timedelta(minutes=i))
            for i in range(5)
        ]
        for post in posts:
            await post_repo.save(post)
        first = await post_orchestrator.list_subjects(
            match_all(), SortMode.NEWEST, limit=2
        )
        await post_repo.save(posts[3].model_copy(update={"deleted_at": BASE_TIME}))

        # Act
        second = await post_orchestrator.list_subjects(
            match_all(), SortMode.NEWEST, cursor=first.next_cursor, limit=2
        )

        # Assert
        assert [r.subject.id for r in first.items] == [posts[4].id, posts[3].id]
        assert [r.subject.id for r in second.items] == [posts[2].id, posts[1].id]

    @pytest.mark.asyncio
    async def test_new_items_do_not_shift_later_pages(
        self, post_orchestrator, post_repo
    ):
        """Posts created mid-walk appear ahead of the cursor, not inside it."""
        # Arrange
        posts = [
            make_post(post_id=numbered_id(i), created_at=BASE_TIME + timedelta(minutes=i))
            for i in range(4)
        ]
        for post in posts:
            await post_repo.save(post)
        first = await post_orchestrator.list_subjects(
            match_all(), SortMode.NEWEST, limit=2
        )
        await post_repo.save(make_post(created_at=BASE_TIME + timedelta(hours=1)))

        # Act
        second = await post_orchestrator.list_subjects(
            match_all(), SortMode.NEWEST, cursor=first.next_cursor, limit=2
        )

        # Assert
        assert [r.subject.id for r in second.items] == [posts[1].id, posts[0].id]
        assert second.has_next is False

    @pytest.mark.asyncio
    async def test_empty_listing(self, post_orchestrator):
        """No candidates give an empty final page."""
        # Act
        page = await post_orchestrator.list_subjects(match_all(), SortMode.TOP)

        # Assert
        assert page.items == []
        assert page.has_next is False
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_exact_multiple_has_no_next(self, post_orchestrator, post_repo):
        """A listing that exactly fills the page has no continuation."""
        # Arrange
        for i in range(3):
            await post_repo.save(
                make_post(created_at=BASE_TIME + timedelta(minutes=i))
            )

        # Act
        page = await post_orchestrator.list_subjects(
            match_all(), SortMode.NEWEST, limit=3
        )

        # Assert
        assert len(page.items) == 3
        assert page.has_next is False

    @pytest.mark.asyncio
    async def test_cursor_from_other_sort_mode_is_rejected(
        self, post_orchestrator, post_repo
    ):
        """A Newest cursor cannot continue a Top listing."""
        # Arrange
        post = await post_repo.save(make_post())
        cursor = CursorCodec().encode(post, SortMode.NEWEST)

        # Act & Assert
        with pytest.raises(MismatchedSortModeError):
            await post_orchestrator.list_subjects(
                match_all(), SortMode.TOP, cursor=cursor
            )

    @pytest.mark.asyncio
    async def test_timezone_aware_cursor_is_rejected(
        self, post_orchestrator, post_repo
    ):
        """A cursor with a UTC offset is malformed, not a ranking failure."""
        # Arrange
        await post_repo.save(make_post())
        document = {
            "mode": "Newest",
            "created_at": "2025-03-01T12:00:00Z",
            "id": str(numbered_id(1)),
        }
        raw = json.dumps(document).encode("utf-8")
        cursor = base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")

        # Act & Assert
        with pytest.raises(MalformedCursorError):
            await post_orchestrator.list_subjects(
                match_all(), SortMode.NEWEST, cursor=cursor
            )

    @pytest.mark.asyncio
    async def test_filter_restricts_candidates(self, post_orchestrator, post_repo):
        """Only posts matching the filter are listed."""
        # Arrange
        community_id = uuid4()
        inside = await post_repo.save(make_post(community_id=community_id))
        await post_repo.save(make_post())

        # Act
        page = await post_orchestrator.list_subjects(
            Eq(field="community_id", value=community_id), SortMode.NEWEST
        )

        # Assert
        assert [r.subject.id for r in page.items] == [inside.id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, -1, 101])
    async def test_limit_out_of_range_is_rejected(self, post_orchestrator, limit):
        """Page sizes must be between 1 and the maximum."""
        with pytest.raises(ValidationError):
            await post_orchestrator.list_subjects(
                match_all(), SortMode.NEWEST, limit=limit
            )


class TestOffsetPagination:
    """Tests for page-number listing."""

    @pytest.mark.asyncio
    async def test_offset_metadata(self, post_orchestrator, post_repo):
        """Page metadata counts all matching records."""
        # Arrange
        posts = [
            make_post(post_id=numbered_id(i), created_at=BASE_TIME + timedelta(minutes=i))
            for i in range(7)
        ]
        for post in posts:
            await post_repo.save(post)

        # Act
        page = await post_orchestrator.list_page(
            match_all(), SortMode.NEWEST, page=2, limit=3
        )

        # Assert
        assert [r.subject.id for r in page.items] == [
            posts[3].id,
            posts[2].id,
            posts[1].id,
        ]
        assert page.pagination.current == 2
        assert page.pagination.limit == 3
        assert page.pagination.records == 7
        assert page.pagination.pages == 3
        assert page.stable is False

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, post_orchestrator, post_repo):
        """Requesting a page beyond the last one returns no items."""
        # Arrange
        await post_repo.save(make_post())

        # Act
        page = await post_orchestrator.list_page(
            match_all(), SortMode.TOP, page=5, limit=10
        )

        # Assert
        assert page.items == []
        assert page.pagination.records == 1
        assert page.pagination.pages == 1

    @pytest.mark.asyncio
    async def test_empty_listing_has_zero_pages(self, post_orchestrator):
        """No records means no pages."""
        # Act
        page = await post_orchestrator.list_page(match_all(), SortMode.NEWEST)

        # Assert
        assert page.pagination.records == 0
        assert page.pagination.pages == 0
        assert page.pagination.limit == 20

    @pytest.mark.asyncio
    async def test_page_below_one_is_rejected(self, post_orchestrator):
        """Pages are 1-based."""
        with pytest.raises(ValidationError):
            await post_orchestrator.list_page(match_all(), SortMode.NEWEST, page=0)


class UnavailableVoteRepository:
    """Vote storage whose reads always fail."""

    async def find_active_by_votables(self, votable_type, votable_ids):
        raise ConnectionError("vote storage unavailable")


class UnavailableCandidateRepository:
    """Candidate storage whose reads always fail."""

    async def find_matching(self, criteria):
        raise ConnectionError("candidate storage unavailable")


class TestStorageFailures:
    """Tests for storage errors reaching the caller."""

    @pytest.mark.asyncio
    async def test_candidate_lookup_error_propagates(self, vote_repo):
        """A failed candidate fetch is raised, not listed as an empty page."""
        # Arrange
        orchestrator = PaginationOrchestrator(
            repository=UnavailableCandidateRepository(),
            vote_aggregator=VoteAggregator(vote_repository=vote_repo),
            votable_type=VotableType.POST,
        )

        # Act & Assert
        with pytest.raises(ConnectionError):
            await orchestrator.list_subjects(match_all(), SortMode.TOP)

    @pytest.mark.asyncio
    async def test_score_lookup_error_propagates(self, post_repo):
        """A failed score lookup fails the page instead of scoring items 0."""
        # Arrange
        await post_repo.save(make_post())
        orchestrator = PaginationOrchestrator(
            repository=post_repo,
            vote_aggregator=VoteAggregator(
                vote_repository=UnavailableVoteRepository()
            ),
            votable_type=VotableType.POST,
        )

        # Act & Assert
        with pytest.raises(ConnectionError):
            await orchestrator.list_subjects(match_all(), SortMode.NEWEST)
