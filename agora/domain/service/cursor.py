"""Opaque pagination cursors."""

import base64
import binascii
from typing import Optional
from uuid import UUID

import pydantic
from pydantic import ConfigDict, NaiveDatetime, StrictInt

from agora.domain.error import MalformedCursorError, MismatchedSortModeError
from agora.domain.model import Subject
from agora.domain.value import SortMode
from agora.domain.value.common import ValueObject

from .ranking import NewestKey, RankingComparator, SortKey, TopKey


class CursorPayload(ValueObject):
    """Decoded cursor body."""

    model_config = ConfigDict(extra="forbid")

    mode: SortMode
    # Stored timestamps are naive, so aware ones cannot be ranked against them
    created_at: NaiveDatetime
    id: UUID
    score: Optional[StrictInt] = None


class CursorCodec:
    """Encodes sort keys into opaque cursor strings and back.

    A cursor is the URL-safe base64 form (padding stripped) of a small JSON
    document carrying the sort mode and the full sort key of the last item
    on a page. Clients must treat it as opaque.
    """

    def encode(
        self, subject: Subject, sort_mode: SortMode, score: Optional[int] = None
    ) -> str:
        """Build the cursor that resumes after ``subject``."""
        return self.encode_key(RankingComparator(sort_mode).sort_key(subject, score))

    def encode_key(self, key: SortKey) -> str:
        """Serialize a sort key."""
        if isinstance(key, TopKey):
            payload = CursorPayload(
                mode=SortMode.TOP,
                created_at=key.created_at,
                id=UUID(key.id),
                score=key.score,
            )
        else:
            payload = CursorPayload(
                mode=SortMode.NEWEST, created_at=key.created_at, id=UUID(key.id)
            )
        raw = payload.model_dump_json(exclude_none=True).encode("utf-8")
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")

    def decode(self, cursor: str, sort_mode: SortMode) -> SortKey:
        """Parse a cursor issued for ``sort_mode``.

        Args:
            cursor: Opaque cursor string
            sort_mode: Sort mode of the request

        Returns:
            The sort key the cursor resumes after

        Raises:
            MalformedCursorError: Unparseable or wrongly shaped cursor
            MismatchedSortModeError: Cursor issued for another sort mode
        """
        if not cursor:
            raise MalformedCursorError("empty cursor")

        try:
            padded = cursor.encode("ascii") + b"=" * (-len(cursor) % 4)
            raw = base64.b64decode(padded, altchars=b"-_", validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedCursorError("not valid base64") from e

        try:
            payload = CursorPayload.model_validate_json(raw)
        except pydantic.ValidationError as e:
            raise MalformedCursorError("unexpected cursor content") from e

        if payload.mode is not sort_mode:
            raise MismatchedSortModeError(sort_mode.value, payload.mode.value)

        if sort_mode is SortMode.TOP:
            if payload.score is None:
                raise MalformedCursorError("Top cursor without score")
            return TopKey(payload.score, payload.created_at, str(payload.id))

        if payload.score is not None:
            raise MalformedCursorError("Newest cursor with score")
        return NewestKey(payload.created_at, str(payload.id))
