"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class CursorError(ValidationError):
    """Base for pagination cursor errors."""

    pass


class MalformedCursorError(CursorError):
    """Raised when a cursor cannot be parsed or carries the wrong shape."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed cursor: {reason}")


class MismatchedSortModeError(CursorError):
    """Raised when a cursor built for one sort mode is used with another."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Cursor was issued for sort mode {actual!r}, "
            f"but the request uses {expected!r}"
        )


class ParentNotFoundError(NotFoundError):
    """Raised when a reply targets a missing or deleted parent comment."""

    def __init__(self, parent_id: str):
        super().__init__("Parent comment", parent_id)


class ThreadIntegrityError(BusinessRuleViolationError):
    """Base for comment thread rule violations."""

    pass


class InvalidParentChainError(ThreadIntegrityError):
    """Raised when a parent chain leaves the post or is broken."""

    def __init__(self, comment_id: str, reason: str):
        self.comment_id = comment_id
        super().__init__(f"Invalid parent chain at comment {comment_id}: {reason}")


class DepthExceededError(ThreadIntegrityError):
    """Raised when a reply would nest deeper than the allowed maximum."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Maximum nesting depth ({max_depth}) exceeded")


class SelfVoteError(BusinessRuleViolationError):
    """Raised when a user votes on their own post or comment."""

    def __init__(self) -> None:
        super().__init__("You can't vote on your own posts or comments")
