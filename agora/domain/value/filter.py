"""Filter expressions for candidate queries.

Listing requests describe which records they want as a small tree of
tagged variants. The ranking engine never looks inside the tree; each
storage backend interprets it (see ``agora.persistence.filter``).

Example:
    all_of(
        Eq(field="post_id", value=post_id),
        IsNull(field="parent_id"),
        Contains(field="text", text="crispr"),
    )
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field

from agora.domain.value.common import ValueObject


class Eq(ValueObject):
    """``field == value``."""

    kind: Literal["eq"] = "eq"
    field: str
    value: Any


class Range(ValueObject):
    """Inclusive range ``lower <= field <= upper``; either bound may be open."""

    kind: Literal["range"] = "range"
    field: str
    lower: Any = None
    upper: Any = None


class Contains(ValueObject):
    """Case-insensitive substring match on a text field."""

    kind: Literal["contains"] = "contains"
    field: str
    text: str = Field(min_length=1)


class IsNull(ValueObject):
    """``field IS NULL``."""

    kind: Literal["is_null"] = "is_null"
    field: str


class And(ValueObject):
    """All predicates hold. An empty conjunction matches everything."""

    kind: Literal["and"] = "and"
    predicates: tuple["FilterExpr", ...] = ()


class Or(ValueObject):
    """At least one predicate holds. An empty disjunction matches nothing."""

    kind: Literal["or"] = "or"
    predicates: tuple["FilterExpr", ...] = ()


FilterExpr = Annotated[
    Union[Eq, Range, Contains, IsNull, And, Or],
    Field(discriminator="kind"),
]

And.model_rebuild()
Or.model_rebuild()


def all_of(*predicates: Optional[FilterExpr]) -> And:
    """Build a conjunction, skipping ``None`` entries.

    Lets callers pass optional criteria inline instead of branching on
    every request field.
    """
    return And(predicates=tuple(p for p in predicates if p is not None))


def match_all() -> And:
    """Filter that matches every record."""
    return And()
