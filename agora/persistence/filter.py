"""Interpretation of filter expressions at the storage boundary.

``matches`` evaluates an expression against a domain model in memory;
``compile_filter`` turns it into a SQLAlchemy boolean clause over an
allow-listed set of columns. Both reject unknown fields.
"""

from typing import Any, Collection

from pydantic import BaseModel
from sqlalchemy import ColumnElement, Table, and_, false, or_, true

from agora.domain.error import ValidationError
from agora.domain.value import And, Contains, Eq, FilterExpr, IsNull, Or, Range


def _field_value(record: BaseModel, field: str) -> Any:
    if field not in type(record).model_fields:
        raise ValidationError(f"Unknown filter field: {field}")
    return getattr(record, field)


def matches(expr: FilterExpr, record: BaseModel) -> bool:
    """Evaluate a filter expression against a domain model.

    Args:
        expr: Filter expression
        record: Post or comment

    Returns:
        Whether the record satisfies the expression

    Raises:
        ValidationError: Expression names a field the record lacks
    """
    if isinstance(expr, And):
        return all(matches(p, record) for p in expr.predicates)
    if isinstance(expr, Or):
        return any(matches(p, record) for p in expr.predicates)

    value = _field_value(record, expr.field)

    if isinstance(expr, Eq):
        return value == expr.value
    if isinstance(expr, IsNull):
        return value is None
    if isinstance(expr, Contains):
        return isinstance(value, str) and expr.text.casefold() in value.casefold()
    if isinstance(expr, Range):
        if value is None:
            return False
        if expr.lower is not None and value < expr.lower:
            return False
        if expr.upper is not None and value > expr.upper:
            return False
        return True

    raise ValidationError(f"Unsupported filter expression: {type(expr).__name__}")


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def compile_filter(
    expr: FilterExpr, table: Table, allowed_fields: Collection[str]
) -> ColumnElement[bool]:
    """Compile a filter expression to a SQLAlchemy clause.

    Args:
        expr: Filter expression
        table: Table the fields refer to
        allowed_fields: Columns that may be filtered on

    Returns:
        Boolean clause for a WHERE

    Raises:
        ValidationError: Expression names a field outside ``allowed_fields``
    """
    if isinstance(expr, And):
        return and_(
            true(), *(compile_filter(p, table, allowed_fields) for p in expr.predicates)
        )
    if isinstance(expr, Or):
        return or_(
            false(),
            *(compile_filter(p, table, allowed_fields) for p in expr.predicates),
        )

    if expr.field not in allowed_fields:
        raise ValidationError(f"Unknown filter field: {expr.field}")
    column = table.c[expr.field]

    if isinstance(expr, Eq):
        if expr.value is None:
            return column.is_(None)
        return column == expr.value
    if isinstance(expr, IsNull):
        return column.is_(None)
    if isinstance(expr, Contains):
        return column.ilike(f"%{_escape_like(expr.text)}%", escape="\\")
    if isinstance(expr, Range):
        clauses = []
        if expr.lower is not None:
            clauses.append(column >= expr.lower)
        if expr.upper is not None:
            clauses.append(column <= expr.upper)
        return and_(true(), *clauses)

    raise ValidationError(f"Unsupported filter expression: {type(expr).__name__}")
