"""Translate the pagination contract into SQLAlchemy select statements."""
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter
from sqlalchemy import Select, column, func, select
from sqlalchemy.sql import ColumnElement

from src.shared.database.pagination import (
    FilterOperator,
    FilterOption,
    FindPaginatedParams,
    SortOptions,
    SortOrder,
)


def resolve_column(entity_class: type, field: str) -> ColumnElement[Any]:
    """
    Resolve a field name against the entity's table.

    Known columns keep their type so values bind correctly. Unknown names are
    emitted as a plain identifier and the database rejects the statement,
    the error reaching the caller untouched.
    """
    table_column = entity_class.__table__.columns.get(field)
    if table_column is not None:
        return table_column
    return column(field)


@lru_cache(maxsize=None)
def _adapter(python_type: type) -> TypeAdapter:
    return TypeAdapter(python_type)


def coerce_value(target: ColumnElement[Any], value: Any) -> Any:
    """
    Parse a string value into the Python type of a known column.

    asyncpg binds by type and does not cast text, so ISO timestamps, UUIDs and
    numeric strings are parsed here. A string that does not parse raises
    ``pydantic.ValidationError``. Other values, text columns and unknown
    columns pass through unchanged.
    """
    if not isinstance(value, str):
        return value
    try:
        python_type = target.type.python_type
    except NotImplementedError:
        return value
    if python_type is str:
        return value
    return _adapter(python_type).validate_python(value)


def build_condition(entity_class: type, option: FilterOption) -> ColumnElement[bool]:
    target = resolve_column(entity_class, option.field)
    if option.operator == FilterOperator.LIKE:
        return target.like(f"%{option.value}%")

    if isinstance(option.value, (list, tuple, set)):
        value = [coerce_value(target, item) for item in option.value]
    else:
        value = coerce_value(target, option.value)

    match option.operator:
        case FilterOperator.IN:
            return target.in_(value)
        case FilterOperator.BETWEEN:
            lower, upper = value
            return target.between(lower, upper)
        case FilterOperator.LT:
            return target < value
        case FilterOperator.LTE:
            return target <= value
        case FilterOperator.GT:
            return target > value
        case FilterOperator.GTE:
            return target >= value
        case _:
            return target == value


def apply_filters(statement: Select, entity_class: type, filters: list[FilterOption]) -> Select:
    for option in filters:
        statement = statement.where(build_condition(entity_class, option))
    return statement


def apply_sort(statement: Select, entity_class: type, sort: SortOptions | None) -> Select:
    if sort is not None:
        target = resolve_column(entity_class, sort.sort_by)
        statement = statement.order_by(target.desc() if sort.sort_order == SortOrder.DESC else target.asc())
    # Primary key last so that offset paging is deterministic
    return statement.order_by(*entity_class.__table__.primary_key.columns)


def build_paginated_queries(entity_class: type, params: FindPaginatedParams) -> tuple[Select, Select]:
    """
    Build the ``(count, page)`` statement pair for a page request.

    Both share the same filtered predicate; the count runs over a copy with
    ordering stripped.
    """
    filtered = apply_filters(select(entity_class), entity_class, params.filters)
    ordered = apply_sort(filtered, entity_class, params.sort)

    count_statement = select(func.count()).select_from(ordered.order_by(None).subquery())
    page_statement = ordered.offset(params.offset).limit(params.limit)
    return count_statement, page_statement
