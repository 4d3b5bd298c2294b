"""Filter, sort and pagination contract shared by every paginated repository."""
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

T = TypeVar("T")


class FilterOperator(StrEnum):
    EQ = "="
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    IN = "in"
    LIKE = "like"
    BETWEEN = "between"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class FilterOption(BaseModel):
    """A single ``field operator value`` predicate. Filters combine with AND."""
    field: str = Field(..., min_length=1, description="Storage column name")
    operator: FilterOperator = FilterOperator.EQ
    value: Any

    @model_validator(mode="after")
    def normalize_value(self) -> "FilterOption":
        if self.operator == FilterOperator.IN and not isinstance(self.value, (list, tuple, set)):
            self.value = [self.value]
        elif self.operator == FilterOperator.BETWEEN:
            if not isinstance(self.value, (list, tuple)) or len(self.value) != 2:
                raise ValueError("between filter requires exactly two bounds")
            self.value = list(self.value)
        return self


class SortOptions(BaseModel):
    sort_by: str = Field(..., min_length=1, description="Storage column name")
    sort_order: SortOrder = SortOrder.ASC


class FindPaginatedParams(BaseModel):
    """
    Page request.

    ``page`` values below 1 are treated as the first page. ``limit`` values
    outside ``1..MAX_LIMIT`` fall back to ``DEFAULT_LIMIT`` rather than being
    clamped.
    """
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort: SortOptions | None = None
    filters: list[FilterOption] = Field(default_factory=list)

    @field_validator("page", "limit", mode="before")
    @classmethod
    def default_when_missing(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return DEFAULT_PAGE if info.field_name == "page" else DEFAULT_LIMIT
        return v

    @field_validator("page", mode="after")
    @classmethod
    def normalize_page(cls, v: int) -> int:
        return v if v > 0 else DEFAULT_PAGE

    @field_validator("limit", mode="after")
    @classmethod
    def fallback_limit(cls, v: int) -> int:
        if v <= 0 or v > MAX_LIMIT:
            return DEFAULT_LIMIT
        return v

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginatedResult(BaseModel, Generic[T]):
    """A page of items plus the total number of rows matching the filters."""
    page: int
    limit: int
    total: int
    data: list[T]

    model_config = {"arbitrary_types_allowed": True}
