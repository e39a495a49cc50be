"""Pydantic schemas for per-call options."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Upstream API default: the largest 32-bit signed integer.
DEFAULT_LIMIT = 2147483647
DEFAULT_OFFSET = 0


class ListOptions(BaseModel):
    """Pagination and sorting for list endpoints.

    A fresh instance is built for every call; unset values fall back to the
    API's own defaults.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    limit: int = Field(default=DEFAULT_LIMIT, ge=0, le=DEFAULT_LIMIT)
    offset: int = Field(default=DEFAULT_OFFSET, ge=0)
    sort_by: Optional[str] = Field(default=None, alias="sortBy")

    @classmethod
    def build(
        cls,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort_by: Optional[str] = None,
    ) -> "ListOptions":
        values: Dict[str, Any] = {}
        if limit is not None:
            values["limit"] = limit
        if offset is not None:
            values["offset"] = offset
        if sort_by is not None:
            values["sort_by"] = sort_by
        return cls(**values)

    def to_query(self) -> Dict[str, Any]:
        """Query parameters in wire form; ``sortBy`` is omitted when unset."""
        return self.model_dump(by_alias=True, exclude_none=True)
