from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One slice of a paginated collection, as echoed by the backend.

    Only the fields the dashboard needs are kept; the rest of the Spring
    ``Page`` payload (``size``, ``sort``, ``pageable``...) is ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    content: List[T] = Field(default_factory=list)
    number: int = 0  # Zero-based page index
    total_pages: int = Field(0, alias="totalPages")
