"""Page/page-size normalization shared by every list use case"""

import math
from dataclasses import dataclass
from typing import Optional, TypeVar

from loan_intake.domain.models import Page, Paginated

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# keeps the row offset inside a 32-bit integer
MAX_PAGE = 2**31 // MAX_PAGE_SIZE

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page: int
    page_size: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def take(self) -> int:
        return self.page_size


def normalize_pagination(page: Optional[int] = None, page_size: Optional[int] = None) -> PageRequest:
    """Fall back to defaults for missing or non-positive values"""
    return PageRequest(
        page=page if page and page > 0 else DEFAULT_PAGE,
        page_size=page_size if page_size and page_size > 0 else DEFAULT_PAGE_SIZE,
    )


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size)


def paginate(result: Page[T], request: PageRequest) -> Paginated[T]:
    """Wrap a repository page with the pagination envelope"""
    return Paginated(
        items=list(result.items),
        total=result.total,
        page=request.page,
        page_size=request.page_size,
        total_pages=total_pages(result.total, request.page_size),
    )
