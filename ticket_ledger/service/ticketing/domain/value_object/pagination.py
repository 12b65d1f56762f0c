from math import ceil
from typing import Any

import attrs

from ticket_ledger.platform.config.core_setting import settings


# Drivers bind OFFSET as a signed 64-bit integer
MAX_OFFSET = 2**63 - 1


def _positive_int_or(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number > 0 else default


@attrs.define(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return min((self.page - 1) * self.limit, MAX_OFFSET)

    @classmethod
    def from_raw(cls, page: Any = None, limit: Any = None) -> 'PageRequest':
        """
        Sanitize caller-supplied paging input.

        Missing, non-numeric or non-positive values fall back to the
        defaults; the limit is capped at MAX_PAGE_LIMIT.
        """
        return cls(
            page=_positive_int_or(page, settings.DEFAULT_PAGE),
            limit=min(
                _positive_int_or(limit, settings.DEFAULT_PAGE_LIMIT), settings.MAX_PAGE_LIMIT
            ),
        )


@attrs.define(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool

    @classmethod
    def build(cls, *, request: PageRequest, total: int) -> 'Pagination':
        total_pages = ceil(total / request.limit)
        return cls(
            page=request.page,
            limit=request.limit,
            total=total,
            total_pages=total_pages,
            has_more=request.page < total_pages,
        )
