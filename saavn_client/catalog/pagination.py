"""Pagination envelope construction."""

from typing import Any, Iterable, TypeVar

from saavn_client.catalog.models import Paginated
from saavn_client.utils.coerce import to_number

T = TypeVar("T")


def build_paginated(results: Iterable[T], total: Any, page: int, limit: int) -> Paginated[T]:
    """
    Wrap normalized results in a Paginated envelope.

    Args:
        results: Normalized items of the current page.
        total: Upstream-reported total. May be missing, a numeric string,
               or garbage.
        page: Requested page, echoed unchanged. Whether pages start at 0 or
              1 depends on the upstream operation and is not normalized.
        limit: Requested page size.

    Returns:
        Paginated whose total falls back to len(results) when the upstream
        total is absent or not a finite number.

    Example:
        build_paginated(["a", "b", "c"], None, 1, 10)
        # Paginated(total=3, page=1, limit=10, results=("a", "b", "c"))
    """
    items = tuple(results)
    reported = to_number(total)
    resolved_total = len(items) if reported is None else int(reported)

    return Paginated(total=resolved_total, page=page, limit=limit, results=items)
