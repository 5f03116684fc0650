from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50
MAX_LIMIT = 100


# PUBLIC_INTERFACE
def clamp_pagination(page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> Tuple[int, int]:
    """
    Constrain client-supplied paging values.

    Returns:
        (page, limit) with page >= 1 and 1 <= limit <= MAX_LIMIT.
    """
    return max(1, page), min(MAX_LIMIT, max(1, limit))


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


# PUBLIC_INTERFACE
def pagination_envelope(items: Union[Sequence[Any], Iterable[Any]], total: int) -> Dict[str, Any]:
    """
    Build the list response body.

    Args:
        items: The list/iterable of items for the current page.
        total: Total number of stored items (ignoring pagination).

    Returns:
        Dict with keys: data, total.
    """
    materialized: List[Any] = list(items) if not isinstance(items, list) else items
    return {"data": materialized, "total": int(total)}
