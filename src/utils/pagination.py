"""Pagination normalization for list-returning API calls."""

import math
from numbers import Integral, Real
from typing import Any, Dict, Mapping, Optional

from ..config import Settings


def _positive_floor(value: Any) -> Optional[int]:
    """Return floor(value) for finite numbers > 0, otherwise None."""
    # bool is a Real subclass but is never a page number
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    # ints beyond float range would overflow math.isfinite
    if isinstance(value, Integral):
        return int(value) if value > 0 else None
    if not math.isfinite(value) or value <= 0:
        return None
    return max(1, math.floor(value))


def normalize_pagination(page: Any = None, per_page: Any = None,
                         settings: Optional[Settings] = None) -> Dict[str, int]:
    """
    Normalize page and per_page against the configured bounds.

    Invalid values never raise; they degrade to the configured defaults.
    A requested per_page above the maximum is clamped down to it.

    Args:
        page: Requested page number (may be None, fractional or non-finite)
        per_page: Requested page size (same rules as page)
        settings: Bounds and defaults (module defaults when omitted)

    Returns:
        Dict with integer "page" >= 1 and "per_page" in [1, max_per_page]
    """
    settings = settings or Settings()

    normalized_page = _positive_floor(page)
    if normalized_page is None:
        normalized_page = settings.default_page

    normalized_per_page = _positive_floor(per_page)
    if normalized_per_page is None:
        normalized_per_page = settings.default_per_page
    normalized_per_page = min(normalized_per_page, settings.max_per_page)

    return {"page": normalized_page, "per_page": normalized_per_page}


def with_pagination(params: Mapping[str, Any], page: Any = None, per_page: Any = None,
                    settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Return a copy of params with normalized page/per_page merged in."""
    merged = dict(params)
    merged.update(normalize_pagination(page, per_page, settings))
    return merged
