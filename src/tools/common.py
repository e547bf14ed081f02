"""Helpers shared by the aggregated tool handlers."""

import asyncio
import logging
from typing import Any, Awaitable, Optional, Tuple

from ..tencent_git.models import PartialResult
from ..utils.errors import MCPError


logger = logging.getLogger(__name__)


async def best_effort(awaitable: Awaitable[Any]) -> Tuple[Any, Optional[str]]:
    """Await a secondary call, turning an MCPError into ([], reason)."""
    try:
        return await awaitable, None
    except MCPError as e:
        logger.warning(f"Secondary request failed, continuing with empty result: {e.message}")
        return [], e.message


async def fetch_partial(primary: Awaitable[Any], secondary: Awaitable[Any],
                        concurrent: bool = True) -> PartialResult:
    """
    Run a primary call and a best-effort secondary call.

    A primary failure propagates. A secondary failure leaves an empty
    secondary list and is recorded on the result.

    Args:
        primary: Call whose result must succeed
        secondary: Call whose failure is tolerated
        concurrent: Run both at once (True) or primary first (False)

    Returns:
        PartialResult with both results
    """
    if concurrent:
        secondary_task = asyncio.ensure_future(best_effort(secondary))
        try:
            primary_data = await primary
        except BaseException:
            secondary_task.cancel()
            raise
        secondary_data, error = await secondary_task
    else:
        try:
            primary_data = await primary
        except BaseException:
            if asyncio.iscoroutine(secondary):
                secondary.close()
            raise
        secondary_data, error = await best_effort(secondary)
    return PartialResult(primary=primary_data, secondary=secondary_data, secondary_error=error)
