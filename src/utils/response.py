"""Response shaping: serialize tool results and keep them within a size budget."""

import json
from typing import Any, List, Optional

from mcp.types import TextContent

from ..config import Settings


TRUNCATION_NOTICE = (
    "\n\n...[Truncated by server to avoid context overflow. "
    "Please narrow scope or use more specific actions/filters.]"
)


def serialize(value: Any) -> str:
    """Serialize a value as indented JSON; strings pass through unchanged."""
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def truncate_text(text: str, max_chars: int, enabled: bool = True) -> str:
    """
    Cut text down to max_chars and append the truncation notice.

    Args:
        text: Serialized payload
        max_chars: Character budget for the payload (notice excluded)
        enabled: When False the text is always returned unchanged

    Returns:
        The original text, or its first max_chars characters plus the notice
    """
    if not enabled or len(text) <= max_chars:
        return text
    return f"{text[:max_chars]}{TRUNCATION_NOTICE}"


def as_text(value: Any, settings: Optional[Settings] = None,
            max_chars: Optional[int] = None) -> List[TextContent]:
    """
    Format a result value as a single MCP text content item.

    Args:
        value: Parsed API response or derived summary
        settings: Truncation flag and default budget (module defaults when omitted)
        max_chars: Override for the character budget

    Returns:
        One-element list holding the (possibly truncated) text
    """
    settings = settings or Settings()
    budget = settings.max_response_chars if max_chars is None else max_chars
    text = truncate_text(serialize(value), budget, settings.enable_truncation)
    return [TextContent(type="text", text=text)]
