"""Utilities for redacting sensitive information from logs and errors."""

import re
from typing import Any, Dict, Optional


REDACTED = "***REDACTED***"

# Shorter configured tokens are only caught by the pattern rules
MIN_LITERAL_TOKEN_CHARS = 8


def redact_token(text: str, token: Optional[str] = None) -> str:
    """
    Redact Tencent Git private tokens from text.

    Covers PRIVATE-TOKEN headers, private_token query parameters, generic
    token assignments and, when given, the literal configured token.
    """
    if token and len(token) >= MIN_LITERAL_TOKEN_CHARS:
        text = text.replace(token, REDACTED)

    # Redact PRIVATE-TOKEN headers
    text = re.sub(r'PRIVATE-TOKEN["\']?\s*[:=]\s*["\']?[A-Za-z0-9_\-\.]+', f'PRIVATE-TOKEN: {REDACTED}', text, flags=re.IGNORECASE)

    # Redact private_token query parameters
    text = re.sub(r'private_token=[^&\s"\']+', f'private_token={REDACTED}', text, flags=re.IGNORECASE)

    # Redact generic token patterns
    text = re.sub(r'(?<![\w-])token["\']?\s*[:=]\s*["\']?[A-Za-z0-9_\-\.]+', f'token: {REDACTED}', text, flags=re.IGNORECASE)

    return text


def redact_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively redact sensitive fields from a dictionary.

    Redacts common sensitive field names like 'token', 'private-token', 'password', etc.
    """
    sensitive_keys = {'token', 'private-token', 'private_token', 'password', 'secret', 'authorization'}

    redacted = {}
    for key, value in data.items():
        if key.lower() in sensitive_keys:
            redacted[key] = REDACTED
        elif isinstance(value, dict):
            redacted[key] = redact_dict(value)
        elif isinstance(value, str):
            redacted[key] = redact_token(value)
        else:
            redacted[key] = value

    return redacted


def safe_error_message(error: Exception, context: str = "", token: Optional[str] = None) -> str:
    """
    Create a safe error message with redacted sensitive information.

    Args:
        error: The exception to format
        context: Additional context about where the error occurred
        token: Configured token to scrub verbatim, if known

    Returns:
        A safe error message with redacted tokens
    """
    redacted_msg = redact_token(str(error), token)

    if context:
        return f"{context}: {redacted_msg}"
    return redacted_msg
