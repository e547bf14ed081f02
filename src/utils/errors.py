"""Structured error handling utilities."""

import json
import logging
from typing import Any, Dict, Iterable, Optional

from ..config import ErrorCode, ENV_TOKEN, TOKEN_HELP_URL
from .redact import redact_dict, redact_token


# Configure module logger
logger = logging.getLogger(__name__)

# Response bodies echoed back inside error details are capped at this size
MAX_ERROR_BODY_CHARS = 2000


class MCPError(Exception):
    """Base exception for MCP server errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)
        logger.error(f"MCPError ({code}): {message}", extra={"details": self.details})

    def to_dict(self) -> dict:
        """Convert error to standardized dictionary format."""
        return {
            "ok": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "details": redact_dict(self.details)
            }
        }

    def to_json(self) -> str:
        """Convert error to JSON string."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


class ConfigurationError(MCPError):
    """Exception raised when the private token is not configured."""
    def __init__(self, message: Optional[str] = None):
        super().__init__(
            ErrorCode.CONFIGURATION_ERROR,
            message or (
                f"{ENV_TOKEN} environment variable is not set. "
                "Please set it to your Tencent Git private token."
            ),
            {"hint": f"You can find your private token at: {TOKEN_HELP_URL}"}
        )


class MissingParameterError(MCPError):
    """Exception for required fields that are absent, None or empty."""
    def __init__(self, action: str, missing: Iterable[str], code: str = ErrorCode.MISSING_PARAMETER,
                 message: Optional[str] = None):
        self.action = action
        self.missing = list(missing)
        super().__init__(
            code,
            message or f"action={action} is missing required parameters: {', '.join(self.missing)}",
            {"action": action, "missing": self.missing}
        )


class UnknownActionError(MissingParameterError):
    """Exception for an action value that no tool branch handles."""
    def __init__(self, tool: str, action: str):
        super().__init__(
            action,
            [],
            code=ErrorCode.UNKNOWN_ACTION,
            message=f"{tool} does not support action={action}"
        )
        self.details["tool"] = tool


class TencentGitApiError(MCPError):
    """Exception for non-success responses from the Tencent Git API."""
    def __init__(self, status: int, status_text: str, response_body: str):
        self.status = status
        self.status_text = status_text
        self.response_body = response_body
        body = redact_token(response_body or "")
        if len(body) > MAX_ERROR_BODY_CHARS:
            body = body[:MAX_ERROR_BODY_CHARS] + "...(truncated)"
        super().__init__(
            ErrorCode.TENCENT_GIT_API_ERROR,
            f"Tencent Git API Error: {status} {status_text}",
            {
                "status_code": status,
                "status_text": status_text,
                "response_body": body
            }
        )


class ChangeNotFoundError(MCPError):
    """Exception raised when a merge request has no change for the requested file."""
    def __init__(self, action: str, file_path: str):
        super().__init__(
            ErrorCode.CHANGE_NOT_FOUND,
            f"action={action} found no change for file: {file_path}",
            {"action": action, "file_path": file_path}
        )


def require_fields(action: str, payload: Dict[str, Any], fields: Iterable[str]) -> None:
    """
    Check that every required field is present and non-empty.

    None and "" count as missing; 0 and False are valid values.

    Args:
        action: Action name used in the error message
        payload: Mapping of field name to supplied value
        fields: Names of the required fields

    Raises:
        MissingParameterError: Listing every missing field
    """
    missing = [
        field for field in fields
        if payload.get(field) is None or payload.get(field) == ""
    ]
    if missing:
        raise MissingParameterError(action, missing)


def error_response(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> dict:
    """Create a standardized error response."""
    return {
        "ok": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {}
        }
    }


def format_error_json(code: str, message: str, hint: Optional[str] = None, context: Optional[Dict[str, Any]] = None) -> str:
    """
    Format an error response as JSON string with optional hint and context.

    Args:
        code: Error code
        message: Human-readable error message
        hint: Optional hint for resolution
        context: Optional context information

    Returns:
        JSON-formatted error string
    """
    error_dict = error_response(code, message, context)
    if hint:
        error_dict["error"]["hint"] = hint
    return json.dumps(error_dict, indent=2, ensure_ascii=False)
