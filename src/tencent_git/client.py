"""Tencent Git API client for making HTTP requests."""

import json
import logging
import re
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote

import httpx

from ..config import Settings, ErrorCode, get_api_headers
from ..utils.errors import MCPError, ConfigurationError, TencentGitApiError
from ..utils.pagination import with_pagination
from ..utils.redact import safe_error_message


logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")
BODY_METHODS = ("POST", "PUT")

_NUMERIC_ID = re.compile(r"[0-9]+")


def encode_project_id(project_id: Union[str, int]) -> str:
    """
    Encode a project reference for use in a URL path.

    Numeric IDs pass through unchanged; namespace/name paths are
    percent-encoded so "group/proj" becomes "group%2Fproj".
    """
    value = str(project_id)
    if isinstance(project_id, int) or _NUMERIC_ID.fullmatch(value):
        return value
    return quote(value, safe="")


def encode_path_segment(value: Union[str, int]) -> str:
    """Percent-encode a branch name, SHA or file path for a single URL path segment."""
    return quote(str(value), safe="")


def build_query_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Drop None/empty values and stringify the rest the way the API expects."""
    query: Dict[str, str] = {}
    if not params:
        return query
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return query


def parse_response_body(text: str) -> Any:
    """Parse a response body: empty -> {}, JSON -> parsed value, anything else -> raw text."""
    if not text:
        return {}
    try:
        return json.loads(text)
    except ValueError:
        return text


class TencentGitClient:
    """Client for interacting with the Tencent Git REST API (v3)."""

    def __init__(self, settings: Settings, timeout: Optional[float] = None):
        """
        Initialize the Tencent Git API client.

        Args:
            settings: Server settings carrying the token, base URL and limits
            timeout: Request timeout in seconds (None leaves requests unbounded)
        """
        self.settings = settings
        self.base_url = settings.api_base
        self.timeout = timeout
        logger.debug(f"TencentGitClient initialized for {self.base_url}")

    def paginate(self, params: Mapping[str, Any], page: Any = None, per_page: Any = None) -> Dict[str, Any]:
        """Merge normalized page/per_page into query params using this client's settings."""
        return with_pagination(params, page, per_page, self.settings)

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """
        Issue one authenticated request against the API.

        Args:
            method: GET, POST, PUT or DELETE
            path: API path relative to /api/v3, e.g. "/projects/1/repository/branches"
            params: Query parameters; None and "" values are omitted
            body: JSON body, only sent for POST/PUT; None values are dropped

        Returns:
            Parsed JSON body, {} for an empty body, or the raw text

        Raises:
            ConfigurationError: If no private token is configured
            TencentGitApiError: If the API responds with a non-success status
            MCPError: If the request could not be sent
        """
        if not self.settings.has_token:
            raise ConfigurationError()

        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = f"{self.base_url}{path}"
        query = build_query_params(params)
        headers = get_api_headers(self.settings.token)

        content = None
        if body is not None and method in BODY_METHODS:
            payload = {key: value for key, value in body.items() if value is not None}
            content = json.dumps(payload, ensure_ascii=False)

        logger.info(f"{method} {path}")
        logger.debug(f"Query params: {query}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method,
                    url,
                    params=query,
                    headers=headers,
                    content=content
                )
        except httpx.RequestError as e:
            message = safe_error_message(e, "Network error while contacting Tencent Git", self.settings.token)
            logger.error(message)
            raise MCPError(ErrorCode.HTTP_ERROR, message, {"method": method, "path": path})

        if not 200 <= response.status_code < 300:
            logger.error(f"{method} {path} failed with status {response.status_code}")
            raise TencentGitApiError(response.status_code, response.reason_phrase, response.text)

        return parse_response_body(response.text)

    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Optional[Mapping[str, Any]] = None,
                   params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("POST", path, params=params, body=body)

    async def put(self, path: str, body: Optional[Mapping[str, Any]] = None,
                  params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("PUT", path, params=params, body=body)

    async def delete(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("DELETE", path, params=params)
