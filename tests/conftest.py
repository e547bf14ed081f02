"""Shared fixtures: a patched httpx.AsyncClient and test settings."""

import json
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.config import Settings
from src.tencent_git.client import TencentGitClient


TEST_TOKEN = "tgit-test-token-1234567890"


def make_response(status_code: int = 200, text: str = "", reason_phrase: str = "OK") -> MagicMock:
    """Build a stand-in for httpx.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.reason_phrase = reason_phrase
    return response


def json_response(data: Any, status_code: int = 200) -> MagicMock:
    return make_response(status_code=status_code, text=json.dumps(data))


def route_by_path(routes: Dict[str, Any]):
    """
    Build a request side effect that answers by URL suffix.

    Values are responses or exceptions; the longest matching suffix wins.
    """
    def _route(method, url, **kwargs):
        matches = [suffix for suffix in routes if url.endswith(suffix)]
        if not matches:
            raise AssertionError(f"Unexpected request: {method} {url}")
        result = routes[max(matches, key=len)]
        if isinstance(result, BaseException):
            raise result
        return result
    return _route


@pytest.fixture()
def settings() -> Settings:
    return Settings(token=TEST_TOKEN)


@pytest.fixture()
def client(settings: Settings) -> TencentGitClient:
    return TencentGitClient(settings)


@pytest.fixture()
def mock_http():
    """Patch httpx.AsyncClient; yields the client instance whose .request is an AsyncMock."""
    with patch("httpx.AsyncClient") as mock_async_client:
        mock_client_instance = MagicMock()
        mock_client_instance.__aenter__.return_value = mock_client_instance
        mock_client_instance.__aexit__.return_value = None
        mock_client_instance.request = AsyncMock(return_value=make_response(text="{}"))
        mock_async_client.return_value = mock_client_instance
        yield mock_client_instance
