"""Tests for the Tencent Git HTTP client."""

import json

import httpx
import pytest

from conftest import TEST_TOKEN, json_response, make_response
from src.config import Settings
from src.tencent_git.client import (
    TencentGitClient,
    build_query_params,
    encode_path_segment,
    encode_project_id,
    parse_response_body,
)
from src.utils.errors import ConfigurationError, MCPError, TencentGitApiError


class TestEncoding:
    """Test URL encoding of project references and path segments."""

    def test_numeric_project_id_passes_through(self):
        assert encode_project_id(12345) == "12345"
        assert encode_project_id("12345") == "12345"

    def test_project_path_is_percent_encoded(self):
        assert encode_project_id("group/proj") == "group%2Fproj"
        assert encode_project_id("group/sub group/proj") == "group%2Fsub%20group%2Fproj"

    def test_branch_name_is_one_segment(self):
        assert encode_path_segment("feature/login") == "feature%2Flogin"

    def test_query_params_drop_empty_and_stringify(self):
        params = {
            "search": "demo",
            "ref_name": None,
            "path": "",
            "page": 1,
            "straight": True,
            "ignore_white_space": False,
            "user_id": 0,
        }
        assert build_query_params(params) == {
            "search": "demo",
            "page": "1",
            "straight": "true",
            "ignore_white_space": "false",
            "user_id": "0",
        }

    def test_response_body_parsing(self):
        assert parse_response_body("") == {}
        assert parse_response_body('[{"id": 1}]') == [{"id": 1}]
        assert parse_response_body("diff --git a/x b/x") == "diff --git a/x b/x"


class TestRequest:
    """Test request construction and response handling."""

    @pytest.mark.asyncio
    async def test_get_builds_url_headers_and_params(self, client, mock_http):
        mock_http.request.return_value = json_response([{"name": "master"}])

        result = await client.get(
            "/projects/group%2Fproj/repository/branches",
            params={"page": 1, "per_page": 20, "search": None}
        )

        assert result == [{"name": "master"}]
        mock_http.request.assert_awaited_once()
        args, kwargs = mock_http.request.call_args
        assert args == ("GET", "https://git.code.tencent.com/api/v3/projects/group%2Fproj/repository/branches")
        assert kwargs["params"] == {"page": "1", "per_page": "20"}
        assert kwargs["headers"]["PRIVATE-TOKEN"] == TEST_TOKEN
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["content"] is None

    @pytest.mark.asyncio
    async def test_post_sends_json_body_without_none_values(self, client, mock_http):
        mock_http.request.return_value = json_response({"name": "dev"}, status_code=201)

        await client.post(
            "/projects/1/repository/branches",
            body={"branch_name": "dev", "ref": "master", "description": None}
        )

        args, kwargs = mock_http.request.call_args
        assert args[0] == "POST"
        assert json.loads(kwargs["content"]) == {"branch_name": "dev", "ref": "master"}

    @pytest.mark.asyncio
    async def test_put_keeps_falsy_non_none_values(self, client, mock_http):
        await client.put(
            "/projects/1/repository/branches/master/protect",
            body={"developers_can_push": False, "push_access_level": 0, "merge_access_level": None}
        )

        _, kwargs = mock_http.request.call_args
        assert json.loads(kwargs["content"]) == {"developers_can_push": False, "push_access_level": 0}

    @pytest.mark.asyncio
    async def test_delete_never_sends_a_body(self, client, mock_http):
        await client.request("DELETE", "/projects/1/repository/branches/dev", body={"ignored": "x"})

        args, kwargs = mock_http.request.call_args
        assert args[0] == "DELETE"
        assert kwargs["content"] is None

    @pytest.mark.asyncio
    async def test_empty_body_returns_empty_object(self, client, mock_http):
        mock_http.request.return_value = make_response(status_code=204, text="")
        assert await client.delete("/projects/1/repository/branches/dev") == {}

    @pytest.mark.asyncio
    async def test_non_json_body_returned_as_text(self, client, mock_http):
        mock_http.request.return_value = make_response(text="raw blob content")
        assert await client.get("/projects/1/repository/blobs/abc") == "raw blob content"

    @pytest.mark.asyncio
    async def test_custom_base_url(self, mock_http):
        client = TencentGitClient(Settings(token=TEST_TOKEN, base_url="https://git.example.com/"))
        await client.get("/projects")

        args, _ = mock_http.request.call_args
        assert args[1] == "https://git.example.com/api/v3/projects"

    @pytest.mark.asyncio
    async def test_lowercase_method_is_accepted(self, client, mock_http):
        await client.request("get", "/projects")
        assert mock_http.request.call_args[0][0] == "GET"

    @pytest.mark.asyncio
    async def test_unsupported_method_is_rejected(self, client, mock_http):
        with pytest.raises(ValueError):
            await client.request("PATCH", "/projects/1")
        mock_http.request.assert_not_called()


class TestErrors:
    """Test error propagation from the client."""

    @pytest.mark.asyncio
    async def test_missing_token_raises_before_request(self, mock_http):
        client = TencentGitClient(Settings())

        with pytest.raises(ConfigurationError) as exc_info:
            await client.get("/projects")

        assert exc_info.value.code == "CONFIGURATION_ERROR"
        assert "TENCENT_GIT_TOKEN" in exc_info.value.message
        mock_http.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_404_raises_api_error(self, client, mock_http):
        mock_http.request.return_value = make_response(
            status_code=404,
            text='{"message": "404 Project Not Found"}',
            reason_phrase="Not Found"
        )

        with pytest.raises(TencentGitApiError) as exc_info:
            await client.get("/projects/missing%2Fproj")

        error = exc_info.value
        assert error.code == "TENCENT_GIT_API_ERROR"
        assert error.status == 404
        assert error.message == "Tencent Git API Error: 404 Not Found"
        assert error.details["status_code"] == 404
        assert "Project Not Found" in error.details["response_body"]

    @pytest.mark.asyncio
    async def test_3xx_is_not_success(self, client, mock_http):
        mock_http.request.return_value = make_response(status_code=302, text="", reason_phrase="Found")

        with pytest.raises(TencentGitApiError):
            await client.get("/projects/1")

    @pytest.mark.asyncio
    async def test_network_error_raises_http_error(self, client, mock_http):
        mock_http.request.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(MCPError) as exc_info:
            await client.get("/projects/1")

        error = exc_info.value
        assert error.code == "HTTP_ERROR"
        assert "connection refused" in error.message
        assert error.details == {"method": "GET", "path": "/projects/1"}

    @pytest.mark.asyncio
    async def test_network_error_message_is_redacted(self, client, mock_http):
        mock_http.request.side_effect = httpx.ConnectError(f"failed sending PRIVATE-TOKEN: {TEST_TOKEN}")

        with pytest.raises(MCPError) as exc_info:
            await client.get("/projects/1")

        assert TEST_TOKEN not in exc_info.value.message
        assert "***REDACTED***" in exc_info.value.message


class TestPaginate:
    """Test the client's pagination helper."""

    def test_uses_client_settings(self):
        client = TencentGitClient(Settings(token=TEST_TOKEN, default_per_page=30, max_per_page=50))

        assert client.paginate({"state": "opened"}) == {"state": "opened", "page": 1, "per_page": 30}
        assert client.paginate({}, 3, 500) == {"page": 3, "per_page": 50}
