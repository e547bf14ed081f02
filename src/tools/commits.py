"""Commit listing, diffs, comments and refs."""

from typing import Any, Optional

from ..tencent_git.client import TencentGitClient, encode_path_segment, encode_project_id
from ..utils.errors import UnknownActionError, require_fields


async def manage_commits(
    client: TencentGitClient,
    action: str,
    project_id: str,
    sha: Optional[str] = None,
    ref_name: Optional[str] = None,
    path: Optional[str] = None,
    since: Optional[str] = None,
    until: Optional[str] = None,
    note: Optional[str] = None,
    line: Optional[int] = None,
    line_type: Optional[str] = None,
    type: Optional[str] = None,
    ignore_white_space: Optional[bool] = None,
    page: Optional[float] = None,
    per_page: Optional[float] = None
) -> Any:
    """Dispatch a manage_commits action."""
    fields = {"project_id": project_id, "sha": sha, "note": note}

    def commits() -> str:
        return f"/projects/{encode_project_id(project_id)}/repository/commits"

    def commit() -> str:
        return f"{commits()}/{encode_path_segment(sha)}"

    if action == "list":
        require_fields(action, fields, ["project_id"])
        return await client.get(
            commits(),
            params=client.paginate(
                {"ref_name": ref_name, "path": path, "since": since, "until": until},
                page,
                per_page
            )
        )

    if action == "get":
        require_fields(action, fields, ["project_id", "sha"])
        return await client.get(commit())

    if action == "diff":
        require_fields(action, fields, ["project_id", "sha"])
        return await client.get(
            f"{commit()}/diff",
            params={"path": path, "ignore_white_space": ignore_white_space}
        )

    if action == "list_comments":
        require_fields(action, fields, ["project_id", "sha"])
        return await client.get(f"{commit()}/comments", params=client.paginate({}, page, per_page))

    if action == "create_comment":
        require_fields(action, fields, ["project_id", "sha", "note"])
        return await client.post(
            f"{commit()}/comments",
            body={"note": note, "path": path, "line": line, "line_type": line_type}
        )

    if action == "refs":
        require_fields(action, fields, ["project_id", "sha"])
        return await client.get(f"{commit()}/refs", params=client.paginate({"type": type}, page, per_page))

    raise UnknownActionError("manage_commits", action)
