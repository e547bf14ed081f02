"""Project search and lookup."""

from typing import Any, Optional

from ..tencent_git.client import TencentGitClient, encode_project_id
from ..tencent_git.models import ProjectSummary
from ..utils.errors import UnknownActionError, require_fields


async def manage_projects(
    client: TencentGitClient,
    action: str,
    project_id: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[float] = None,
    per_page: Optional[float] = None
) -> Any:
    """Dispatch a manage_projects action (search/get)."""
    if action == "search":
        require_fields(action, {"search": search}, ["search"])
        data = await client.get("/projects", params=client.paginate({"search": search}, page, per_page))
        if not isinstance(data, list):
            return data
        return [ProjectSummary(item).to_dict() for item in data if isinstance(item, dict)]

    if action == "get":
        require_fields(action, {"project_id": project_id}, ["project_id"])
        return await client.get(f"/projects/{encode_project_id(project_id)}")

    raise UnknownActionError("manage_projects", action)
