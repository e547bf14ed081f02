"""Branch management, protection and protected-branch members."""

from typing import Any, Optional

from ..tencent_git.client import TencentGitClient, encode_path_segment, encode_project_id
from ..utils.errors import UnknownActionError, require_fields


async def manage_branches(
    client: TencentGitClient,
    action: str,
    project_id: str,
    branch: Optional[str] = None,
    branch_name: Optional[str] = None,
    ref: Optional[str] = None,
    page: Optional[float] = None,
    per_page: Optional[float] = None,
    developers_can_push: Optional[bool] = None,
    developers_can_merge: Optional[bool] = None,
    push_access_level: Optional[int] = None,
    merge_access_level: Optional[int] = None,
    user_id: Optional[int] = None,
    access_level: Optional[int] = None,
    tag_name: Optional[str] = None
) -> Any:
    """Dispatch a manage_branches action."""
    fields = {
        "project_id": project_id,
        "branch": branch,
        "branch_name": branch_name,
        "ref": ref,
        "user_id": user_id,
        "access_level": access_level,
    }

    def base() -> str:
        return f"/projects/{encode_project_id(project_id)}"

    def branch_path() -> str:
        return f"{base()}/repository/branches/{encode_path_segment(branch)}"

    def members_path() -> str:
        return f"{base()}/branches/protected/{encode_path_segment(branch)}/members"

    if action == "list":
        require_fields(action, fields, ["project_id"])
        return await client.get(
            f"{base()}/repository/branches",
            params=client.paginate({}, page, per_page)
        )

    if action == "get":
        require_fields(action, fields, ["project_id", "branch"])
        return await client.get(branch_path())

    if action == "create":
        require_fields(action, fields, ["project_id", "branch_name", "ref"])
        return await client.post(
            f"{base()}/repository/branches",
            body={"branch_name": branch_name, "ref": ref}
        )

    if action == "delete":
        require_fields(action, fields, ["project_id", "branch"])
        return await client.delete(branch_path())

    if action == "protect":
        require_fields(action, fields, ["project_id", "branch"])
        return await client.put(
            f"{branch_path()}/protect",
            body={
                "developers_can_push": developers_can_push,
                "developers_can_merge": developers_can_merge,
                "push_access_level": push_access_level,
                "merge_access_level": merge_access_level,
            }
        )

    if action == "unprotect":
        require_fields(action, fields, ["project_id", "branch"])
        return await client.put(f"{branch_path()}/unprotect")

    if action == "get_protect":
        require_fields(action, fields, ["project_id", "branch"])
        return await client.get(f"{branch_path()}/protect")

    if action == "lifecycle":
        # branch takes precedence; tag_name applies when branch is empty
        require_fields(action, fields, ["project_id"])
        return await client.get(
            f"{base()}/tloc/branch/lifecycle",
            params={"branch_name": branch, "tag_name": tag_name}
        )

    if action == "list_protected_members":
        require_fields(action, fields, ["project_id", "branch"])
        return await client.get(members_path())

    if action == "add_protected_member":
        require_fields(action, fields, ["project_id", "branch", "user_id", "access_level"])
        return await client.post(
            members_path(),
            body={"user_id": user_id, "access_level": access_level}
        )

    if action == "update_protected_member":
        require_fields(action, fields, ["project_id", "branch", "user_id", "access_level"])
        return await client.put(
            f"{members_path()}/{user_id}",
            body={"access_level": access_level}
        )

    if action == "remove_protected_member":
        require_fields(action, fields, ["project_id", "branch", "user_id"])
        return await client.delete(f"{members_path()}/{user_id}")

    raise UnknownActionError("manage_branches", action)
