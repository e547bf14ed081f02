"""Repository tree, file CRUD, comparisons and archives."""

from typing import Any, Optional

from ..tencent_git.client import TencentGitClient, encode_path_segment, encode_project_id
from ..utils.errors import UnknownActionError, require_fields


FILE_WRITE_FIELDS = ["project_id", "file_path", "branch_name", "content", "commit_message"]


async def manage_repository(
    client: TencentGitClient,
    action: str,
    project_id: str,
    ref_name: Optional[str] = None,
    path: Optional[str] = None,
    file_path: Optional[str] = None,
    ref: Optional[str] = None,
    sha: Optional[str] = None,
    filepath: Optional[str] = None,
    branch_name: Optional[str] = None,
    content: Optional[str] = None,
    commit_message: Optional[str] = None,
    encoding: Optional[str] = None,
    from_ref: Optional[str] = None,
    to_ref: Optional[str] = None,
    straight: Optional[bool] = None
) -> Any:
    """Dispatch a manage_repository action.

    ``from_ref``/``to_ref`` are sent to the API as ``from``/``to``.
    """
    fields = {
        "project_id": project_id,
        "file_path": file_path,
        "ref": ref,
        "sha": sha,
        "branch_name": branch_name,
        "content": content,
        "commit_message": commit_message,
        "from_ref": from_ref,
        "to_ref": to_ref,
    }

    def repo() -> str:
        return f"/projects/{encode_project_id(project_id)}/repository"

    if action == "list_tree":
        require_fields(action, fields, ["project_id"])
        return await client.get(f"{repo()}/tree", params={"ref_name": ref_name, "path": path})

    if action == "get_file":
        require_fields(action, fields, ["project_id", "file_path", "ref"])
        return await client.get(f"{repo()}/files", params={"file_path": file_path, "ref": ref})

    if action in ("create_file", "update_file"):
        require_fields(action, fields, FILE_WRITE_FIELDS)
        body = {
            "file_path": file_path,
            "branch_name": branch_name,
            "content": content,
            "commit_message": commit_message,
            "encoding": encoding,
        }
        if action == "create_file":
            return await client.post(f"{repo()}/files", body=body)
        return await client.put(f"{repo()}/files", body=body)

    if action == "delete_file":
        require_fields(action, fields, ["project_id", "file_path", "branch_name", "commit_message"])
        return await client.delete(
            f"{repo()}/files",
            params={
                "file_path": file_path,
                "branch_name": branch_name,
                "commit_message": commit_message,
            }
        )

    if action == "compare":
        require_fields(action, fields, ["project_id", "from_ref", "to_ref"])
        return await client.get(f"{repo()}/compare", params={"from": from_ref, "to": to_ref})

    if action == "archive":
        require_fields(action, fields, ["project_id"])
        return await client.get(f"{repo()}/archive", params={"sha": sha})

    if action == "get_blob_raw":
        require_fields(action, fields, ["project_id", "sha"])
        return await client.get(
            f"{repo()}/blobs/{encode_path_segment(sha)}",
            params={"filepath": filepath}
        )

    if action == "compare_changed_files":
        require_fields(action, fields, ["project_id", "from_ref", "to_ref"])
        return await client.get(
            f"{repo()}/compare/changed_files",
            params={"from": from_ref, "to": to_ref, "straight": straight}
        )

    raise UnknownActionError("manage_repository", action)
