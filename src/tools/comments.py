"""Notes on merge requests, code reviews and issues."""

from typing import Any, Dict, Optional

from ..tencent_git.client import TencentGitClient, encode_project_id
from ..utils.errors import UnknownActionError, require_fields


# target_type -> collection segment in the notes URL
TARGET_COLLECTIONS = {
    "merge_request": "merge_requests",
    "review": "reviews",
    "issue": "issues",
}

# Fields each action needs beyond project_id and target_id
ACTION_FIELDS = {
    "list": [],
    "get": ["note_id"],
    "create": ["body"],
    "update": ["note_id", "body"],
}


async def manage_comments(
    client: TencentGitClient,
    target_type: str,
    action: str,
    project_id: str,
    target_id: Optional[int] = None,
    note_id: Optional[int] = None,
    body: Optional[str] = None,
    path: Optional[str] = None,
    line: Optional[str] = None,
    line_type: Optional[str] = None,
    reviewer_state: Optional[str] = None,
    page: Optional[float] = None,
    per_page: Optional[float] = None
) -> Any:
    """Dispatch a manage_comments action.

    Line-level fields and ``reviewer_state`` only apply to merge request
    and review notes; they are not sent for issue notes.
    """
    fields = {
        "project_id": project_id,
        "target_id": target_id,
        "note_id": note_id,
        "body": body,
    }
    if action in ACTION_FIELDS:
        require_fields(action, fields, ["project_id", "target_id"] + ACTION_FIELDS[action])

    collection = TARGET_COLLECTIONS.get(target_type)
    if collection is None:
        raise UnknownActionError("manage_comments", f"{target_type}/{action}")

    notes = f"/projects/{encode_project_id(project_id)}/{collection}/{target_id}/notes"
    line_level = target_type != "issue"

    if action == "list":
        return await client.get(notes, params=client.paginate({}, page, per_page))

    if action == "get":
        return await client.get(f"{notes}/{note_id}")

    if action == "create":
        payload: Dict[str, Any] = {"body": body}
        if line_level:
            payload.update({
                "path": path,
                "line": line,
                "line_type": line_type,
                "reviewer_state": reviewer_state,
            })
        return await client.post(notes, body=payload)

    if action == "update":
        payload = {"body": body}
        if line_level:
            payload["reviewer_state"] = reviewer_state
        return await client.put(f"{notes}/{note_id}", body=payload)

    raise UnknownActionError("manage_comments", action)
