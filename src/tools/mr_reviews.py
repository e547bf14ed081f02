"""Merge request reviews."""

from typing import Any, Optional

from ..tencent_git.client import TencentGitClient, encode_project_id
from ..tencent_git.models import MR_REVIEW_SUMMARY_FIELDS, MR_REVIEW_SUMMARY_NOTE, build_changes_summary
from ..utils.errors import UnknownActionError, require_fields
from .common import fetch_partial


async def manage_mr_reviews(
    client: TencentGitClient,
    action: str,
    project_id: str,
    merge_request_id: Optional[int] = None,
    reviewer_id: Optional[int] = None,
    necessary_reviewer_id: Optional[int] = None,
    reviewer_event: Optional[str] = None,
    summary: Optional[str] = None
) -> Any:
    """Dispatch a manage_mr_reviews action.

    ``get`` returns a summary of the review plus the MR's changed files;
    ``get_detail`` returns the raw review.
    """
    fields = {
        "project_id": project_id,
        "merge_request_id": merge_request_id,
        "reviewer_id": reviewer_id,
        "reviewer_event": reviewer_event,
        "summary": summary,
    }

    def base() -> str:
        return f"/projects/{encode_project_id(project_id)}"

    def mr() -> str:
        return f"{base()}/merge_request/{merge_request_id}"

    if action == "get":
        require_fields(action, fields, ["project_id", "merge_request_id"])
        result = await fetch_partial(
            client.get(f"{mr()}/review"),
            client.get(f"{base()}/merge_requests/{merge_request_id}/changed_files"),
            concurrent=False
        )
        return build_changes_summary(result, "review", MR_REVIEW_SUMMARY_FIELDS, MR_REVIEW_SUMMARY_NOTE)

    if action == "get_detail":
        require_fields(action, fields, ["project_id", "merge_request_id"])
        return await client.get(f"{mr()}/review")

    if action == "invite_reviewer":
        require_fields(action, fields, ["project_id", "merge_request_id"])
        return await client.post(
            f"{mr()}/review/invite",
            body={"reviewer_id": reviewer_id, "necessary_reviewer_id": necessary_reviewer_id}
        )

    if action == "remove_reviewer":
        require_fields(action, fields, ["project_id", "merge_request_id", "reviewer_id"])
        return await client.delete(f"{mr()}/review/dismissals", params={"reviewer_id": reviewer_id})

    if action == "cancel":
        require_fields(action, fields, ["project_id", "merge_request_id"])
        return await client.delete(f"{mr()}/review/cancel")

    if action == "submit":
        require_fields(action, fields, ["project_id", "merge_request_id", "reviewer_event", "summary"])
        return await client.put(
            f"{mr()}/reviewer/summary",
            body={"reviewer_event": reviewer_event, "summary": summary}
        )

    if action == "reopen":
        require_fields(action, fields, ["project_id", "merge_request_id"])
        return await client.put(f"{mr()}/review/reopen")

    raise UnknownActionError("manage_mr_reviews", action)
