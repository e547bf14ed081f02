"""Merge request lifecycle, changes, subscriptions and MR comments."""

import logging
from typing import Any, Optional

from ..tencent_git.client import TencentGitClient, encode_project_id
from ..tencent_git.models import (
    MERGE_REQUEST_SUMMARY_FIELDS,
    MERGE_REQUEST_SUMMARY_NOTE,
    build_changes_summary,
    find_file_change,
)
from ..utils.errors import ChangeNotFoundError, UnknownActionError, require_fields
from .common import fetch_partial


logger = logging.getLogger(__name__)

# Actions that address an existing merge request
MR_ACTIONS = {
    "get",
    "summary",
    "file_diff",
    "update",
    "merge",
    "changes",
    "commits",
    "changed_files",
    "subscribe_status",
    "subscribe",
    "unsubscribe",
    "list_comments",
    "create_comment",
}


async def manage_merge_requests(
    client: TencentGitClient,
    action: str,
    project_id: str,
    merge_request_id: Optional[int] = None,
    state: Optional[str] = None,
    order_by: Optional[str] = None,
    sort: Optional[str] = None,
    page: Optional[float] = None,
    per_page: Optional[float] = None,
    created_after: Optional[str] = None,
    created_before: Optional[str] = None,
    source_branch: Optional[str] = None,
    target_branch: Optional[str] = None,
    title: Optional[str] = None,
    description: Optional[str] = None,
    assignee_id: Optional[int] = None,
    reviewer_ids: Optional[str] = None,
    necessary_reviewer_ids: Optional[str] = None,
    labels: Optional[str] = None,
    target_project_id: Optional[int] = None,
    approver_rule: Optional[int] = None,
    necessary_approver_rule: Optional[int] = None,
    state_event: Optional[str] = None,
    merge_commit_message: Optional[str] = None,
    note: Optional[str] = None,
    file_path: Optional[str] = None
) -> Any:
    """Dispatch a manage_merge_requests action.

    Note the API mixes ``/merge_request/{id}`` and ``/merge_requests/{id}``
    paths depending on the endpoint.
    """
    fields = {
        "project_id": project_id,
        "merge_request_id": merge_request_id,
        "source_branch": source_branch,
        "target_branch": target_branch,
        "title": title,
        "note": note,
        "file_path": file_path,
    }

    if action in MR_ACTIONS:
        extra = {
            "file_diff": ["file_path"],
            "create_comment": ["note"],
        }.get(action, [])
        require_fields(action, fields, ["project_id", "merge_request_id"] + extra)

    def base() -> str:
        return f"/projects/{encode_project_id(project_id)}"

    def mr() -> str:
        return f"{base()}/merge_request/{merge_request_id}"

    def mrs() -> str:
        return f"{base()}/merge_requests/{merge_request_id}"

    if action == "list":
        require_fields(action, fields, ["project_id"])
        return await client.get(
            f"{base()}/merge_requests",
            params=client.paginate({"state": state, "order_by": order_by, "sort": sort}, page, per_page)
        )

    if action == "create":
        require_fields(action, fields, ["project_id", "source_branch", "target_branch", "title"])
        return await client.post(
            f"{base()}/merge_requests",
            body={
                "source_branch": source_branch,
                "target_branch": target_branch,
                "title": title,
                "description": description,
                "assignee_id": assignee_id,
                "reviewers": reviewer_ids,
                "necessary_reviewers": necessary_reviewer_ids,
                "labels": labels,
                "target_project_id": target_project_id,
                "approver_rule": approver_rule,
                "necessary_approver_rule": necessary_approver_rule,
            }
        )

    if action == "get":
        return await client.get(mr())

    if action == "summary":
        result = await fetch_partial(
            client.get(mr()),
            client.get(f"{mrs()}/changed_files"),
            concurrent=True
        )
        if result.is_partial:
            logger.info(f"Merge request {merge_request_id} summary returned without changed files")
        return build_changes_summary(
            result,
            "merge_request",
            MERGE_REQUEST_SUMMARY_FIELDS,
            MERGE_REQUEST_SUMMARY_NOTE
        )

    if action == "file_diff":
        changes = await client.get(f"{mr()}/changes")
        change = find_file_change(changes, file_path)
        if change is None:
            raise ChangeNotFoundError(action, file_path)
        return change

    if action == "update":
        return await client.put(
            mr(),
            body={
                "title": title,
                "description": description,
                "target_branch": target_branch,
                "assignee_id": assignee_id,
                "state_event": state_event,
                "labels": labels,
            }
        )

    if action == "merge":
        return await client.put(f"{mr()}/merge", body={"merge_commit_message": merge_commit_message})

    if action == "changes":
        return await client.get(f"{mr()}/changes")

    if action == "commits":
        return await client.get(f"{mrs()}/commits")

    if action == "changed_files":
        return await client.get(f"{mrs()}/changed_files")

    if action == "subscribe_status":
        return await client.get(f"{mr()}/subscribe")

    if action == "subscribe":
        return await client.put(f"{mr()}/subscribe")

    if action == "unsubscribe":
        return await client.put(f"{mr()}/unsubscribe")

    if action == "list_comments":
        return await client.get(
            f"{mr()}/comments",
            params=client.paginate(
                {"created_after": created_after, "created_before": created_before},
                page,
                per_page
            )
        )

    if action == "create_comment":
        return await client.post(f"{mr()}/comments", body={"note": note})

    raise UnknownActionError("manage_merge_requests", action)
