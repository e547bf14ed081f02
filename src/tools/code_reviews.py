"""Commit code reviews (reviews not attached to a merge request)."""

from typing import Any, Optional

from ..tencent_git.client import TencentGitClient, encode_project_id
from ..utils.errors import UnknownActionError, require_fields


async def manage_code_reviews(
    client: TencentGitClient,
    action: str,
    project_id: str,
    review_id: Optional[int] = None,
    title: Optional[str] = None,
    source_branch: Optional[str] = None,
    target_branch: Optional[str] = None,
    source_commit: Optional[str] = None,
    target_commit: Optional[str] = None,
    description: Optional[str] = None,
    reviewer_ids: Optional[str] = None,
    necessary_reviewer_ids: Optional[str] = None,
    approver_rule: Optional[int] = None,
    necessary_approver_rule: Optional[int] = None,
    state: Optional[str] = None,
    author_id: Optional[int] = None,
    order_by: Optional[str] = None,
    sort: Optional[str] = None,
    page: Optional[float] = None,
    per_page: Optional[float] = None,
    reviewer_id: Optional[str] = None,
    necessary_reviewer_id: Optional[str] = None,
    reviewer_event: Optional[str] = None,
    summary: Optional[str] = None
) -> Any:
    """Dispatch a manage_code_reviews action."""
    fields = {
        "project_id": project_id,
        "review_id": review_id,
        "title": title,
        "reviewer_id": reviewer_id,
        "reviewer_event": reviewer_event,
        "summary": summary,
    }

    def base() -> str:
        return f"/projects/{encode_project_id(project_id)}"

    def review() -> str:
        return f"{base()}/review/{review_id}"

    if action == "create":
        require_fields(action, fields, ["project_id", "title"])
        return await client.post(
            f"{base()}/review",
            body={
                "title": title,
                "source_branch": source_branch,
                "target_branch": target_branch,
                "source_commit": source_commit,
                "target_commit": target_commit,
                "description": description,
                "reviewer_ids": reviewer_ids,
                "necessary_reviewer_ids": necessary_reviewer_ids,
                "approver_rule": approver_rule,
                "necessary_approver_rule": necessary_approver_rule,
            }
        )

    if action == "list":
        require_fields(action, fields, ["project_id"])
        return await client.get(
            f"{base()}/reviews",
            params=client.paginate(
                {"state": state, "author_id": author_id, "order_by": order_by, "sort": sort},
                page,
                per_page
            )
        )

    if action == "get":
        require_fields(action, fields, ["project_id", "review_id"])
        return await client.get(review())

    if action == "update":
        require_fields(action, fields, ["project_id", "review_id", "title"])
        return await client.put(review(), body={"title": title, "description": description})

    if action == "invite_reviewer":
        require_fields(action, fields, ["project_id", "review_id"])
        return await client.post(
            f"{review()}/invite",
            body={"reviewer_id": reviewer_id, "necessary_reviewer_id": necessary_reviewer_id}
        )

    if action == "remove_reviewer":
        require_fields(action, fields, ["project_id", "review_id", "reviewer_id"])
        return await client.delete(f"{review()}/dismissals", params={"reviewer_id": reviewer_id})

    if action == "submit":
        require_fields(action, fields, ["project_id", "review_id", "reviewer_event", "summary"])
        return await client.put(
            f"{review()}/reviewer/summary",
            body={"reviewer_event": reviewer_event, "summary": summary}
        )

    if action == "reopen":
        require_fields(action, fields, ["project_id", "review_id"])
        return await client.put(f"{review()}/reopen")

    if action == "changed_files":
        require_fields(action, fields, ["project_id", "review_id"])
        return await client.get(f"{review()}/changed_files")

    raise UnknownActionError("manage_code_reviews", action)
