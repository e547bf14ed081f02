"""Tencent Git MCP Server.

A local MCP server that exposes the Tencent Git REST API (v3) as a small
set of aggregated, action-based tools:

- manage_projects: search/get projects
- manage_branches: branches, protection, protected-branch members
- manage_repository: tree, files, compare, archive, blobs
- manage_merge_requests: MR lifecycle, summary, per-file diff, MR comments
- manage_commits: commits, diffs, commit comments, refs
- manage_code_reviews: commit code reviews
- manage_mr_reviews: merge request reviews
- manage_comments: notes on merge requests, reviews and issues

Environment variables:
- TENCENT_GIT_TOKEN: Private token for authentication (required)
- TENCENT_GIT_BASE_URL: Base URL (default: https://git.code.tencent.com)
"""

import sys
from pathlib import Path
from typing import Annotated, Any, Awaitable, Callable, List, Literal, Optional

# Add parent directory to Python path to support running directly
# This allows: python src/server.py from the project root
if __name__ == "__main__":
    parent_dir = str(Path(__file__).parent.parent)
    if parent_dir not in sys.path:
        sys.path.insert(0, parent_dir)

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent
from pydantic import Field

from src.config import Settings, ErrorCode
from src.utils.logging_config import setup_logging, get_logger
from src.utils.errors import MCPError, ConfigurationError, format_error_json
from src.utils.redact import safe_error_message
from src.utils.response import as_text
from src.tencent_git.client import TencentGitClient
from src.tools.projects import manage_projects as projects_handler
from src.tools.branches import manage_branches as branches_handler
from src.tools.repository import manage_repository as repository_handler
from src.tools.merge_requests import manage_merge_requests as merge_requests_handler
from src.tools.commits import manage_commits as commits_handler
from src.tools.code_reviews import manage_code_reviews as code_reviews_handler
from src.tools.mr_reviews import manage_mr_reviews as mr_reviews_handler
from src.tools.comments import manage_comments as comments_handler

# Settings are read once; everything below receives them explicitly
settings = Settings.from_env()

# Setup logging before initializing MCP server
setup_logging(log_level=settings.log_level, log_file=settings.log_file)
logger = get_logger(__name__)

# Initialize MCP server
mcp = FastMCP("tencent_git")

logger.info("Tencent Git MCP Server initialized")
if settings.has_token:
    logger.info("Tencent Git token configured")
else:
    logger.warning("No TENCENT_GIT_TOKEN set - every tool call will fail until it is configured")


ProjectId = Annotated[
    str,
    Field(description=(
        "Project ID (numeric) or full path (namespace/project, e.g. mygroup/myproject). "
        "If unsure, search first with manage_projects(action=search)."
    ))
]
Page = Annotated[Optional[float], Field(description="Page number (default 1)")]
PerPage = Annotated[Optional[float], Field(description="Items per page (default 20, max 100)")]


async def _run_tool(tool_name: str, handler: Callable[..., Awaitable[Any]], **kwargs) -> List[TextContent]:
    """Run one tool handler and shape its result or error into text content."""
    action = kwargs.get("action")
    logger.info(f"{tool_name} called: action={action}")
    try:
        client = TencentGitClient(settings)
        data = await handler(client, **kwargs)
        return as_text(data, settings)
    except MCPError as e:
        logger.error(f"MCP error in {tool_name} (action={action}): {e}")
        return [TextContent(type="text", text=e.to_json())]
    except Exception as e:
        logger.error(f"Unexpected error in {tool_name} (action={action}): {e}", exc_info=True)
        return [TextContent(type="text", text=format_error_json(
            code=ErrorCode.UNEXPECTED_ERROR,
            message=f"Unexpected error in {tool_name}",
            context={"action": action, "error": safe_error_message(e, token=settings.token)}
        ))]


# ============================================================================
# MCP Tools
# ============================================================================

@mcp.tool(
    name="manage_projects",
    annotations={
        "title": "Project Management (aggregated)",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True
    },
    structured_output=False
)
async def manage_projects(
    action: Annotated[Literal["search", "get"], Field(description="Operation to perform")],
    project_id: Annotated[Optional[str], Field(description="Project ID or namespace/project path (get)")] = None,
    search: Annotated[Optional[str], Field(description="Search keyword, usually the project name (search)")] = None,
    page: Page = None,
    per_page: PerPage = None
) -> List[TextContent]:
    """Search for projects or fetch one project's details.

    Use action=search when only the project name is known; the result lists
    each match's ID and full path for use with the other tools.
    """
    return await _run_tool(
        "manage_projects", projects_handler,
        action=action, project_id=project_id, search=search, page=page, per_page=per_page
    )


@mcp.tool(
    name="manage_branches",
    annotations={
        "title": "Branch Management (aggregated)",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": False,
        "openWorldHint": True
    },
    structured_output=False
)
async def manage_branches(
    action: Annotated[
        Literal[
            "list",
            "get",
            "create",
            "delete",
            "protect",
            "unprotect",
            "get_protect",
            "lifecycle",
            "list_protected_members",
            "add_protected_member",
            "update_protected_member",
            "remove_protected_member",
        ],
        Field(description="Operation to perform")
    ],
    project_id: ProjectId,
    branch: Annotated[Optional[str], Field(description="Branch name (get/delete/protect/unprotect/get_protect/lifecycle/*_protected_member)")] = None,
    branch_name: Annotated[Optional[str], Field(description="New branch name (create)")] = None,
    ref: Annotated[Optional[str], Field(description="Source commit SHA or branch (create)")] = None,
    page: Page = None,
    per_page: PerPage = None,
    developers_can_push: Annotated[Optional[bool], Field(description="Whether developers can push (protect)")] = None,
    developers_can_merge: Annotated[Optional[bool], Field(description="Whether developers can merge (protect)")] = None,
    push_access_level: Annotated[Optional[int], Field(description="Push access level 0/30/40 (protect)")] = None,
    merge_access_level: Annotated[Optional[int], Field(description="Merge access level 0/30/40 (protect)")] = None,
    user_id: Annotated[Optional[int], Field(description="User ID (*_protected_member)")] = None,
    access_level: Annotated[Optional[int], Field(description="Member access level (add/update_protected_member)")] = None,
    tag_name: Annotated[Optional[str], Field(description="Tag name (lifecycle, used when branch is empty)")] = None
) -> List[TextContent]:
    """List, inspect, create, delete and protect branches, and manage protected-branch members."""
    return await _run_tool(
        "manage_branches", branches_handler,
        action=action, project_id=project_id, branch=branch, branch_name=branch_name, ref=ref,
        page=page, per_page=per_page, developers_can_push=developers_can_push,
        developers_can_merge=developers_can_merge, push_access_level=push_access_level,
        merge_access_level=merge_access_level, user_id=user_id, access_level=access_level,
        tag_name=tag_name
    )


@mcp.tool(
    name="manage_repository",
    annotations={
        "title": "Repository Management (aggregated)",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": False,
        "openWorldHint": True
    },
    structured_output=False
)
async def manage_repository(
    action: Annotated[
        Literal[
            "list_tree",
            "get_file",
            "create_file",
            "update_file",
            "delete_file",
            "compare",
            "archive",
            "get_blob_raw",
            "compare_changed_files",
        ],
        Field(description="Operation to perform")
    ],
    project_id: ProjectId,
    ref_name: Annotated[Optional[str], Field(description="Commit hash, branch or tag (list_tree)")] = None,
    path: Annotated[Optional[str], Field(description="Directory path (list_tree)")] = None,
    file_path: Annotated[Optional[str], Field(description="File path (get_file/create_file/update_file/delete_file)")] = None,
    ref: Annotated[Optional[str], Field(description="Branch or tag (get_file)")] = None,
    sha: Annotated[Optional[str], Field(description="Commit hash, branch or tag (archive/get_blob_raw)")] = None,
    filepath: Annotated[Optional[str], Field(description="File path (get_blob_raw)")] = None,
    branch_name: Annotated[Optional[str], Field(description="Branch name (create_file/update_file/delete_file)")] = None,
    content: Annotated[Optional[str], Field(description="File content (create_file/update_file)")] = None,
    commit_message: Annotated[Optional[str], Field(description="Commit message (create_file/update_file/delete_file)")] = None,
    encoding: Annotated[Optional[Literal["text", "base64"]], Field(description="Content encoding (create_file/update_file, default text)")] = None,
    from_ref: Annotated[Optional[str], Field(description="Source commit, branch or tag (compare/compare_changed_files)")] = None,
    to_ref: Annotated[Optional[str], Field(description="Target commit, branch or tag (compare/compare_changed_files)")] = None,
    straight: Annotated[Optional[bool], Field(description="Two-dot comparison (compare_changed_files)")] = None
) -> List[TextContent]:
    """Browse the repository tree, read and write files, and compare refs.

    get_file returns the file content Base64-encoded.
    """
    return await _run_tool(
        "manage_repository", repository_handler,
        action=action, project_id=project_id, ref_name=ref_name, path=path, file_path=file_path,
        ref=ref, sha=sha, filepath=filepath, branch_name=branch_name, content=content,
        commit_message=commit_message, encoding=encoding, from_ref=from_ref, to_ref=to_ref,
        straight=straight
    )


@mcp.tool(
    name="manage_merge_requests",
    annotations={
        "title": "Merge Request Management (aggregated)",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True
    },
    structured_output=False
)
async def manage_merge_requests(
    action: Annotated[
        Literal[
            "list",
            "get",
            "summary",
            "file_diff",
            "create",
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
        ],
        Field(description="Operation to perform")
    ],
    project_id: ProjectId,
    merge_request_id: Annotated[Optional[int], Field(description="Merge request ID (required except for list/create)")] = None,
    state: Annotated[Optional[Literal["merged", "opened", "closed", "all"]], Field(description="State filter (list)")] = None,
    order_by: Annotated[Optional[Literal["created_at", "updated_at"]], Field(description="Sort field (list)")] = None,
    sort: Annotated[Optional[Literal["asc", "desc"]], Field(description="Sort order (list)")] = None,
    page: Page = None,
    per_page: PerPage = None,
    created_after: Annotated[Optional[str], Field(description="Created-at lower bound (list_comments)")] = None,
    created_before: Annotated[Optional[str], Field(description="Created-at upper bound (list_comments)")] = None,
    source_branch: Annotated[Optional[str], Field(description="Source branch (create)")] = None,
    target_branch: Annotated[Optional[str], Field(description="Target branch (create/update)")] = None,
    title: Annotated[Optional[str], Field(description="Title (create/update)")] = None,
    description: Annotated[Optional[str], Field(description="Description (create/update)")] = None,
    assignee_id: Annotated[Optional[int], Field(description="Assignee ID (create/update)")] = None,
    reviewer_ids: Annotated[Optional[str], Field(description="Reviewer IDs, comma separated (create)")] = None,
    necessary_reviewer_ids: Annotated[Optional[str], Field(description="Required reviewer IDs, comma separated (create)")] = None,
    labels: Annotated[Optional[str], Field(description="Labels, comma separated (create/update)")] = None,
    target_project_id: Annotated[Optional[int], Field(description="Target project ID (create)")] = None,
    approver_rule: Annotated[Optional[int], Field(description="Approver rule: -1 all, 1 single, 2+ several (create)")] = None,
    necessary_approver_rule: Annotated[Optional[int], Field(description="Required approver rule (create)")] = None,
    state_event: Annotated[Optional[Literal["close", "reopen"]], Field(description="State transition (update)")] = None,
    merge_commit_message: Annotated[Optional[str], Field(description="Merge commit message (merge)")] = None,
    note: Annotated[Optional[str], Field(description="Comment text (create_comment)")] = None,
    file_path: Annotated[Optional[str], Field(description="Target file path (file_diff)")] = None
) -> List[TextContent]:
    """Work with merge requests.

    Prefer action=summary over action=changes for large merge requests: it
    returns the key MR fields plus the changed file list, and file_diff then
    fetches the diff for a single file.
    """
    return await _run_tool(
        "manage_merge_requests", merge_requests_handler,
        action=action, project_id=project_id, merge_request_id=merge_request_id, state=state,
        order_by=order_by, sort=sort, page=page, per_page=per_page, created_after=created_after,
        created_before=created_before, source_branch=source_branch, target_branch=target_branch,
        title=title, description=description, assignee_id=assignee_id, reviewer_ids=reviewer_ids,
        necessary_reviewer_ids=necessary_reviewer_ids, labels=labels,
        target_project_id=target_project_id, approver_rule=approver_rule,
        necessary_approver_rule=necessary_approver_rule, state_event=state_event,
        merge_commit_message=merge_commit_message, note=note, file_path=file_path
    )


@mcp.tool(
    name="manage_commits",
    annotations={
        "title": "Commit Management (aggregated)",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True
    },
    structured_output=False
)
async def manage_commits(
    action: Annotated[
        Literal["list", "get", "diff", "list_comments", "create_comment", "refs"],
        Field(description="Operation to perform")
    ],
    project_id: ProjectId,
    sha: Annotated[Optional[str], Field(description="Commit hash, branch or tag (required except for list)")] = None,
    ref_name: Annotated[Optional[str], Field(description="Branch or tag (list, default: default branch)")] = None,
    path: Annotated[Optional[str], Field(description="File path (list/diff/create_comment)")] = None,
    since: Annotated[Optional[str], Field(description="Commits at or after this time, yyyy-MM-ddTHH:mm:ssZ (list)")] = None,
    until: Annotated[Optional[str], Field(description="Commits at or before this time, yyyy-MM-ddTHH:mm:ssZ (list)")] = None,
    note: Annotated[Optional[str], Field(description="Comment text (create_comment)")] = None,
    line: Annotated[Optional[int], Field(description="Line number (create_comment)")] = None,
    line_type: Annotated[Optional[Literal["old", "new"]], Field(description="Line side (create_comment)")] = None,
    type: Annotated[Optional[Literal["branch", "tag", "all"]], Field(description="Ref type filter (refs, default all)")] = None,
    ignore_white_space: Annotated[Optional[bool], Field(description="Ignore whitespace changes (diff)")] = None,
    page: Page = None,
    per_page: PerPage = None
) -> List[TextContent]:
    """List commits, read a commit or its diff, comment on it and find the refs containing it."""
    return await _run_tool(
        "manage_commits", commits_handler,
        action=action, project_id=project_id, sha=sha, ref_name=ref_name, path=path, since=since,
        until=until, note=note, line=line, line_type=line_type, type=type,
        ignore_white_space=ignore_white_space, page=page, per_page=per_page
    )


@mcp.tool(
    name="manage_code_reviews",
    annotations={
        "title": "Code Review Management (aggregated)",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True
    },
    structured_output=False
)
async def manage_code_reviews(
    action: Annotated[
        Literal[
            "create",
            "list",
            "get",
            "update",
            "invite_reviewer",
            "remove_reviewer",
            "submit",
            "reopen",
            "changed_files",
        ],
        Field(description="Operation to perform")
    ],
    project_id: ProjectId,
    review_id: Annotated[Optional[int], Field(description="Code review ID (required except for create/list)")] = None,
    title: Annotated[Optional[str], Field(description="Review title (create/update)")] = None,
    source_branch: Annotated[Optional[str], Field(description="Source branch (create)")] = None,
    target_branch: Annotated[Optional[str], Field(description="Target branch (create)")] = None,
    source_commit: Annotated[Optional[str], Field(description="Source commit (create)")] = None,
    target_commit: Annotated[Optional[str], Field(description="Target commit (create)")] = None,
    description: Annotated[Optional[str], Field(description="Description (create/update)")] = None,
    reviewer_ids: Annotated[Optional[str], Field(description="Reviewer IDs, comma separated (create)")] = None,
    necessary_reviewer_ids: Annotated[Optional[str], Field(description="Required reviewer IDs, comma separated (create)")] = None,
    approver_rule: Annotated[Optional[int], Field(description="Approver rule: -1 all, 1 single, 2+ several (create)")] = None,
    necessary_approver_rule: Annotated[Optional[int], Field(description="Required approver rule (create)")] = None,
    state: Annotated[Optional[str], Field(description="Review state: approving, change_required, closed (list)")] = None,
    author_id: Annotated[Optional[int], Field(description="Author ID (list)")] = None,
    order_by: Annotated[Optional[Literal["created_at", "updated_at"]], Field(description="Sort field (list)")] = None,
    sort: Annotated[Optional[Literal["asc", "desc"]], Field(description="Sort order (list)")] = None,
    page: Page = None,
    per_page: PerPage = None,
    reviewer_id: Annotated[Optional[str], Field(description="Reviewer ID(s), comma separated (invite_reviewer/remove_reviewer)")] = None,
    necessary_reviewer_id: Annotated[Optional[str], Field(description="Required reviewer ID(s), comma separated (invite_reviewer)")] = None,
    reviewer_event: Annotated[
        Optional[Literal["comment", "approve", "require_change", "deny"]],
        Field(description="Review event (submit)")
    ] = None,
    summary: Annotated[Optional[str], Field(description="Review summary (submit)")] = None
) -> List[TextContent]:
    """Create and run commit code reviews: reviewers, opinions, reopening and changed files."""
    return await _run_tool(
        "manage_code_reviews", code_reviews_handler,
        action=action, project_id=project_id, review_id=review_id, title=title,
        source_branch=source_branch, target_branch=target_branch, source_commit=source_commit,
        target_commit=target_commit, description=description, reviewer_ids=reviewer_ids,
        necessary_reviewer_ids=necessary_reviewer_ids, approver_rule=approver_rule,
        necessary_approver_rule=necessary_approver_rule, state=state, author_id=author_id,
        order_by=order_by, sort=sort, page=page, per_page=per_page, reviewer_id=reviewer_id,
        necessary_reviewer_id=necessary_reviewer_id, reviewer_event=reviewer_event, summary=summary
    )


@mcp.tool(
    name="manage_mr_reviews",
    annotations={
        "title": "MR Review Management (aggregated)",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True
    },
    structured_output=False
)
async def manage_mr_reviews(
    action: Annotated[
        Literal["get", "get_detail", "invite_reviewer", "remove_reviewer", "cancel", "submit", "reopen"],
        Field(description="Operation to perform; get returns a summary, get_detail the full review")
    ],
    project_id: ProjectId,
    merge_request_id: Annotated[Optional[int], Field(description="Merge request ID")] = None,
    reviewer_id: Annotated[Optional[int], Field(description="Reviewer ID (invite_reviewer/remove_reviewer)")] = None,
    necessary_reviewer_id: Annotated[Optional[int], Field(description="Required reviewer ID (invite_reviewer)")] = None,
    reviewer_event: Annotated[
        Optional[Literal["comment", "approve", "require_change", "deny"]],
        Field(description="Review event (submit)")
    ] = None,
    summary: Annotated[Optional[str], Field(description="Review summary (submit)")] = None
) -> List[TextContent]:
    """Inspect and act on a merge request's review.

    reopen only applies when the review is denied or has changes required.
    """
    return await _run_tool(
        "manage_mr_reviews", mr_reviews_handler,
        action=action, project_id=project_id, merge_request_id=merge_request_id,
        reviewer_id=reviewer_id, necessary_reviewer_id=necessary_reviewer_id,
        reviewer_event=reviewer_event, summary=summary
    )


@mcp.tool(
    name="manage_comments",
    annotations={
        "title": "Comment Management (aggregated)",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True
    },
    structured_output=False
)
async def manage_comments(
    target_type: Annotated[
        Literal["merge_request", "review", "issue"],
        Field(description="Kind of object the comments belong to")
    ],
    action: Annotated[Literal["list", "get", "create", "update"], Field(description="Operation to perform")],
    project_id: ProjectId,
    target_id: Annotated[Optional[int], Field(description="Object ID: MR ID, review ID or issue ID")] = None,
    note_id: Annotated[Optional[int], Field(description="Comment ID (get/update)")] = None,
    body: Annotated[Optional[str], Field(description="Comment text (create/update)")] = None,
    path: Annotated[Optional[str], Field(description="File path for a line comment")] = None,
    line: Annotated[Optional[str], Field(description="Line number for a line comment")] = None,
    line_type: Annotated[Optional[Literal["old", "new"]], Field(description="Line side for a line comment")] = None,
    reviewer_state: Annotated[
        Optional[Literal["approved", "change_required", "change_denied"]],
        Field(description="Per-file review state (merge_request/review only)")
    ] = None,
    page: Page = None,
    per_page: PerPage = None
) -> List[TextContent]:
    """List, read, create and edit comments on merge requests, code reviews and issues."""
    return await _run_tool(
        "manage_comments", comments_handler,
        target_type=target_type, action=action, project_id=project_id, target_id=target_id,
        note_id=note_id, body=body, path=path, line=line, line_type=line_type,
        reviewer_state=reviewer_state, page=page, per_page=per_page
    )


# ============================================================================
# Server Entry Point
# ============================================================================

def main() -> None:
    """Validate configuration and serve over stdio."""
    try:
        if not settings.has_token:
            raise ConfigurationError()
        logger.info("Tencent Git MCP Server running on stdio")
        mcp.run()
    except Exception as e:
        print(f"Fatal error in main(): {safe_error_message(e, token=settings.token)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
