"""Data models for Tencent Git API responses and derived summaries."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence


MERGE_REQUEST_SUMMARY_FIELDS = (
    "id",
    "iid",
    "project_id",
    "title",
    "description",
    "state",
    "author",
    "source_branch",
    "target_branch",
    "created_at",
    "updated_at",
    "web_url",
)

MR_REVIEW_SUMMARY_FIELDS = (
    "id",
    "iid",
    "project_id",
    "state",
    "title",
    "description",
    "author",
    "source_branch",
    "target_branch",
    "created_at",
    "updated_at",
    "web_url",
)

MERGE_REQUEST_SUMMARY_NOTE = (
    "This is a summary view. For a single file diff use action=file_diff with file_path."
)
MR_REVIEW_SUMMARY_NOTE = (
    "This is a summary view by default. For the full review detail use action=get_detail."
)
CHANGED_FILES_UNAVAILABLE_NOTE = " Changed files could not be loaded, so the list below is empty."


def select_fields(data: Any, keys: Sequence[str]) -> Dict[str, Any]:
    """Copy the allowlisted keys that are present in data."""
    if not isinstance(data, dict):
        return {}
    return {key: data[key] for key in keys if key in data}


class ProjectSummary:
    """Represents a project entry from a project search."""

    def __init__(self, data: Dict[str, Any]):
        self.id = data.get("id")
        self.name = data.get("name")
        self.path_with_namespace = data.get("path_with_namespace")
        self.description = data.get("description")
        self.default_branch = data.get("default_branch")
        self.web_url = data.get("web_url")
        self.http_url_to_repo = data.get("http_url_to_repo")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "path_with_namespace": self.path_with_namespace,
            "description": self.description,
            "default_branch": self.default_branch,
            "web_url": self.web_url,
            "http_url_to_repo": self.http_url_to_repo
        }


class ChangedFile:
    """Represents one entry of a merge request's changed files."""

    def __init__(self, data: Dict[str, Any]):
        self.old_path = data.get("old_path")
        self.new_path = data.get("new_path")
        self.new_file = data.get("new_file")
        self.deleted_file = data.get("deleted_file")
        self.renamed_file = data.get("renamed_file")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "old_path": self.old_path,
            "new_path": self.new_path,
            "new_file": self.new_file,
            "deleted_file": self.deleted_file,
            "renamed_file": self.renamed_file
        }


def changed_files_from(response: Any) -> List[ChangedFile]:
    """Reduce a changed-files response to ChangedFile entries, skipping non-objects."""
    if not isinstance(response, list):
        return []
    return [ChangedFile(item) for item in response if isinstance(item, dict)]


@dataclass
class PartialResult:
    """
    A primary result plus a best-effort secondary collection.

    When the secondary call fails, ``secondary`` stays empty and
    ``secondary_error`` records why.
    """

    primary: Any
    secondary: List[Any] = field(default_factory=list)
    secondary_error: Optional[str] = None

    @property
    def is_partial(self) -> bool:
        return self.secondary_error is not None


def build_changes_summary(result: PartialResult, primary_key: str,
                          summary_fields: Sequence[str], note: str) -> Dict[str, Any]:
    """
    Shape a PartialResult of (object, changed files) into a summary view.

    Args:
        result: Primary object and its changed files
        primary_key: Output key for the primary object's summary
        summary_fields: Allowlist of fields kept from the primary object
        note: Caller-facing note describing the view

    Returns:
        Summary dict with the allowlisted fields, changed files and a note
    """
    files = [item.to_dict() for item in changed_files_from(result.secondary)]
    summary = {
        primary_key: select_fields(result.primary, summary_fields),
        "changed_files_count": len(files),
        "changed_files": files,
        "note": note,
    }
    if result.is_partial:
        summary["note"] = note + CHANGED_FILES_UNAVAILABLE_NOTE
        summary["changed_files_error"] = result.secondary_error
    return summary


def find_file_change(changes_response: Any, file_path: str) -> Optional[Dict[str, Any]]:
    """
    Find the change entry touching file_path.

    Accepts either a bare list of changes or an object with a "changes" list.
    """
    if isinstance(changes_response, list):
        changes = changes_response
    elif isinstance(changes_response, dict) and isinstance(changes_response.get("changes"), list):
        changes = changes_response["changes"]
    else:
        changes = []

    for change in changes:
        if not isinstance(change, dict):
            continue
        if change.get("old_path") == file_path or change.get("new_path") == file_path:
            return change
    return None
