"""Sample response payloads keyed by the name a handler returns.

When a handler returns ``NextResponse.json({ workspaces })`` the scanner
looks ``workspaces`` up here to show a representative example. Entries
match exact names only; extend the table rather than the matching.
"""

from pydantic import JsonValue

TIMESTAMP = "2024-01-01T00:00:00.000Z"

WORKSPACE = {"id": "ws_123", "name": "My Workspace", "slug": "my-workspace", "createdAt": TIMESTAMP}
TASK = {"id": "task_123", "title": "Example task", "status": "todo", "priority": "medium", "createdAt": TIMESTAMP}
ISSUE = {"id": "issue_123", "title": "Example issue", "status": "open", "createdAt": TIMESTAMP}
PROJECT = {"id": "proj_123", "name": "Example project", "description": "Example description", "createdAt": TIMESTAMP}
USER = {"id": "user_123", "name": "Example Name", "email": "user@example.com", "createdAt": TIMESTAMP}

RESOURCES: dict[str, dict[str, JsonValue]] = {
    "workspace": WORKSPACE,
    "task": TASK,
    "issue": ISSUE,
    "project": PROJECT,
    "user": USER,
}

COLLECTIONS = {
    "workspaces": "workspace",
    "tasks": "task",
    "issues": "issue",
    "projects": "project",
    "users": "user",
}

SUCCESS_NAMES = ("success", "message", "ok")
PAGINATION_NAMES = ("pagination", "page", "meta")


def lookup_payload(names: list[str]) -> JsonValue:
    """Return an example payload for the names a response returns, if known."""
    if any(name in PAGINATION_NAMES for name in names):
        return {
            "data": [dict(PROJECT)],
            "pagination": {"page": 1, "limit": 10, "total": 1, "pages": 1},
        }

    for name in names:
        if name in COLLECTIONS:
            return {name: [dict(RESOURCES[COLLECTIONS[name]])]}
        if name in RESOURCES:
            return {name: dict(RESOURCES[name])}
        if name == "items":
            return {"items": [{"id": "item_123", "name": "Example item"}], "total": 1}

    if any(name in SUCCESS_NAMES for name in names):
        return {"success": True, "message": "Operation completed successfully"}
    return None
