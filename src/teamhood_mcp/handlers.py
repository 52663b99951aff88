"""Tool handlers translating MCP tool calls into Teamhood API requests.

All handlers follow a consistent pattern:
- Accept: arguments dict and a ``TeamhoodClient``
- Return: the decoded JSON returned by the API, unchanged
- Only send the fields the caller supplied (an absent argument is an absent key)

Several tool arguments are renamed on the way out because the public tool
names differ from the API's field names (e.g. ``assigneeId`` becomes
``assignedUserId`` on create but ``userId`` on update).
"""
from typing import Any, Awaitable, Callable
from urllib.parse import quote
import logging

import httpx

from . import tools
from .client import TeamhoodClient
from .errors import MissingArgumentError, NotFoundError, TeamhoodError, UnknownToolError

logger = logging.getLogger("teamhood-mcp.handlers")

Handler = Callable[[dict, TeamhoodClient], Awaitable[Any]]


def _pick(arguments: dict, *keys: str) -> dict:
    """Copy the given keys from arguments, skipping those the caller did not supply."""
    return {key: arguments[key] for key in keys if key in arguments}


def _rename(arguments: dict, mapping: dict) -> dict:
    """Copy supplied arguments under their upstream field names."""
    return {target: arguments[source] for source, target in mapping.items() if source in arguments}


def _segment(value: Any) -> str:
    """Encode an identifier as a single URL path segment."""
    return quote(str(value), safe="")


def _with_query(path: str, params: list[tuple[str, Any]]) -> str:
    query = str(httpx.QueryParams(params))
    return f"{path}?{query}" if query else path


# ============================================================================
# Workspace Handlers
# ============================================================================

async def handle_list_workspaces(arguments: dict, client: TeamhoodClient) -> Any:
    """List all workspaces visible to the API key."""
    result = await client.request("/workspaces")
    if isinstance(result, list):
        logger.info(f"Successfully listed {len(result)} workspaces")
    return result


async def handle_get_workspace(arguments: dict, client: TeamhoodClient) -> Any:
    workspace_id = arguments["workspaceId"]
    return await client.request(f"/workspaces/{_segment(workspace_id)}")


async def handle_create_workspace(arguments: dict, client: TeamhoodClient) -> Any:
    """Create a workspace from a template.

    templateId comes from list_workspace_templates, ownerId from list_users.
    """
    body = _pick(arguments, "title", "displayId", "icon", "color", "templateId", "ownerId")
    result = await client.request("/workspaces", "POST", body)
    logger.info(f"Successfully created workspace: {arguments['title']}")
    return result


async def handle_add_workspace_member(arguments: dict, client: TeamhoodClient) -> Any:
    """Add a user to a workspace.

    The API always grants the Collaborator role and only accepts an optional
    requestId, so the body is empty.
    """
    workspace_id = _segment(arguments["workspaceId"])
    user_id = _segment(arguments["userId"])
    return await client.request(f"/workspaces/{workspace_id}/users/{user_id}", "PUT", {})


async def handle_list_boards(arguments: dict, client: TeamhoodClient) -> Any:
    workspace_id = arguments["workspaceId"]
    return await client.request(f"/workspaces/{_segment(workspace_id)}/boards")


# ============================================================================
# Board Handlers
# ============================================================================

async def handle_get_board(arguments: dict, client: TeamhoodClient) -> Any:
    """Get one board.

    There is no single-board endpoint upstream, so the workspace's boards are
    listed and searched locally by id.
    """
    workspace_id = arguments["workspaceId"]
    board_id = arguments["boardId"]
    boards = await client.request(f"/workspaces/{_segment(workspace_id)}/boards")
    if not isinstance(boards, list):
        raise TeamhoodError(f"Unexpected boards response for workspace {workspace_id}")

    for board in boards:
        if isinstance(board, dict) and board.get("id") == board_id:
            return board
    raise NotFoundError(f"Board {board_id} not found in workspace")


async def handle_create_board(arguments: dict, client: TeamhoodClient) -> Any:
    body = _pick(arguments, "workspaceId", "title", "displayId", "templateId", "viewType")
    result = await client.request("/boards", "POST", body)
    logger.info(f"Successfully created board: {arguments['title']}")
    return result


async def handle_list_rows(arguments: dict, client: TeamhoodClient) -> Any:
    return await client.request(f"/boards/{_segment(arguments['boardId'])}/rows")


async def handle_list_statuses(arguments: dict, client: TeamhoodClient) -> Any:
    return await client.request(f"/boards/{_segment(arguments['boardId'])}/statuses")


async def handle_create_row(arguments: dict, client: TeamhoodClient) -> Any:
    body = _pick(arguments, "boardId", "title", "startDate", "endDate")
    return await client.request("/rows", "POST", body)


# ============================================================================
# Item Handlers
# ============================================================================

# list_items filters appended when truthy: argument -> query key
ITEM_ID_FILTERS = {
    "workspaceId": "WorkspaceId",
    "boardId": "BoardId",
    "statusId": "StatusId",
    "rowId": "RowId",
    "assignedUserId": "AssignedUserId",
    "ownerId": "OwnerId",
    "parentId": "ParentId",
}
ITEM_DATE_FILTERS = {
    "createdSince": "CreatedSince",
    "modifiedSince": "ModifiedSince",
    "completedSince": "CompletedSince",
}

# update_item argument -> field inside the {"data": ...} patch
ITEM_UPDATE_FIELDS = {
    "title": "title",
    "description": "description",
    "statusId": "statusId",
    "rowId": "rowId",
    "boardId": "boardId",
    "assigneeId": "userId",
    "startDate": "startDate",
    "dueDate": "dueDate",
    "color": "color",
    "tags": "tags",
    "customFields": "customFields",
    "blocking": "blocking",
    "waiting": "waiting",
    "archived": "archived",
    "milestone": "milestone",
    "progress": "progress",
    "parentId": "parentId",
}


async def handle_list_items(arguments: dict, client: TeamhoodClient) -> Any:
    """Search items.

    Every filter maps to a capitalized query parameter. Tags and CustomFields
    are repeated once per value, not comma-joined. Pagination is left to the
    caller (Skip/Take).
    """
    params: list[tuple[str, Any]] = []
    for argument, key in ITEM_ID_FILTERS.items():
        if arguments.get(argument):
            params.append((key, arguments[argument]))
    if arguments.get("completed") is not None:
        params.append(("Completed", arguments["completed"]))
    for tag in arguments.get("tags") or []:
        params.append(("Tags", tag))
    for custom_field in arguments.get("customFields") or []:
        params.append(("CustomFields", custom_field))
    for argument, key in ITEM_DATE_FILTERS.items():
        if arguments.get(argument):
            params.append((key, arguments[argument]))
    if arguments.get("includeChildItems") is not None:
        params.append(("IncludeChildItems", arguments["includeChildItems"]))
    if arguments.get("skip") is not None:
        params.append(("Skip", arguments["skip"]))
    if arguments.get("take") is not None:
        params.append(("Take", arguments["take"]))

    return await client.request(_with_query("/items", params))


async def handle_get_item(arguments: dict, client: TeamhoodClient) -> Any:
    return await client.request(f"/items/{_segment(arguments['itemId'])}")


async def handle_create_item(arguments: dict, client: TeamhoodClient) -> Any:
    """Create an item on a board.

    The API takes a single ``assignedUserId``. List fields are always sent
    (empty when absent) and the milestone/suspension flags are fixed since the
    tool does not expose them.
    """
    body = _pick(arguments, "workspaceId", "boardId", "statusId", "title", "description", "rowId")
    if "assigneeId" in arguments:
        body["assignedUserId"] = arguments["assigneeId"]
    body.update(_pick(arguments, "startDate", "dueDate", "color"))
    body.update({
        "tags": arguments.get("tags") or [],
        "customFields": arguments.get("customFields") or [],
        "blocking": arguments.get("blocking") or [],
        "waiting": arguments.get("waiting") or [],
        "milestone": False,
        "isSuspended": False,
        "suspendReason": "",
    })

    result = await client.request("/items", "POST", body)
    logger.info(f"Successfully created item: {arguments['title']}")
    return result


async def handle_update_item(arguments: dict, client: TeamhoodClient) -> Any:
    """Patch an item.

    Only supplied fields are sent, wrapped in ``{"data": {...}}``. The
    assignee goes out as ``userId`` here, unlike create.
    """
    item_id = arguments["itemId"]
    data = _rename(arguments, ITEM_UPDATE_FIELDS)
    result = await client.request(f"/items/{_segment(item_id)}", "PUT", {"data": data})
    logger.info(f"Successfully updated item {item_id}: {', '.join(data) or 'no fields'}")
    return result


async def handle_delete_item(arguments: dict, client: TeamhoodClient) -> Any:
    return await client.request(f"/items/{_segment(arguments['itemId'])}", "DELETE")


async def handle_move_item(arguments: dict, client: TeamhoodClient) -> Any:
    """Move an item between boards, status columns or rows.

    Targets are passed through as given; an omitted target is left out of
    the patch.
    """
    data = _rename(arguments, {
        "targetBoardId": "boardId",
        "targetStatusId": "statusId",
        "targetRowId": "rowId",
    })
    return await client.request(f"/items/{_segment(arguments['itemId'])}", "PUT", {"data": data})


async def handle_archive_item(arguments: dict, client: TeamhoodClient) -> Any:
    archived = arguments.get("archived")
    if archived is None:
        archived = True
    return await client.request(
        f"/items/{_segment(arguments['itemId'])}", "PUT", {"data": {"archived": archived}}
    )


# ============================================================================
# Attachment Handlers
# ============================================================================

async def handle_list_attachments(arguments: dict, client: TeamhoodClient) -> Any:
    return await client.request(f"/items/{_segment(arguments['itemId'])}/attachments")


async def handle_get_attachment(arguments: dict, client: TeamhoodClient) -> Any:
    return await client.request(f"/attachments/{_segment(arguments['attachmentId'])}")


async def handle_download_attachment(arguments: dict, client: TeamhoodClient) -> Any:
    """Return the attachment content exactly as the API sends it."""
    return await client.request_content(f"/attachments/{_segment(arguments['attachmentId'])}/content")


async def handle_update_attachment(arguments: dict, client: TeamhoodClient) -> Any:
    body = _rename(arguments, {"name": "Name"})
    return await client.request(f"/attachments/{_segment(arguments['attachmentId'])}", "PUT", body)


async def handle_delete_attachment(arguments: dict, client: TeamhoodClient) -> Any:
    return await client.request(f"/attachments/{_segment(arguments['attachmentId'])}", "DELETE")


async def handle_upload_attachment(arguments: dict, client: TeamhoodClient) -> Any:
    """Upload base64 content as a new attachment on an item (multipart)."""
    result = await client.upload(arguments["itemId"], arguments["name"], arguments["content"])
    logger.info(f"Successfully uploaded {arguments['name']} to item {arguments['itemId']}")
    return result


# ============================================================================
# User, Time Tracking and Template Handlers
# ============================================================================

async def handle_list_users(arguments: dict, client: TeamhoodClient) -> Any:
    return await client.request("/users")


async def handle_get_time_logs(arguments: dict, client: TeamhoodClient) -> Any:
    """Query time logs. The API takes the filter as a POST body."""
    body = _pick(arguments, "workspaceId", "startDate", "endDate", "boardIds", "rowIds", "userIds", "tags")
    return await client.request("/timelogs", "POST", body)


async def handle_list_workspace_templates(arguments: dict, client: TeamhoodClient) -> Any:
    return await client.request("/templates/workspace")


async def handle_list_board_templates(arguments: dict, client: TeamhoodClient) -> Any:
    return await client.request("/templates/board")


# ============================================================================
# Activity and Log Handlers
# ============================================================================

async def handle_list_activities(arguments: dict, client: TeamhoodClient) -> Any:
    """Query item activity on a board. Sent as POST like time logs."""
    body = _pick(arguments, "startDate", "endDate")
    offset = arguments.get("offset")
    limit = arguments.get("limit")
    body["offset"] = 0 if offset is None else offset
    body["limit"] = 100 if limit is None else limit
    return await client.request(f"/boards/{_segment(arguments['boardId'])}/item-activities", "POST", body)


async def handle_list_system_logs(arguments: dict, client: TeamhoodClient) -> Any:
    params: list[tuple[str, Any]] = [
        ("fromDate", arguments["fromDate"]),
        ("toDate", arguments["toDate"]),
    ]
    if arguments.get("skip") is not None:
        params.append(("skip", arguments["skip"]))
    if arguments.get("take") is not None:
        params.append(("take", arguments["take"]))
    return await client.request(_with_query("/logs", params))


# ============================================================================
# Dispatch
# ============================================================================

HANDLERS: dict[str, Handler] = {
    # Workspaces
    "list_workspaces": handle_list_workspaces,
    "get_workspace": handle_get_workspace,
    "create_workspace": handle_create_workspace,
    "add_workspace_member": handle_add_workspace_member,
    "list_boards": handle_list_boards,
    # Boards
    "get_board": handle_get_board,
    "create_board": handle_create_board,
    "list_rows": handle_list_rows,
    "list_statuses": handle_list_statuses,
    "create_row": handle_create_row,
    # Items
    "list_items": handle_list_items,
    "get_item": handle_get_item,
    "create_item": handle_create_item,
    "update_item": handle_update_item,
    "delete_item": handle_delete_item,
    "move_item": handle_move_item,
    "archive_item": handle_archive_item,
    # Attachments
    "list_attachments": handle_list_attachments,
    "get_attachment": handle_get_attachment,
    "download_attachment": handle_download_attachment,
    "update_attachment": handle_update_attachment,
    "delete_attachment": handle_delete_attachment,
    "upload_attachment": handle_upload_attachment,
    # Users
    "list_users": handle_list_users,
    # Time tracking (read-only)
    "get_time_logs": handle_get_time_logs,
    # Templates
    "list_workspace_templates": handle_list_workspace_templates,
    "list_board_templates": handle_list_board_templates,
    # Activity / logs
    "list_activities": handle_list_activities,
    "list_system_logs": handle_list_system_logs,
}


def check_required_arguments(name: str, arguments: dict) -> None:
    """Raise MissingArgumentError if a schema-required argument is absent or null."""
    tool = tools.get_tool(name)
    if tool is None:
        raise UnknownToolError(name)
    required = tool.inputSchema.get("required", [])
    missing = [key for key in required if arguments.get(key) is None]
    if missing:
        raise MissingArgumentError(name, missing)


async def dispatch(name: str, arguments: dict, client: TeamhoodClient) -> Any:
    """Run the handler for ``name`` and return the API's JSON response."""
    handler = HANDLERS.get(name)
    if handler is None:
        logger.warning(f"Unknown tool requested: {name}")
        raise UnknownToolError(name)

    arguments = dict(arguments or {})
    check_required_arguments(name, arguments)
    return await handler(arguments, client)
