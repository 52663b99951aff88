"""MCP tool definitions for the Teamhood API.

This module is the definitive list of tools advertised by the server. It is
pure data: what each tool accepts. What each tool sends upstream lives in
``handlers``.
"""
from typing import Optional

from mcp.types import Tool

# Precedence relations between two items' start/finish events
DEPENDENCY_DIRECTIONS = ["FinishToStart", "StartToStart", "FinishToFinish", "StartToFinish"]

VIEW_TYPES = ["Kanban", "Gantt", "List", "Overview"]


def _dependency_list(description: str) -> dict:
    return {
        "type": "array",
        "items": {
            "type": "object",
            "properties": {
                "itemId": {"type": "string"},
                "direction": {"type": "string", "enum": DEPENDENCY_DIRECTIONS},
            },
            "required": ["itemId", "direction"],
        },
        "description": description,
    }


def _custom_field_list(description: str) -> dict:
    return {
        "type": "array",
        "items": {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "value": {"type": "string"},
            },
            "required": ["name", "value"],
        },
        "description": description,
    }


def _no_arguments() -> dict:
    return {"type": "object", "properties": {}}


def get_tools() -> list[Tool]:
    """Get the list of all MCP tools for the Teamhood API."""
    return [
        # ============================================================================
        # Workspace Tools
        # ============================================================================
        Tool(
            name="list_workspaces",
            description="List all workspaces you have access to",
            inputSchema=_no_arguments(),
        ),
        Tool(
            name="get_workspace",
            description="Get workspace details including settings and metadata",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspaceId": {"type": "string", "description": "Workspace UUID"},
                },
                "required": ["workspaceId"],
            },
        ),
        Tool(
            name="create_workspace",
            description="Create a new workspace. "
                        "Requires templateId from list_workspace_templates and ownerId from list_users.",
            inputSchema={
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "Workspace title"},
                    "displayId": {"type": "string", "description": "Short display ID (e.g., 'PROJ')"},
                    "icon": {"type": "string", "description": "Icon type (e.g., 'briefcase', 'star')"},
                    "color": {"type": "number", "description": "Color code (optional)"},
                    "templateId": {
                        "type": "string",
                        "description": "Workspace template UUID (use list_workspace_templates)",
                    },
                    "ownerId": {"type": "string", "description": "Owner user UUID (use list_users)"},
                },
                "required": ["title", "displayId", "icon", "templateId", "ownerId"],
            },
        ),
        Tool(
            name="add_workspace_member",
            description="Add a user to a workspace with Collaborator role "
                        "(API does not support custom roles)",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspaceId": {"type": "string", "description": "Workspace UUID"},
                    "userId": {"type": "string", "description": "User UUID to add"},
                },
                "required": ["workspaceId", "userId"],
            },
        ),
        Tool(
            name="list_boards",
            description="List all boards in a workspace",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspaceId": {"type": "string", "description": "Workspace UUID"},
                },
                "required": ["workspaceId"],
            },
        ),
        # ============================================================================
        # Board Tools
        # ============================================================================
        Tool(
            name="get_board",
            description="Get a specific board by ID (returns board info from workspace boards list)",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspaceId": {"type": "string", "description": "Workspace UUID containing the board"},
                    "boardId": {"type": "string", "description": "Board UUID to retrieve"},
                },
                "required": ["workspaceId", "boardId"],
            },
        ),
        Tool(
            name="create_board",
            description="Create a new board in a workspace. Requires templateId from list_board_templates.",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspaceId": {
                        "type": "string",
                        "description": "Workspace UUID where board will be created",
                    },
                    "title": {"type": "string", "description": "Board title"},
                    "displayId": {
                        "type": "string",
                        "description": "Short display ID (e.g., 'Q1PRIO') - required",
                    },
                    "templateId": {
                        "type": "string",
                        "description": "Board template UUID "
                                       "(use list_board_templates to get available templates)",
                    },
                    "viewType": {
                        "type": "string",
                        "enum": VIEW_TYPES,
                        "description": "Default view type for the board",
                    },
                },
                "required": ["workspaceId", "title", "displayId", "templateId", "viewType"],
            },
        ),
        Tool(
            name="list_rows",
            description="List rows (swimlanes) on a board for grouping items",
            inputSchema={
                "type": "object",
                "properties": {
                    "boardId": {"type": "string", "description": "Board UUID"},
                },
                "required": ["boardId"],
            },
        ),
        Tool(
            name="list_statuses",
            description="List status columns on a board (workflow stages)",
            inputSchema={
                "type": "object",
                "properties": {
                    "boardId": {"type": "string", "description": "Board UUID"},
                },
                "required": ["boardId"],
            },
        ),
        Tool(
            name="create_row",
            description="Create a new row (swimlane) on a board",
            inputSchema={
                "type": "object",
                "properties": {
                    "boardId": {"type": "string", "description": "Board UUID"},
                    "title": {"type": "string", "description": "Row title"},
                    "startDate": {"type": "string", "description": "Optional start date (ISO 8601)"},
                    "endDate": {"type": "string", "description": "Optional end date (ISO 8601)"},
                },
                "required": ["boardId", "title"],
            },
        ),
        # ============================================================================
        # Item Tools
        # ============================================================================
        Tool(
            name="list_items",
            description="Search and filter items across boards with pagination",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspaceId": {"type": "string", "description": "Filter by workspace UUID"},
                    "boardId": {"type": "string", "description": "Filter by board UUID"},
                    "statusId": {"type": "string", "description": "Filter by status UUID"},
                    "rowId": {"type": "string", "description": "Filter by row UUID"},
                    "assignedUserId": {"type": "string", "description": "Filter by assigned user UUID"},
                    "ownerId": {"type": "string", "description": "Filter by owner user UUID"},
                    "parentId": {"type": "string", "description": "Filter by parent item UUID"},
                    "completed": {"type": "boolean", "description": "Filter by completion status"},
                    "tags": {"type": "array", "items": {"type": "string"}, "description": "Filter by tags"},
                    "customFields": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Filter by custom fields, e.g. ['\"Project\"=\"Cars\"']",
                    },
                    "createdSince": {"type": "string", "description": "Filter items created since (ISO 8601)"},
                    "modifiedSince": {"type": "string", "description": "Filter items modified since (ISO 8601)"},
                    "completedSince": {
                        "type": "string",
                        "description": "Filter items completed since (ISO 8601)",
                    },
                    "includeChildItems": {"type": "boolean", "description": "Include child items in results"},
                    "skip": {"type": "number", "description": "Pagination: records to skip"},
                    "take": {"type": "number", "description": "Pagination: records to return (max 100)"},
                },
            },
        ),
        Tool(
            name="get_item",
            description="Get full item details including custom fields and metadata",
            inputSchema={
                "type": "object",
                "properties": {
                    "itemId": {"type": "string", "description": "Item UUID"},
                },
                "required": ["itemId"],
            },
        ),
        Tool(
            name="create_item",
            description="Create a new item (task/card) on a board",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspaceId": {"type": "string", "description": "Workspace UUID (required)"},
                    "boardId": {"type": "string", "description": "Board UUID where item will be created"},
                    "statusId": {
                        "type": "string",
                        "description": "Status UUID for initial workflow stage (required)",
                    },
                    "title": {"type": "string", "description": "Item title"},
                    "description": {"type": "string", "description": "Rich text description"},
                    "rowId": {"type": "string", "description": "Row UUID for swimlane placement"},
                    "assigneeId": {"type": "string", "description": "User UUID to assign (single assignee)"},
                    "startDate": {"type": "string", "description": "Start date (ISO 8601 format)"},
                    "dueDate": {"type": "string", "description": "Due date (ISO 8601 format)"},
                    "color": {"type": "number", "description": "Color index (1-18)"},
                    "tags": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Tags to apply to the item",
                    },
                    "customFields": _custom_field_list("Custom field values as name/value pairs"),
                    "blocking": _dependency_list("Items this task blocks (dependencies)"),
                    "waiting": _dependency_list("Items this task waits for (dependencies)"),
                },
                "required": ["workspaceId", "boardId", "statusId", "title"],
            },
        ),
        Tool(
            name="update_item",
            description="Update item properties (title, status, board, assignee, dates, etc.)",
            inputSchema={
                "type": "object",
                "properties": {
                    "itemId": {"type": "string", "description": "Item UUID to update"},
                    "title": {"type": "string", "description": "New title"},
                    "description": {"type": "string", "description": "New description"},
                    "statusId": {
                        "type": "string",
                        "description": "New status UUID (move to different column)",
                    },
                    "rowId": {"type": "string", "description": "New row UUID (move to different swimlane)"},
                    "boardId": {"type": "string", "description": "New board UUID (move to different board)"},
                    "assigneeId": {"type": "string", "description": "User UUID to assign (single assignee)"},
                    "startDate": {"type": "string", "description": "New start date (ISO 8601)"},
                    "dueDate": {"type": "string", "description": "New due date (ISO 8601)"},
                    "color": {"type": "number", "description": "Color index (1-18)"},
                    "tags": {"type": "array", "items": {"type": "string"}, "description": "Tags for the item"},
                    "customFields": _custom_field_list("Custom field values to update"),
                    "blocking": _dependency_list("Items this task blocks (replaces existing)"),
                    "waiting": _dependency_list("Items this task waits for (replaces existing)"),
                    "archived": {"type": "boolean", "description": "Archive or unarchive the item"},
                    "milestone": {"type": "boolean", "description": "Mark as milestone"},
                    "progress": {"type": "number", "description": "Progress percentage (0-100)"},
                    "parentId": {"type": "string", "description": "Parent item UUID for sub-items"},
                },
                "required": ["itemId"],
            },
        ),
        Tool(
            name="delete_item",
            description="Permanently delete an item",
            inputSchema={
                "type": "object",
                "properties": {
                    "itemId": {"type": "string", "description": "Item UUID to delete"},
                },
                "required": ["itemId"],
            },
        ),
        Tool(
            name="move_item",
            description="Move an item to a different board, status column, or row (swimlane)",
            inputSchema={
                "type": "object",
                "properties": {
                    "itemId": {"type": "string", "description": "Item UUID to move"},
                    "targetBoardId": {
                        "type": "string",
                        "description": "Target board UUID (to move between boards)",
                    },
                    "targetStatusId": {"type": "string", "description": "Target status UUID (new column)"},
                    "targetRowId": {"type": "string", "description": "Target row UUID (new swimlane)"},
                },
                "required": ["itemId"],
            },
        ),
        Tool(
            name="archive_item",
            description="Archive or unarchive an item (soft delete - item can be restored)",
            inputSchema={
                "type": "object",
                "properties": {
                    "itemId": {"type": "string", "description": "Item UUID to archive/unarchive"},
                    "archived": {
                        "type": "boolean",
                        "description": "True to archive, false to unarchive (default: true)",
                    },
                },
                "required": ["itemId"],
            },
        ),
        # ============================================================================
        # Attachment Tools
        # ============================================================================
        Tool(
            name="list_attachments",
            description="List all attachments on an item",
            inputSchema={
                "type": "object",
                "properties": {
                    "itemId": {"type": "string", "description": "Item UUID"},
                },
                "required": ["itemId"],
            },
        ),
        Tool(
            name="get_attachment",
            description="Get attachment metadata (name, size, type)",
            inputSchema={
                "type": "object",
                "properties": {
                    "attachmentId": {"type": "string", "description": "Attachment UUID"},
                },
                "required": ["attachmentId"],
            },
        ),
        Tool(
            name="download_attachment",
            description="Download attachment file content by ID",
            inputSchema={
                "type": "object",
                "properties": {
                    "attachmentId": {"type": "string", "description": "Attachment UUID"},
                },
                "required": ["attachmentId"],
            },
        ),
        Tool(
            name="update_attachment",
            description="Update attachment name",
            inputSchema={
                "type": "object",
                "properties": {
                    "attachmentId": {"type": "string", "description": "Attachment UUID"},
                    "name": {"type": "string", "description": "New filename"},
                },
                "required": ["attachmentId", "name"],
            },
        ),
        Tool(
            name="delete_attachment",
            description="Permanently delete an attachment",
            inputSchema={
                "type": "object",
                "properties": {
                    "attachmentId": {"type": "string", "description": "Attachment UUID to delete"},
                },
                "required": ["attachmentId"],
            },
        ),
        Tool(
            name="upload_attachment",
            description="Upload a file attachment to an item. "
                        "Note: For binary files, content should be base64 encoded.",
            inputSchema={
                "type": "object",
                "properties": {
                    "itemId": {"type": "string", "description": "Item UUID to attach file to"},
                    "name": {"type": "string", "description": "Filename with extension (e.g., 'report.pdf')"},
                    "content": {"type": "string", "description": "File content (base64 encoded for binary files)"},
                },
                "required": ["itemId", "name", "content"],
            },
        ),
        # ============================================================================
        # User Tools
        # ============================================================================
        Tool(
            name="list_users",
            description="List all users in the organization",
            inputSchema=_no_arguments(),
        ),
        # ============================================================================
        # Time Tracking Tools
        # ============================================================================
        # NOTE: the API does not support creating time logs, only reading them
        Tool(
            name="get_time_logs",
            description="Get time logs for a workspace within a date range. "
                        "Can filter by boards, rows, users, or tags.",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspaceId": {"type": "string", "description": "Workspace UUID (required)"},
                    "startDate": {"type": "string", "description": "Start date (ISO 8601 UTC)"},
                    "endDate": {"type": "string", "description": "End date (ISO 8601 UTC)"},
                    "boardIds": {"type": "array", "items": {"type": "string"}, "description": "Filter by board UUIDs"},
                    "rowIds": {"type": "array", "items": {"type": "string"}, "description": "Filter by row UUIDs"},
                    "userIds": {"type": "array", "items": {"type": "string"}, "description": "Filter by user UUIDs"},
                    "tags": {"type": "array", "items": {"type": "string"}, "description": "Filter by tags"},
                },
                "required": ["workspaceId", "startDate", "endDate"],
            },
        ),
        # ============================================================================
        # Template Tools
        # ============================================================================
        Tool(
            name="list_workspace_templates",
            description="List available workspace templates",
            inputSchema=_no_arguments(),
        ),
        Tool(
            name="list_board_templates",
            description="List available board templates. Use templateId when creating a new board.",
            inputSchema=_no_arguments(),
        ),
        # ============================================================================
        # Activity and Log Tools
        # ============================================================================
        Tool(
            name="list_activities",
            description="Get item change history on a board (audit log)",
            inputSchema={
                "type": "object",
                "properties": {
                    "boardId": {"type": "string", "description": "Board UUID"},
                    "startDate": {"type": "string", "description": "Start date (ISO 8601 UTC)"},
                    "endDate": {
                        "type": "string",
                        "description": "End date (ISO 8601 UTC, max 3 months from start)",
                    },
                    "offset": {"type": "number", "description": "Pagination offset (default: 0)"},
                    "limit": {"type": "number", "description": "Records to return (default: 100, max: 1000)"},
                },
                "required": ["boardId", "startDate", "endDate"],
            },
        ),
        Tool(
            name="list_system_logs",
            description="List system logs by date range with paging",
            inputSchema={
                "type": "object",
                "properties": {
                    "fromDate": {
                        "type": "string",
                        "description": "Start date (ISO 8601 UTC, e.g., 2024-02-05T02:00:00Z)",
                    },
                    "toDate": {"type": "string", "description": "End date (ISO 8601 UTC)"},
                    "skip": {"type": "number", "description": "Number of records to skip"},
                    "take": {"type": "number", "description": "Number of records to take (max 1000)"},
                },
                "required": ["fromDate", "toDate"],
            },
        ),
    ]


def get_tool(name: str) -> Optional[Tool]:
    """Look up a single tool definition by name."""
    for tool in get_tools():
        if tool.name == name:
            return tool
    return None
