from xibo_server.models.envelope import ToolResult
from xibo_server.models.sync_group import (
    AddSyncGroupRequest,
    AssignSyncGroupMembersRequest,
    EditSyncGroupRequest,
    GetSyncGroupsRequest,
    SyncGroup,
    SyncGroupDisplay,
    SyncGroupIdRequest,
)
from xibo_server.utils.cms import CmsEndpoint, Encoding, call_cms

GET_SYNC_GROUPS = CmsEndpoint("GET", "/api/syncgroups", response=list[SyncGroup])
ADD_SYNC_GROUP = CmsEndpoint(
    "POST", "/api/syncgroup/add", Encoding.FORM, SyncGroup, "Sync group added"
)
EDIT_SYNC_GROUP = CmsEndpoint(
    "POST", "/api/syncgroup/{syncGroupId}/edit", Encoding.FORM, SyncGroup, "Sync group updated"
)
DELETE_SYNC_GROUP = CmsEndpoint(
    "DELETE",
    "/api/syncgroup/{syncGroupId}/delete",
    Encoding.NONE,
    success_message="Sync group deleted",
)
ASSIGN_MEMBERS = CmsEndpoint(
    "POST",
    "/api/syncgroup/{syncGroupId}/members",
    Encoding.FORM,
    success_message="Sync group members updated",
)
GET_SYNC_GROUP_DISPLAYS = CmsEndpoint(
    "GET", "/api/syncgroup/{syncGroupId}/displays", response=list[SyncGroupDisplay]
)


async def get_sync_groups(request: GetSyncGroupsRequest) -> ToolResult:
    """List sync groups (displays that play content in lockstep)."""
    return await call_cms(GET_SYNC_GROUPS, request)


async def add_sync_group(request: AddSyncGroupRequest) -> ToolResult:
    """Create a sync group. Assign members and a lead display afterwards."""
    return await call_cms(ADD_SYNC_GROUP, request)


async def edit_sync_group(request: EditSyncGroupRequest) -> ToolResult:
    """Edit a sync group's name, lead display, publisher port and delays."""
    return await call_cms(EDIT_SYNC_GROUP, request)


async def delete_sync_group(request: SyncGroupIdRequest) -> ToolResult:
    """Delete a sync group by syncGroupId."""
    return await call_cms(DELETE_SYNC_GROUP, request)


async def assign_sync_group_members(request: AssignSyncGroupMembersRequest) -> ToolResult:
    """Add displays to, or remove displays from, a sync group."""
    return await call_cms(ASSIGN_MEMBERS, request)


async def get_sync_group_displays(request: SyncGroupIdRequest) -> ToolResult:
    """List the displays in a sync group and which one leads."""
    return await call_cms(GET_SYNC_GROUP_DISPLAYS, request)


TOOLS = [
    get_sync_groups,
    add_sync_group,
    edit_sync_group,
    delete_sync_group,
    assign_sync_group_members,
    get_sync_group_displays,
]
