from xibo_server.models.display import (
    Display,
    DisplayIdRequest,
    EditDisplayRequest,
    GetDisplaysRequest,
    SetDefaultLayoutRequest,
)
from xibo_server.models.envelope import ToolResult
from xibo_server.utils.cms import CmsEndpoint, Encoding, call_cms

GET_DISPLAYS = CmsEndpoint("GET", "/api/display", response=list[Display])
EDIT_DISPLAY = CmsEndpoint(
    "PUT", "/api/display/{displayId}", Encoding.FORM, Display, "Display updated"
)
DELETE_DISPLAY = CmsEndpoint(
    "DELETE", "/api/display/{displayId}", Encoding.NONE, success_message="Display deleted"
)
GET_DISPLAY_STATUS = CmsEndpoint("GET", "/api/display/status/{displayId}")
AUTHORISE_DISPLAY = CmsEndpoint(
    "PUT",
    "/api/display/authorise/{displayId}",
    Encoding.NONE,
    success_message="Display authorisation toggled",
)
SET_DEFAULT_LAYOUT = CmsEndpoint(
    "PUT",
    "/api/display/defaultlayout/{displayId}",
    Encoding.FORM,
    success_message="Default layout set",
)
REQUEST_SCREENSHOT = CmsEndpoint(
    "PUT",
    "/api/display/requestscreenshot/{displayId}",
    Encoding.NONE,
    success_message="Screenshot requested",
)
WAKE_ON_LAN = CmsEndpoint(
    "POST", "/api/display/wol/{displayId}", Encoding.NONE, success_message="Wake on LAN sent"
)
CHECK_LICENCE = CmsEndpoint(
    "PUT",
    "/api/display/licenceCheck/{displayId}",
    Encoding.NONE,
    success_message="Licence check requested",
)
PURGE_ALL = CmsEndpoint(
    "PUT",
    "/api/display/purgeAll/{displayId}",
    Encoding.NONE,
    success_message="Purge of all media requested",
)


async def get_displays(request: GetDisplaysRequest) -> ToolResult:
    """List displays (players) with optional filters such as name, group, type or online state."""
    return await call_cms(GET_DISPLAYS, request)


async def edit_display(request: EditDisplayRequest) -> ToolResult:
    """Edit a display's name, licence, default layout, Wake on LAN and profile settings."""
    return await call_cms(EDIT_DISPLAY, request)


async def delete_display(request: DisplayIdRequest) -> ToolResult:
    """Delete a display by displayId."""
    return await call_cms(DELETE_DISPLAY, request)


async def get_display_status(request: DisplayIdRequest) -> ToolResult:
    """Get the status the player last reported (current layout, storage, errors)."""
    return await call_cms(GET_DISPLAY_STATUS, request)


async def authorise_display(request: DisplayIdRequest) -> ToolResult:
    """Toggle authorisation (licensing) of a display."""
    return await call_cms(AUTHORISE_DISPLAY, request)


async def set_default_layout(request: SetDefaultLayoutRequest) -> ToolResult:
    """Set the layout a display shows when nothing else is scheduled."""
    return await call_cms(SET_DEFAULT_LAYOUT, request)


async def request_display_screenshot(request: DisplayIdRequest) -> ToolResult:
    """Ask the player to upload a screenshot at its next check-in."""
    return await call_cms(REQUEST_SCREENSHOT, request)


async def wake_display_on_lan(request: DisplayIdRequest) -> ToolResult:
    """Send a Wake on LAN packet to a display."""
    return await call_cms(WAKE_ON_LAN, request)


async def check_display_licence(request: DisplayIdRequest) -> ToolResult:
    """Ask the player to re-check its commercial licence."""
    return await call_cms(CHECK_LICENCE, request)


async def purge_display_media(request: DisplayIdRequest) -> ToolResult:
    """Ask the player to delete all cached media and download it again."""
    return await call_cms(PURGE_ALL, request)


TOOLS = [
    get_displays,
    edit_display,
    delete_display,
    get_display_status,
    authorise_display,
    set_default_layout,
    request_display_screenshot,
    wake_display_on_lan,
    check_display_licence,
    purge_display_media,
]
