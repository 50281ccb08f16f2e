from xibo_server.models.envelope import ToolResult
from xibo_server.models.playlist import (
    AddPlaylistRequest,
    AssignLibraryItemsRequest,
    CopyPlaylistRequest,
    EditPlaylistRequest,
    GetPlaylistsRequest,
    OrderWidgetsRequest,
    Playlist,
    PlaylistIdRequest,
)
from xibo_server.utils.cms import CmsEndpoint, Encoding, call_cms

GET_PLAYLISTS = CmsEndpoint("GET", "/api/playlist", response=list[Playlist])
ADD_PLAYLIST = CmsEndpoint("POST", "/api/playlist", Encoding.FORM, Playlist, "Playlist added")
EDIT_PLAYLIST = CmsEndpoint(
    "PUT", "/api/playlist/{playlistId}", Encoding.FORM, Playlist, "Playlist updated"
)
DELETE_PLAYLIST = CmsEndpoint(
    "DELETE", "/api/playlist/{playlistId}", Encoding.NONE, success_message="Playlist deleted"
)
COPY_PLAYLIST = CmsEndpoint(
    "POST", "/api/playlist/copy/{playlistId}", Encoding.FORM, Playlist, "Playlist copied"
)
ASSIGN_LIBRARY = CmsEndpoint(
    "POST",
    "/api/playlist/library/assign/{playlistId}",
    Encoding.FORM,
    Playlist,
    "Media assigned",
)
ORDER_WIDGETS = CmsEndpoint(
    "POST", "/api/playlist/order/{playlistId}", Encoding.FORM, Playlist, "Widgets reordered"
)
GET_PLAYLIST_USAGE = CmsEndpoint("GET", "/api/playlist/usage/{playlistId}")


async def get_playlists(request: GetPlaylistsRequest) -> ToolResult:
    """List playlists. Set embed='widgets' to include each playlist's widgets."""
    return await call_cms(GET_PLAYLISTS, request)


async def add_playlist(request: AddPlaylistRequest) -> ToolResult:
    """Create a library playlist, optionally dynamic (filled from media filters)."""
    return await call_cms(ADD_PLAYLIST, request)


async def edit_playlist(request: EditPlaylistRequest) -> ToolResult:
    """Edit a playlist's name, tags or dynamic filters."""
    return await call_cms(EDIT_PLAYLIST, request)


async def delete_playlist(request: PlaylistIdRequest) -> ToolResult:
    """Delete a playlist by playlistId."""
    return await call_cms(DELETE_PLAYLIST, request)


async def copy_playlist(request: CopyPlaylistRequest) -> ToolResult:
    """Copy a playlist under a new name."""
    return await call_cms(COPY_PLAYLIST, request)


async def assign_library_items(request: AssignLibraryItemsRequest) -> ToolResult:
    """Append library media to a playlist as new widgets."""
    return await call_cms(ASSIGN_LIBRARY, request)


async def order_widgets(request: OrderWidgetsRequest) -> ToolResult:
    """Reorder a playlist's widgets. Pass every widgetId in the desired order."""
    return await call_cms(ORDER_WIDGETS, request)


async def get_playlist_usage(request: PlaylistIdRequest) -> ToolResult:
    """List the displays and layouts a playlist is used by."""
    return await call_cms(GET_PLAYLIST_USAGE, request)


TOOLS = [
    get_playlists,
    add_playlist,
    edit_playlist,
    delete_playlist,
    copy_playlist,
    assign_library_items,
    order_widgets,
    get_playlist_usage,
]
