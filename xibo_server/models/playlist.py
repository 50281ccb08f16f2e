from typing import Any

from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field, model_serializer


class Playlist(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    playlistId: int
    name: str
    ownerId: int | None = None
    regionId: int | None = None
    isDynamic: int | None = None
    filterMediaName: str | None = None
    filterMediaTags: str | None = None
    duration: int | None = None
    requiresDurationUpdate: int | None = None
    folderId: int | None = None
    widgets: list[dict[str, Any]] | None = None
    tags: Any = None


class PlaylistIdRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    playlistId: int = Field(..., description="ID of the playlist.")


class GetPlaylistsRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    playlistId: int | None = Field(None, description="Filter by playlist ID.")
    name: str | None = Field(None, description="Filter by name.")
    userId: int | None = Field(None, description="Filter by owner.")
    tags: str | None = Field(None, description="Filter by comma separated tags.")
    mediaLike: str | None = Field(None, description="Playlists containing media with this name.")
    regionSpecific: int | None = Field(
        None, description="1 for region playlists, 0 for library playlists."
    )
    folderId: int | None = Field(None, description="Filter by folder ID.")
    embed: str | None = Field(None, description="Extra data to embed, e.g. 'widgets,tags'.")


class AddPlaylistRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Playlist name.")
    tags: str | None = Field(None, description="Comma separated tags.")
    isDynamic: int | None = Field(None, description="1 to fill the playlist from filters.")
    filterMediaName: str | None = Field(None, description="Dynamic filter on media name.")
    filterMediaTags: str | None = Field(None, description="Dynamic filter on media tags.")
    folderId: int | None = Field(None, description="Folder to create the playlist in.")


class EditPlaylistRequest(AddPlaylistRequest):
    playlistId: int = Field(..., description="ID of the playlist to edit.")


class CopyPlaylistRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    playlistId: int = Field(..., description="ID of the playlist to copy.")
    name: str = Field(..., description="Name of the copy.")
    copyMediaFiles: int | None = Field(None, description="1 to duplicate media files too.")


class AssignLibraryItemsRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    playlistId: int = Field(..., description="Playlist to add the media to.")
    media: list[int] = Field(..., description="Library media IDs to append as widgets.")
    duration: int | None = Field(None, description="Duration in seconds for each new widget.")
    useDuration: int | None = Field(None, description="1 to apply the duration.")
    displayOrder: int | None = Field(None, description="Position to insert the media at.")


class OrderWidgetsRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    playlistId: int = Field(..., description="Playlist whose widgets to reorder.")
    widgets: list[int] = Field(..., description="Widget IDs in their new display order.")

    @model_serializer(mode="wrap")
    def _positions(self, handler):
        data = handler(self)
        for position, widget_id in enumerate(data.pop("widgets", None) or [], start=1):
            data[f"widgets[{widget_id}]"] = position
        return data
