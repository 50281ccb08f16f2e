from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field


class Region(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    regionId: int
    layoutId: int | None = None
    name: str | None = None
    width: float | None = None
    height: float | None = None
    top: float | None = None
    left: float | None = None
    zIndex: int | None = None
    type: str | None = None
    duration: int | None = None


class Layout(OutputBaseModel):
    """A layout (draft or published) as returned by the CMS."""

    model_config = ConfigDict(extra="allow")

    layoutId: int
    layout: str
    campaignId: int | None = None
    parentId: int | None = None
    publishedStatusId: int | None = None
    publishedStatus: str | None = None
    description: str | None = None
    ownerId: int | None = None
    width: float | None = None
    height: float | None = None
    orientation: str | None = None
    backgroundColor: str | None = None
    backgroundImageId: int | None = None
    duration: int | None = None
    status: int | None = None
    retired: int | None = None
    folderId: int | None = None
    code: str | None = None
    regions: list[Region] | None = None


class LayoutStatus(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    status: int | None = None
    duration: int | None = None
    statusMessage: list[str] | str | None = None
    isLocked: bool | None = None


class LayoutIdRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    layoutId: int = Field(..., description="ID of the layout.")


class GetLayoutsRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    layoutId: int | None = Field(None, description="Filter by layout ID.")
    parentId: int | None = Field(None, description="Filter by parent layout ID (finds the draft).")
    layout: str | None = Field(None, description="Filter by layout name.")
    campaignId: int | None = Field(None, description="Filter by campaign ID.")
    retired: int | None = Field(None, description="1 for retired layouts only.")
    tags: str | None = Field(None, description="Filter by comma separated tags.")
    publishedStatusId: int | None = Field(None, description="1 published, 2 draft.")
    folderId: int | None = Field(None, description="Filter by folder ID.")
    embed: str | None = Field(
        None, description="Extra data to embed, e.g. 'regions,playlists,widgets'."
    )


class AddLayoutRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Layout name.")
    description: str | None = Field(None, description="Description.")
    layoutId: int | None = Field(None, description="Template layout to copy from.")
    resolutionId: int | None = Field(
        None, description="Resolution ID. Required when not copying a template."
    )
    returnDraft: bool | None = Field(None, description="True to return the draft layout.")
    code: str | None = Field(None, description="Unique code for the layout.")
    folderId: int | None = Field(None, description="Folder to create the layout in.")


class EditLayoutRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    layoutId: int = Field(..., description="ID of the layout to edit.")
    name: str = Field(..., description="Layout name.")
    description: str | None = Field(None, description="Description.")
    tags: str | None = Field(None, description="Comma separated tags.")
    retired: int | None = Field(None, description="1 to retire.")
    enableStat: int | None = Field(None, description="1 to collect proof of play.")
    code: str | None = Field(None, description="Unique code.")
    folderId: int | None = Field(None, description="Folder ID.")


class CopyLayoutRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    layoutId: int = Field(..., description="ID of the layout to copy.")
    name: str = Field(..., description="Name of the copy.")
    description: str | None = Field(None, description="Description of the copy.")
    copyMediaFiles: int | None = Field(None, description="1 to duplicate media files too.")


class PublishLayoutRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    layoutId: int = Field(..., description="ID of the draft's parent layout.")
    publishNow: int | None = Field(1, description="1 to publish immediately.")
    publishDate: str | None = Field(
        None, description="Scheduled publish time, 'YYYY-MM-DD HH:MM:SS'."
    )


class AddRegionRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    layoutId: int = Field(..., description="Draft layout to add the region to.")
    type: str | None = Field(
        None, description="Region type: 'frame', 'zone', 'playlist' or 'canvas'."
    )
    width: float | None = Field(None, description="Width in pixels.")
    height: float | None = Field(None, description="Height in pixels.")
    top: float | None = Field(None, description="Top offset in pixels.")
    left: float | None = Field(None, description="Left offset in pixels.")


class EditRegionRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    regionId: int = Field(..., description="ID of the region.")
    width: float = Field(..., description="Width in pixels.")
    height: float = Field(..., description="Height in pixels.")
    top: float = Field(..., description="Top offset in pixels.")
    left: float = Field(..., description="Left offset in pixels.")
    zIndex: int | None = Field(None, description="Stacking order.")
    name: str | None = Field(None, description="Region name.")
    loop: int | None = Field(None, description="1 to loop a single widget.")


class DeleteRegionRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    regionId: int = Field(..., description="ID of the region to delete.")
