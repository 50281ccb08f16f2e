from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field


class SyncGroup(OutputBaseModel):
    """A group of displays that play layouts in lockstep."""

    model_config = ConfigDict(extra="allow")

    syncGroupId: int
    name: str
    createdDt: str | None = None
    modifiedDt: str | None = None
    modifiedBy: int | None = None
    modifiedByName: str | None = None
    ownerId: int | None = None
    owner: str | None = None
    syncPublisherPort: int | None = None
    syncSwitchDelay: int | None = None
    syncVideoPauseDelay: int | None = None
    leadDisplayId: int | None = None
    folderId: int | None = None


class SyncGroupDisplay(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    displayId: int
    display: str | None = None
    isLead: int | None = None


class GetSyncGroupsRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    syncGroupId: int | None = Field(None, description="Filter by sync group ID.")
    name: str | None = Field(None, description="Filter by name.")
    ownerId: int | None = Field(None, description="Filter by owner.")
    leadDisplayId: int | None = Field(None, description="Filter by lead display.")
    folderId: int | None = Field(None, description="Filter by folder ID.")


class AddSyncGroupRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Sync group name.")
    syncPublisherPort: int = Field(9590, description="Port the lead display publishes on.")
    folderId: int | None = Field(None, description="Folder to create the group in.")


class EditSyncGroupRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    syncGroupId: int = Field(..., description="ID of the sync group.")
    name: str = Field(..., description="Sync group name.")
    syncPublisherPort: int = Field(9590, description="Port the lead display publishes on.")
    syncSwitchDelay: int | None = Field(
        None, description="Delay in ms before switching layouts."
    )
    syncVideoPauseDelay: int | None = Field(
        None, description="Delay in ms before resuming paused video."
    )
    leadDisplayId: int = Field(..., description="Display that leads the group.")
    folderId: int | None = Field(None, description="Folder ID.")


class SyncGroupIdRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    syncGroupId: int = Field(..., description="ID of the sync group.")


class AssignSyncGroupMembersRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    syncGroupId: int = Field(..., description="ID of the sync group.")
    displayId: list[int] | None = Field(None, description="Displays to add to the group.")
    unassignDisplayId: list[int] | None = Field(
        None, description="Displays to remove from the group."
    )
