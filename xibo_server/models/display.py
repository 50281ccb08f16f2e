from typing import Any

from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field


class Display(OutputBaseModel):
    """A player registered with the CMS."""

    model_config = ConfigDict(extra="allow")

    displayId: int
    display: str
    description: str | None = None
    displayGroupId: int | None = None
    defaultLayoutId: int | None = None
    licensed: int | None = None
    loggedIn: int | None = None
    lastAccessed: int | str | None = None
    clientAddress: str | None = None
    macAddress: str | None = None
    clientType: str | None = None
    clientVersion: str | None = None
    displayProfileId: int | None = None
    currentLayoutId: int | None = None
    syncGroupId: int | None = None
    folderId: int | None = None
    mediaInventoryStatus: int | None = None


class DisplayIdRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    displayId: int = Field(..., description="ID of the display.")


class GetDisplaysRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    displayId: int | None = Field(None, description="Filter by display ID.")
    displayGroupId: int | None = Field(None, description="Filter by display group ID.")
    display: str | None = Field(None, description="Filter by display name.")
    tags: str | None = Field(None, description="Filter by comma separated tags.")
    macAddress: str | None = Field(None, description="Filter by MAC address.")
    hardwareKey: str | None = Field(None, description="Filter by hardware key.")
    clientVersion: str | None = Field(None, description="Filter by player version.")
    clientType: str | None = Field(
        None, description="Filter by player type, e.g. 'android', 'windows', 'linux'."
    )
    authorised: int | None = Field(None, description="1 for licensed displays only, 0 for unlicensed.")
    loggedIn: int | None = Field(None, description="1 for online displays only.")
    syncGroupId: int | None = Field(None, description="Filter by sync group ID.")
    folderId: int | None = Field(None, description="Filter by folder ID.")
    embed: str | None = Field(
        None, description="Extra data to embed, e.g. 'displayGroups,overrideConfig'."
    )


class EditDisplayRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    displayId: int = Field(..., description="ID of the display to edit.")
    display: str = Field(..., description="Display name.")
    description: str | None = Field(None, description="Description.")
    tags: str | None = Field(None, description="Comma separated tags.")
    auditingUntil: str | None = Field(
        None, description="Enable auditing until this date, 'YYYY-MM-DD HH:MM:SS'."
    )
    defaultLayoutId: int | None = Field(None, description="Layout shown when nothing is scheduled.")
    licensed: int | None = Field(None, description="1 to authorise the display.")
    license: str | None = Field(None, description="Hardware key.")
    incSchedule: int | None = Field(None, description="1 to include the default layout in the schedule.")
    emailAlert: int | None = Field(None, description="1 to email when the display goes offline.")
    alertTimeout: int | None = Field(None, description="Offline alert timeout in seconds.")
    wakeOnLanEnabled: int | None = Field(None, description="1 to enable Wake on LAN.")
    wakeOnLanTime: str | None = Field(None, description="Daily Wake on LAN time, 'HH:MM'.")
    broadCastAddress: str | None = Field(None, description="Broadcast address for Wake on LAN.")
    secureOn: str | None = Field(None, description="SecureOn password for Wake on LAN.")
    cidr: int | None = Field(None, description="CIDR for Wake on LAN.")
    latitude: float | None = Field(None, description="Latitude of the display.")
    longitude: float | None = Field(None, description="Longitude of the display.")
    timeZone: str | None = Field(None, description="IANA time zone of the display.")
    displayProfileId: int | None = Field(None, description="Display profile to apply.")
    folderId: int | None = Field(None, description="Folder to move the display into.")
    clearCachedData: int | None = Field(None, description="1 to clear cached player data.")
    rekeyXmr: int | None = Field(None, description="1 to rotate the XMR key.")
    overrideConfig: dict[str, Any] | None = Field(
        None, description="Profile settings overridden for this display only."
    )


class SetDefaultLayoutRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    displayId: int = Field(..., description="ID of the display.")
    layoutId: int = Field(..., description="Layout to set as the display's default.")
