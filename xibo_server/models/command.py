from typing import Literal

from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field

AlertOn = Literal["success", "failure", "always", "never"]


class Command(OutputBaseModel):
    """A display command as returned by the CMS."""

    model_config = ConfigDict(extra="allow")

    commandId: int
    command: str
    code: str
    description: str | None = None
    userId: int | None = None
    commandString: str | None = None
    validationString: str | None = None
    displayProfileId: int | None = None
    commandStringDisplayProfile: str | None = None
    validationStringDisplayProfile: str | None = None
    availableOn: str | None = None
    createAlertOn: str | None = None
    createAlertOnDisplayProfile: str | None = None
    groupsWithPermissions: str | None = None


class GetCommandsRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    commandId: int | None = Field(None, description="Filter by command ID.")
    command: str | None = Field(None, description="Filter by command name.")
    code: str | None = Field(None, description="Filter by command code.")
    useRegexForName: int | None = Field(
        None, description="1 to treat the command filter as a regular expression."
    )
    useRegexForCode: int | None = Field(
        None, description="1 to treat the code filter as a regular expression."
    )
    logicalOperatorName: Literal["AND", "OR"] | None = Field(
        None, description="How multiple name filters combine."
    )
    logicalOperatorCode: Literal["AND", "OR"] | None = Field(
        None, description="How multiple code filters combine."
    )


class AddCommandRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    command: str = Field(..., description="Command name, e.g. 'Reboot'.")
    code: str = Field(
        ..., description="Unique code used by the player to identify the command."
    )
    description: str | None = Field(None, description="What the command does.")
    commandString: str | None = Field(
        None, description="Default command string sent to the player."
    )
    validationString: str | None = Field(
        None, description="String the player must return for the command to count as successful."
    )
    availableOn: str | None = Field(
        None,
        description="Comma separated player types the command is available on, e.g. 'android,windows'.",
    )
    createAlertOn: AlertOn | None = Field(
        None, description="When to raise an alert: success, failure, always or never."
    )


class EditCommandRequest(AddCommandRequest):
    commandId: int = Field(..., description="ID of the command to edit.")
    code: str | None = Field(None, description="Codes cannot be changed; ignored by most CMS versions.")


class DeleteCommandRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    commandId: int = Field(..., description="ID of the command to delete.")
