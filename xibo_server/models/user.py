from typing import Any, Literal

from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field, field_validator


class User(OutputBaseModel):
    """A CMS user account."""

    model_config = ConfigDict(extra="allow")

    userId: int
    userName: str
    userTypeId: int | None = None
    groupId: int | None = None
    group: str | None = None
    email: str | None = None
    firstName: str | None = None
    lastName: str | None = None
    phone: str | None = None
    homePageId: str | int | None = None
    homeFolderId: int | None = None
    lastAccessed: str | None = None
    newUserWizard: int | None = None
    retired: int | None = None
    isPasswordChangeRequired: int | None = None
    libraryQuota: int | None = None
    twoFactorTypeId: int | None = None


class UserPreference(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    preference: str
    value: Any = None
    userId: int | None = None


class Permission(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    groupId: int
    group: str | None = None
    view: int | None = None
    edit: int | None = None
    delete: int | None = None
    isUser: int | None = None


class GetUsersRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    userId: int | None = Field(None, description="Filter by user ID.")
    userName: str | None = Field(None, description="Filter by user name.")
    userTypeId: int | None = Field(
        None, description="Filter by user type: 1 super admin, 2 group admin, 3 user."
    )
    retired: int | None = Field(None, description="1 for retired users only, 0 for active.")


class GetUserMeRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")


class AddUserRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    userName: str = Field(..., description="Login name for the new user.")
    password: str = Field(..., description="Initial password.")
    email: str | None = Field(None, description="Email address.")
    userTypeId: int = Field(3, description="1 super admin, 2 group admin, 3 user.")
    homeFolderId: int = Field(1, description="Folder the user starts in.")
    homePageId: str = Field(
        "icondashboard.view", description="Home page route, e.g. 'icondashboard.view'."
    )
    groupId: int = Field(1, description="Initial user group ID.")
    newUserWizard: int = Field(0, description="1 to show the new user wizard.")
    hideNavigation: int = Field(0, description="1 to hide the navigation menu.")
    firstName: str | None = Field(None, description="First name.")
    lastName: str | None = Field(None, description="Last name.")
    libraryQuota: int = Field(4096, description="Library quota in KB.")
    isPasswordChangeRequired: int = Field(
        0, description="1 to force a password change at first login."
    )

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str | None) -> str | None:
        if value is not None and "@" not in value:
            raise ValueError("Invalid email address")
        return value


class EditUserRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    userId: int = Field(..., description="ID of the user to edit.")
    userName: str = Field(..., description="Login name.")
    email: str | None = Field(None, description="Email address.")
    userTypeId: int | None = Field(None, description="1 super admin, 2 group admin, 3 user.")
    homePageId: str | None = Field(None, description="Home page route.")
    homeFolderId: int | None = Field(None, description="Home folder ID.")
    firstName: str | None = Field(None, description="First name.")
    lastName: str | None = Field(None, description="Last name.")
    libraryQuota: int | None = Field(None, description="Library quota in KB.")
    retired: int | None = Field(None, description="1 to retire the user.")
    newPassword: str | None = Field(None, description="New password.")
    retypeNewPassword: str | None = Field(None, description="Repeat of newPassword.")
    isPasswordChangeRequired: int | None = Field(
        None, description="1 to force a password change at next login."
    )


class DeleteUserRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    userId: int = Field(..., description="ID of the user to delete.")
    deleteAllItems: int | None = Field(
        None, description="1 to delete everything the user owns."
    )
    reassignUserId: int | None = Field(
        None, description="User to reassign owned items to instead of deleting them."
    )


class GetUserPreferencesRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    preference: str | None = Field(None, description="Single preference name to fetch.")


class PreferenceItem(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    option: str = Field(..., description="Preference name.")
    value: str | int | bool | None = Field(None, description="Preference value.")


class SetUserPreferencesRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    preference: list[PreferenceItem] = Field(
        ..., description="Preferences to store for the current user."
    )


class GetUserPermissionsRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    entity: Literal[
        "Campaign",
        "Command",
        "DataSet",
        "DisplayGroup",
        "Folder",
        "Layout",
        "Media",
        "Playlist",
        "Region",
        "Widget",
    ] = Field(..., description="Entity type the object belongs to.")
    objectId: int = Field(..., description="ID of the object.")
