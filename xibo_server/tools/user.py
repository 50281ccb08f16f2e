from xibo_server.models.envelope import ToolResult
from xibo_server.models.user import (
    AddUserRequest,
    DeleteUserRequest,
    EditUserRequest,
    GetUserMeRequest,
    GetUserPermissionsRequest,
    GetUserPreferencesRequest,
    GetUsersRequest,
    Permission,
    SetUserPreferencesRequest,
    User,
    UserPreference,
)
from xibo_server.utils.cms import CmsEndpoint, Encoding, call_cms

GET_USERS = CmsEndpoint("GET", "/api/user", response=list[User])
GET_USER_ME = CmsEndpoint("GET", "/api/user/me", response=User)
ADD_USER = CmsEndpoint("POST", "/api/user", Encoding.FORM, User, "User added")
EDIT_USER = CmsEndpoint("PUT", "/api/user/{userId}", Encoding.FORM, User, "User updated")
DELETE_USER = CmsEndpoint(
    "DELETE", "/api/user/{userId}", Encoding.FORM, success_message="User deleted"
)
GET_USER_PREFERENCES = CmsEndpoint(
    "GET", "/api/user/pref", response=list[UserPreference] | UserPreference
)
SET_USER_PREFERENCES = CmsEndpoint(
    "POST", "/api/user/pref", Encoding.JSON, success_message="Preferences saved"
)
GET_USER_PERMISSIONS = CmsEndpoint(
    "GET", "/api/user/permissions/{entity}/{objectId}", response=list[Permission]
)


async def get_users(request: GetUsersRequest) -> ToolResult:
    """List CMS users, optionally filtered by ID, name, type or retired flag."""
    return await call_cms(GET_USERS, request)


async def get_user_me(request: GetUserMeRequest) -> ToolResult:
    """Return the user the CMS API credentials belong to."""
    return await call_cms(GET_USER_ME, request)


async def add_user(request: AddUserRequest) -> ToolResult:
    """Create a CMS user. Defaults: normal user type, dashboard home page, 4 MB quota."""
    return await call_cms(ADD_USER, request)


async def edit_user(request: EditUserRequest) -> ToolResult:
    """Edit a CMS user by userId, including retiring or resetting the password."""
    return await call_cms(EDIT_USER, request)


async def delete_user(request: DeleteUserRequest) -> ToolResult:
    """Delete a CMS user, either deleting or reassigning the items they own."""
    return await call_cms(DELETE_USER, request)


async def get_user_preferences(request: GetUserPreferencesRequest) -> ToolResult:
    """Read the current user's preferences, or one preference by name."""
    return await call_cms(GET_USER_PREFERENCES, request)


async def set_user_preferences(request: SetUserPreferencesRequest) -> ToolResult:
    """Store preferences for the current user."""
    return await call_cms(SET_USER_PREFERENCES, request)


async def get_user_permissions(request: GetUserPermissionsRequest) -> ToolResult:
    """List which user groups can view, edit or delete an object."""
    return await call_cms(GET_USER_PERMISSIONS, request)


TOOLS = [
    get_users,
    get_user_me,
    add_user,
    edit_user,
    delete_user,
    get_user_preferences,
    set_user_preferences,
    get_user_permissions,
]
