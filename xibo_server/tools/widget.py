from typing import Any

from xibo_server.models.envelope import ToolResult
from xibo_server.models.widget import (
    AddWidgetRequest,
    DeleteWidgetDataRequest,
    EditWidgetRequest,
    EditWidgetTransitionRequest,
    Widget,
    WidgetDataRequest,
    WidgetIdRequest,
)
from xibo_server.utils.cms import CmsEndpoint, Encoding, call_cms

ADD_WIDGET = CmsEndpoint(
    "POST", "/api/playlist/widget/{type}/{playlistId}", Encoding.FORM, Widget, "Widget added"
)
EDIT_WIDGET = CmsEndpoint(
    "PUT", "/api/playlist/widget/{widgetId}", Encoding.FORM, Widget, "Widget updated"
)
DELETE_WIDGET = CmsEndpoint(
    "DELETE", "/api/playlist/widget/{widgetId}", Encoding.NONE, success_message="Widget deleted"
)
EDIT_WIDGET_TRANSITION = CmsEndpoint(
    "PUT",
    "/api/playlist/widget/transition/{type}/{widgetId}",
    Encoding.FORM,
    Widget,
    "Transition updated",
)
GET_WIDGET_DATA = CmsEndpoint(
    "GET", "/api/playlist/widget/data/{widgetId}", response=list[dict[str, Any]]
)
ADD_WIDGET_DATA = CmsEndpoint(
    "POST", "/api/playlist/widget/data/{widgetId}", Encoding.FORM, success_message="Data added"
)
DELETE_WIDGET_DATA = CmsEndpoint(
    "DELETE",
    "/api/playlist/widget/data/{widgetId}/{dataId}",
    Encoding.NONE,
    success_message="Data deleted",
)


async def add_widget(request: AddWidgetRequest) -> ToolResult:
    """Add a widget of a module type (text, clock, image, ...) to a playlist."""
    return await call_cms(ADD_WIDGET, request)


async def edit_widget(request: EditWidgetRequest) -> ToolResult:
    """Edit a widget's duration, name and module specific properties."""
    return await call_cms(EDIT_WIDGET, request)


async def delete_widget(request: WidgetIdRequest) -> ToolResult:
    """Delete a widget by widgetId."""
    return await call_cms(DELETE_WIDGET, request)


async def edit_widget_transition(request: EditWidgetTransitionRequest) -> ToolResult:
    """Set a widget's in or out transition."""
    return await call_cms(EDIT_WIDGET_TRANSITION, request)


async def get_widget_data(request: WidgetIdRequest) -> ToolResult:
    """List the data items stored on a data widget."""
    return await call_cms(GET_WIDGET_DATA, request)


async def add_widget_data(request: WidgetDataRequest) -> ToolResult:
    """Add a data item to a data widget."""
    return await call_cms(ADD_WIDGET_DATA, request)


async def delete_widget_data(request: DeleteWidgetDataRequest) -> ToolResult:
    """Delete a data item from a data widget."""
    return await call_cms(DELETE_WIDGET_DATA, request)


TOOLS = [
    add_widget,
    edit_widget,
    delete_widget,
    edit_widget_transition,
    get_widget_data,
    add_widget_data,
    delete_widget_data,
]
