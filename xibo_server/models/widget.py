from typing import Any, Literal

from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field, model_serializer


class Widget(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    widgetId: int
    playlistId: int | None = None
    type: str | None = None
    duration: int | None = None
    displayOrder: int | None = None
    useDuration: int | None = None
    calculatedDuration: int | None = None
    widgetOptions: list[dict[str, Any]] | None = None
    mediaIds: list[int] | None = None


class AddWidgetRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    type: str = Field(
        ..., description="Module type to create, e.g. 'text', 'clock', 'image', 'rss-ticker'."
    )
    playlistId: int = Field(
        ..., description="Playlist the widget goes in (a region's playlistId for layouts)."
    )
    templateId: str | None = Field(None, description="Module template ID for data widgets.")
    displayOrder: int | None = Field(None, description="Position within the playlist.")


class EditWidgetRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    widgetId: int = Field(..., description="ID of the widget.")
    name: str | None = Field(None, description="Widget name.")
    useDuration: int | None = Field(None, description="1 to use the duration below.")
    duration: int | None = Field(None, description="Duration in seconds.")
    enableStat: str | None = Field(None, description="'On', 'Off' or 'Inherit'.")
    properties: dict[str, Any] | None = Field(
        None,
        description="Module specific properties, e.g. {'text': 'Hello'}. Sent to the CMS as individual fields.",
    )

    @model_serializer(mode="wrap")
    def _inline_properties(self, handler):
        data = handler(self)
        data.update(data.pop("properties", None) or {})
        return data


class WidgetIdRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    widgetId: int = Field(..., description="ID of the widget.")


class EditWidgetTransitionRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["in", "out"] = Field(..., description="Which transition to set.")
    widgetId: int = Field(..., description="ID of the widget.")
    transitionType: str | None = Field(
        None, description="Transition code, e.g. 'fly' or 'fadeIn'."
    )
    transitionDuration: int | None = Field(None, description="Duration in milliseconds.")
    transitionDirection: str | None = Field(
        None, description="Direction for fly transitions, e.g. 'N', 'E', 'SW'."
    )


class WidgetDataRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    widgetId: int = Field(..., description="ID of the widget.")
    data: dict[str, Any] = Field(..., description="Data item fields, keyed by column.")
    displayOrder: int | None = Field(None, description="Position of the item.")


class DeleteWidgetDataRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    widgetId: int = Field(..., description="ID of the widget.")
    dataId: int = Field(..., description="ID of the data item to delete.")
