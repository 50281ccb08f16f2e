"""
Tool registry mapping tool names to their implementations and request models.
"""

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import get_type_hints

from mcp_schema import FlatBaseModel

from xibo_server.models.envelope import ToolResult
from xibo_server.tools import (
    command,
    dataset,
    display,
    font,
    google_fonts,
    image,
    layout,
    module,
    news,
    playlist,
    sync_group,
    user,
    widget,
    workflow,
)

ToolImpl = Callable[[FlatBaseModel], Awaitable[ToolResult]]

TOOL_GROUPS = {
    "user": user.TOOLS,
    "display": display.TOOLS,
    "layout": layout.TOOLS,
    "playlist": playlist.TOOLS,
    "widget": widget.TOOLS,
    "command": command.TOOLS,
    "sync_group": sync_group.TOOLS,
    "module": module.TOOLS,
    "dataset": dataset.TOOLS,
    "font": font.TOOLS + google_fonts.TOOLS,
    "news": news.TOOLS,
    "workflow": workflow.TOOLS,
    "generation": image.TOOLS,
}


@dataclass(frozen=True)
class ToolDefn:
    name: str
    group: str
    impl: ToolImpl
    request_model: type[FlatBaseModel]

    @property
    def description(self) -> str:
        return inspect.getdoc(self.impl) or ""


def _request_model(impl: ToolImpl) -> type[FlatBaseModel]:
    model = get_type_hints(impl).get("request")
    if not (isinstance(model, type) and issubclass(model, FlatBaseModel)):
        raise TypeError(f"Tool {impl.__name__} must take a single FlatBaseModel 'request'")
    return model


TOOL_REGISTRY: dict[str, ToolDefn] = {
    impl.__name__: ToolDefn(
        name=impl.__name__,
        group=group,
        impl=impl,
        request_model=_request_model(impl),
    )
    for group, impls in TOOL_GROUPS.items()
    for impl in impls
}


def get_tool_defn(name: str) -> ToolDefn:
    """
    Get the tool definition registered under ``name``.

    Raises:
        ValueError: If no tool has that name
    """
    defn = TOOL_REGISTRY.get(name)
    if defn is None:
        raise ValueError(f"Unknown tool: {name}")
    return defn


def list_tools(group: str | None = None) -> list[ToolDefn]:
    if group is not None and group not in TOOL_GROUPS:
        raise ValueError(f"Unknown tool group: {group}")
    return [defn for defn in TOOL_REGISTRY.values() if group is None or defn.group == group]
