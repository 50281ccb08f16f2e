"""Schema helpers shared by the Xibo MCP server and the agent runner."""

from .schema import FlatBaseModel, OutputBaseModel, flatten_schema

__all__ = ["FlatBaseModel", "OutputBaseModel", "flatten_schema"]
