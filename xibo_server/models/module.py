from typing import Any

from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import AliasChoices, ConfigDict, Field


class Module(OutputBaseModel):
    """An installed widget module (text, clock, image, ...)."""

    model_config = ConfigDict(extra="allow")

    moduleId: str | int = Field(validation_alias=AliasChoices("moduleId", "id"))
    name: str
    type: str | None = None
    dataType: str | None = None
    description: str | None = None
    enabled: int | None = None
    isInstalled: int | bool | None = None
    isError: int | bool | None = None
    regionSpecific: int | None = None
    defaultDuration: int | None = None


class ModuleProperty(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    type: str | None = None
    title: str | None = None
    helpText: str | None = None
    default: Any = None


class ModuleTemplate(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    templateId: str
    type: str | None = None
    dataType: str | None = None
    title: str | None = None
    properties: list[dict[str, Any]] | None = None


class GetModulesRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, description="Filter by module name.")
    extension: str | None = Field(None, description="Filter by file extension handled.")


class ModuleIdRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    moduleId: str = Field(..., description="Module ID, e.g. 'core-text'.")


class GetModuleTemplatesRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    dataType: str = Field(..., description="Data type, e.g. 'article', 'dataset', 'event'.")
    type: str | None = Field(None, description="Template type filter, e.g. 'static'.")


class GetModuleTemplatePropertiesRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    dataType: str = Field(..., description="Data type of the template.")
    templateId: str = Field(..., description="Template ID.")
