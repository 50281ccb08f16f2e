from xibo_server.models.envelope import ToolResult
from xibo_server.models.module import (
    GetModulesRequest,
    GetModuleTemplatePropertiesRequest,
    GetModuleTemplatesRequest,
    Module,
    ModuleIdRequest,
    ModuleProperty,
    ModuleTemplate,
)
from xibo_server.utils.cms import CmsEndpoint, call_cms

GET_MODULES = CmsEndpoint("GET", "/api/module", response=list[Module])
GET_MODULE_PROPERTIES = CmsEndpoint(
    "GET", "/api/module/properties/{moduleId}", response=list[ModuleProperty]
)
GET_MODULE_TEMPLATES = CmsEndpoint(
    "GET", "/api/module/templates/{dataType}", response=list[ModuleTemplate]
)
GET_MODULE_TEMPLATE_PROPERTIES = CmsEndpoint(
    "GET",
    "/api/module/template/{dataType}/properties/{templateId}",
    response=list[ModuleProperty],
)


async def get_modules(request: GetModulesRequest) -> ToolResult:
    """List installed widget modules and the data type each consumes."""
    return await call_cms(GET_MODULES, request)


async def get_module_properties(request: ModuleIdRequest) -> ToolResult:
    """List the configurable properties of a module, for use with edit_widget."""
    return await call_cms(GET_MODULE_PROPERTIES, request)


async def get_module_templates(request: GetModuleTemplatesRequest) -> ToolResult:
    """List the templates available for a data type."""
    return await call_cms(GET_MODULE_TEMPLATES, request)


async def get_module_template_properties(
    request: GetModuleTemplatePropertiesRequest,
) -> ToolResult:
    """List the properties of one module template."""
    return await call_cms(GET_MODULE_TEMPLATE_PROPERTIES, request)


TOOLS = [
    get_modules,
    get_module_properties,
    get_module_templates,
    get_module_template_properties,
]
