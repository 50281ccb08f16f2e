from xibo_server.models.envelope import ToolResult
from xibo_server.models.layout import (
    AddLayoutRequest,
    AddRegionRequest,
    CopyLayoutRequest,
    DeleteRegionRequest,
    EditLayoutRequest,
    EditRegionRequest,
    GetLayoutsRequest,
    Layout,
    LayoutIdRequest,
    LayoutStatus,
    PublishLayoutRequest,
    Region,
)
from xibo_server.utils.cms import CmsEndpoint, Encoding, call_cms

GET_LAYOUTS = CmsEndpoint("GET", "/api/layout", response=list[Layout])
ADD_LAYOUT = CmsEndpoint("POST", "/api/layout", Encoding.FORM, Layout, "Layout added")
EDIT_LAYOUT = CmsEndpoint(
    "PUT", "/api/layout/{layoutId}", Encoding.FORM, Layout, "Layout updated"
)
DELETE_LAYOUT = CmsEndpoint(
    "DELETE", "/api/layout/{layoutId}", Encoding.NONE, success_message="Layout deleted"
)
COPY_LAYOUT = CmsEndpoint(
    "POST", "/api/layout/copy/{layoutId}", Encoding.FORM, Layout, "Layout copied"
)
PUBLISH_LAYOUT = CmsEndpoint(
    "PUT", "/api/layout/publish/{layoutId}", Encoding.FORM, success_message="Layout published"
)
CHECKOUT_LAYOUT = CmsEndpoint(
    "PUT", "/api/layout/checkout/{layoutId}", Encoding.NONE, Layout, "Layout checked out"
)
DISCARD_LAYOUT = CmsEndpoint(
    "PUT", "/api/layout/discard/{layoutId}", Encoding.NONE, success_message="Draft discarded"
)
RETIRE_LAYOUT = CmsEndpoint(
    "PUT", "/api/layout/retire/{layoutId}", Encoding.NONE, success_message="Layout retired"
)
UNRETIRE_LAYOUT = CmsEndpoint(
    "PUT", "/api/layout/unretire/{layoutId}", Encoding.NONE, success_message="Layout unretired"
)
GET_LAYOUT_STATUS = CmsEndpoint("GET", "/api/layout/status/{layoutId}", response=LayoutStatus)
ADD_REGION = CmsEndpoint("POST", "/api/region/{layoutId}", Encoding.FORM, Region, "Region added")
EDIT_REGION = CmsEndpoint(
    "PUT", "/api/region/{regionId}", Encoding.FORM, Region, "Region updated"
)
DELETE_REGION = CmsEndpoint(
    "DELETE", "/api/region/{regionId}", Encoding.NONE, success_message="Region deleted"
)


async def get_layouts(request: GetLayoutsRequest) -> ToolResult:
    """List layouts. Use parentId to find the editable draft of a published layout."""
    return await call_cms(GET_LAYOUTS, request)


async def add_layout(request: AddLayoutRequest) -> ToolResult:
    """Create a layout from a resolution or by copying a template layout."""
    return await call_cms(ADD_LAYOUT, request)


async def edit_layout(request: EditLayoutRequest) -> ToolResult:
    """Edit a layout's name, description, tags, code or folder."""
    return await call_cms(EDIT_LAYOUT, request)


async def delete_layout(request: LayoutIdRequest) -> ToolResult:
    """Delete a layout by layoutId."""
    return await call_cms(DELETE_LAYOUT, request)


async def copy_layout(request: CopyLayoutRequest) -> ToolResult:
    """Copy a layout under a new name, optionally duplicating its media."""
    return await call_cms(COPY_LAYOUT, request)


async def publish_layout(request: PublishLayoutRequest) -> ToolResult:
    """Publish a layout's draft now or at publishDate."""
    return await call_cms(PUBLISH_LAYOUT, request)


async def checkout_layout(request: LayoutIdRequest) -> ToolResult:
    """Check out a published layout, creating an editable draft."""
    return await call_cms(CHECKOUT_LAYOUT, request)


async def discard_layout(request: LayoutIdRequest) -> ToolResult:
    """Discard the draft of a checked out layout."""
    return await call_cms(DISCARD_LAYOUT, request)


async def retire_layout(request: LayoutIdRequest) -> ToolResult:
    """Retire a layout so it can no longer be scheduled."""
    return await call_cms(RETIRE_LAYOUT, request)


async def unretire_layout(request: LayoutIdRequest) -> ToolResult:
    """Make a retired layout available again."""
    return await call_cms(UNRETIRE_LAYOUT, request)


async def get_layout_status(request: LayoutIdRequest) -> ToolResult:
    """Check whether a layout is valid to publish and its computed duration."""
    return await call_cms(GET_LAYOUT_STATUS, request)


async def add_region(request: AddRegionRequest) -> ToolResult:
    """Add a region to a draft layout."""
    return await call_cms(ADD_REGION, request)


async def edit_region(request: EditRegionRequest) -> ToolResult:
    """Move or resize a region."""
    return await call_cms(EDIT_REGION, request)


async def delete_region(request: DeleteRegionRequest) -> ToolResult:
    """Delete a region and its playlist from a draft layout."""
    return await call_cms(DELETE_REGION, request)


TOOLS = [
    get_layouts,
    add_layout,
    edit_layout,
    delete_layout,
    copy_layout,
    publish_layout,
    checkout_layout,
    discard_layout,
    retire_layout,
    unretire_layout,
    get_layout_status,
    add_region,
    edit_region,
    delete_region,
]
