from typing import Any

from xibo_server.models.dataset import (
    AddDataSetColumnRequest,
    AddDataSetRequest,
    AddDataSetRowRequest,
    DataSet,
    DataSetColumn,
    DataSetIdRequest,
    DeleteDataSetColumnRequest,
    DeleteDataSetRowRequest,
    EditDataSetRequest,
    GetDataSetDataRequest,
    GetDataSetsRequest,
)
from xibo_server.models.envelope import ToolResult
from xibo_server.utils.cms import CmsEndpoint, Encoding, call_cms

GET_DATASETS = CmsEndpoint("GET", "/api/dataset", response=list[DataSet])
ADD_DATASET = CmsEndpoint("POST", "/api/dataset", Encoding.FORM, DataSet, "Dataset added")
EDIT_DATASET = CmsEndpoint(
    "PUT", "/api/dataset/{dataSetId}", Encoding.FORM, DataSet, "Dataset updated"
)
DELETE_DATASET = CmsEndpoint(
    "DELETE", "/api/dataset/{dataSetId}", Encoding.NONE, success_message="Dataset deleted"
)
GET_COLUMNS = CmsEndpoint("GET", "/api/dataset/{dataSetId}/column", response=list[DataSetColumn])
ADD_COLUMN = CmsEndpoint(
    "POST", "/api/dataset/{dataSetId}/column", Encoding.FORM, DataSetColumn, "Column added"
)
DELETE_COLUMN = CmsEndpoint(
    "DELETE",
    "/api/dataset/{dataSetId}/column/{dataSetColumnId}",
    Encoding.NONE,
    success_message="Column deleted",
)
GET_DATA = CmsEndpoint("GET", "/api/dataset/data/{dataSetId}", response=list[dict[str, Any]])
ADD_ROW = CmsEndpoint(
    "POST", "/api/dataset/data/{dataSetId}", Encoding.FORM, dict[str, Any], "Row added"
)
DELETE_ROW = CmsEndpoint(
    "DELETE", "/api/dataset/data/{dataSetId}/{rowId}", Encoding.NONE, success_message="Row deleted"
)
GET_RSS = CmsEndpoint("GET", "/api/dataset/{dataSetId}/rss")


async def get_datasets(request: GetDataSetsRequest) -> ToolResult:
    """List datasets. Set embed='columns' to include column definitions."""
    return await call_cms(GET_DATASETS, request)


async def add_dataset(request: AddDataSetRequest) -> ToolResult:
    """Create a dataset, optionally synced from a remote JSON URI."""
    return await call_cms(ADD_DATASET, request)


async def edit_dataset(request: EditDataSetRequest) -> ToolResult:
    """Edit a dataset's name, code or remote source settings."""
    return await call_cms(EDIT_DATASET, request)


async def delete_dataset(request: DataSetIdRequest) -> ToolResult:
    """Delete a dataset and its rows."""
    return await call_cms(DELETE_DATASET, request)


async def get_dataset_columns(request: DataSetIdRequest) -> ToolResult:
    """List a dataset's columns. Column IDs are needed to add rows."""
    return await call_cms(GET_COLUMNS, request)


async def add_dataset_column(request: AddDataSetColumnRequest) -> ToolResult:
    """Add a value, formula or remote column to a dataset."""
    return await call_cms(ADD_COLUMN, request)


async def delete_dataset_column(request: DeleteDataSetColumnRequest) -> ToolResult:
    """Delete a dataset column."""
    return await call_cms(DELETE_COLUMN, request)


async def get_dataset_data(request: GetDataSetDataRequest) -> ToolResult:
    """Read a dataset's rows."""
    return await call_cms(GET_DATA, request)


async def add_dataset_row(request: AddDataSetRowRequest) -> ToolResult:
    """Add a row to a dataset. Values are keyed by dataSetColumnId."""
    return await call_cms(ADD_ROW, request)


async def delete_dataset_row(request: DeleteDataSetRowRequest) -> ToolResult:
    """Delete a dataset row."""
    return await call_cms(DELETE_ROW, request)


async def get_dataset_rss(request: DataSetIdRequest) -> ToolResult:
    """List RSS feeds published from a dataset."""
    return await call_cms(GET_RSS, request)


TOOLS = [
    get_datasets,
    add_dataset,
    edit_dataset,
    delete_dataset,
    get_dataset_columns,
    add_dataset_column,
    delete_dataset_column,
    get_dataset_data,
    add_dataset_row,
    delete_dataset_row,
    get_dataset_rss,
]
