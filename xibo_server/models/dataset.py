from typing import Any

from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field, model_serializer


class DataSet(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    dataSetId: int
    dataSet: str
    description: str | None = None
    code: str | None = None
    isRemote: int | None = None
    userId: int | None = None
    lastDataEdit: int | None = None
    owner: str | None = None
    folderId: int | None = None


class DataSetColumn(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    dataSetColumnId: int
    dataSetId: int | None = None
    heading: str
    dataTypeId: int | None = None
    dataSetColumnTypeId: int | None = None
    listContent: str | None = None
    columnOrder: int | None = None
    formula: str | None = None


class DataSetIdRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    dataSetId: int = Field(..., description="ID of the dataset.")


class GetDataSetsRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    dataSetId: int | None = Field(None, description="Filter by dataset ID.")
    dataSet: str | None = Field(None, description="Filter by dataset name.")
    code: str | None = Field(None, description="Filter by code.")
    isRealTime: int | None = Field(None, description="1 for real-time datasets only.")
    folderId: int | None = Field(None, description="Filter by folder ID.")
    embed: str | None = Field(None, description="Extra data to embed, e.g. 'columns'.")


class AddDataSetRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    dataSet: str = Field(..., description="Dataset name.")
    description: str | None = Field(None, description="Description.")
    code: str | None = Field(None, description="Unique code.")
    isRemote: int | None = Field(None, description="1 to sync rows from a remote URI.")
    uri: str | None = Field(None, description="Remote data URI when isRemote=1.")
    method: str | None = Field(None, description="'GET' or 'POST' for the remote URI.")
    refreshRate: int | None = Field(None, description="Remote refresh interval in seconds.")
    dataRoot: str | None = Field(None, description="JSON path to the rows in the remote data.")
    folderId: int | None = Field(None, description="Folder to create the dataset in.")


class EditDataSetRequest(AddDataSetRequest):
    dataSetId: int = Field(..., description="ID of the dataset to edit.")


class AddDataSetColumnRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    dataSetId: int = Field(..., description="ID of the dataset.")
    heading: str = Field(..., description="Column heading.")
    dataTypeId: int = Field(
        1, description="1 string, 2 number, 3 date, 4 external image, 5 library image, 6 html."
    )
    dataSetColumnTypeId: int = Field(1, description="1 value, 2 formula, 3 remote.")
    listContent: str | None = Field(None, description="Comma separated allowed values.")
    columnOrder: int | None = Field(None, description="Display order of the column.")
    formula: str | None = Field(None, description="MySQL formula for formula columns.")
    remoteField: str | None = Field(None, description="Remote field path for remote columns.")
    showFilter: int | None = Field(None, description="1 to show a filter in the UI.")
    showSort: int | None = Field(None, description="1 to allow sorting in the UI.")


class DeleteDataSetColumnRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    dataSetId: int = Field(..., description="ID of the dataset.")
    dataSetColumnId: int = Field(..., description="ID of the column to delete.")


class GetDataSetDataRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    dataSetId: int = Field(..., description="ID of the dataset.")
    start: int | None = Field(None, description="Row offset.")
    length: int | None = Field(None, description="Number of rows to return.")


class AddDataSetRowRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    dataSetId: int = Field(..., description="ID of the dataset.")
    values: dict[str, Any] = Field(
        ...,
        description="Row values keyed by column ID, e.g. {'12': 'Tokyo', '13': 21}. Sent as dataSetColumnId_<id> fields.",
    )

    @model_serializer(mode="wrap")
    def _expand_values(self, handler):
        data = handler(self)
        for column_id, value in (data.pop("values", None) or {}).items():
            data[f"dataSetColumnId_{column_id}"] = value
        return data


class DeleteDataSetRowRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    dataSetId: int = Field(..., description="ID of the dataset.")
    rowId: int = Field(..., description="ID of the row to delete.")
