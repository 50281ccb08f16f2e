from enum import StrEnum
from typing import Any

from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field


class WorkflowStatus(StrEnum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    TIMEOUT = "timeout"


TERMINAL_STATUSES = frozenset(
    {WorkflowStatus.COMPLETED, WorkflowStatus.FAILED, WorkflowStatus.CANCELLED}
)


class WorkflowRunResult(OutputBaseModel):
    model_config = ConfigDict(extra="forbid")

    workflowId: str
    runId: str
    status: WorkflowStatus
    polls: int = Field(0, description="Number of status polls performed.")
    result: Any = None


class StartWorkflowRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    workflowId: str = Field(..., description="Workflow ID, e.g. 'marketResearchWorkflow'.")
    input: dict[str, Any] | None = Field(None, description="Workflow input data.")
    runtimeContext: dict[str, Any] | None = Field(
        None, description="Runtime context values passed to every step."
    )


class WorkflowRunRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    workflowId: str = Field(..., description="Workflow ID.")
    runId: str = Field(..., description="Run ID returned by start_workflow_async.")


class RunWorkflowWithPollingRequest(StartWorkflowRequest):
    pollIntervalSec: float = Field(2, gt=0, description="Seconds between status polls.")
    timeoutSec: float = Field(300, gt=0, description="Give up after this many seconds.")
