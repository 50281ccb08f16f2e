import httpx
from loguru import logger

from xibo_server.models.envelope import ToolResult
from xibo_server.models.workflow import (
    RunWorkflowWithPollingRequest,
    StartWorkflowRequest,
    WorkflowRunRequest,
    WorkflowStatus,
)
from xibo_server.utils.config import get_settings
from xibo_server.utils.errors import ErrorCode
from xibo_server.utils.workflow import WorkflowClient, WorkflowError


def get_workflow_client() -> WorkflowClient:
    settings = get_settings()
    return WorkflowClient(settings.workflow_base_url, timeout=settings.HTTP_TIMEOUT_SECONDS)


def _failure(e: Exception) -> ToolResult:
    if isinstance(e, WorkflowError):
        return ToolResult.fail(ErrorCode.OPERATION_FAILED, str(e))
    return ToolResult.fail(
        ErrorCode.NETWORK_ERROR, "Request to workflow server failed", error=repr(e)
    )


async def start_workflow_async(request: StartWorkflowRequest) -> ToolResult:
    """Start a workflow run without waiting. Returns the runId to poll."""
    try:
        run_id = await get_workflow_client().start_async(
            request.workflowId, request.input, request.runtimeContext
        )
    except (WorkflowError, httpx.HTTPError) as e:
        return _failure(e)
    return ToolResult.ok({"workflowId": request.workflowId, "runId": run_id}, "Workflow started")


async def get_workflow_run_status(request: WorkflowRunRequest) -> ToolResult:
    """Current status of a workflow run: running, completed, failed or cancelled."""
    try:
        status = await get_workflow_client().get_run_status(request.workflowId, request.runId)
    except (WorkflowError, httpx.HTTPError) as e:
        return _failure(e)
    return ToolResult.ok({"runId": request.runId, "status": status.value})


async def get_workflow_execution_result(request: WorkflowRunRequest) -> ToolResult:
    """Final output of a finished workflow run."""
    try:
        result = await get_workflow_client().get_execution_result(
            request.workflowId, request.runId
        )
    except (WorkflowError, httpx.HTTPError) as e:
        return _failure(e)
    return ToolResult.ok(result)


async def run_workflow_with_polling(request: RunWorkflowWithPollingRequest) -> ToolResult:
    """Start a workflow and wait for it, polling its status at a fixed interval.

    Succeeds only when the run completes. Failed and cancelled runs carry the
    run's result; a run still going at the timeout carries none.
    """
    try:
        run = await get_workflow_client().run_with_polling(
            request.workflowId,
            request.input,
            request.runtimeContext,
            poll_interval_sec=request.pollIntervalSec,
            timeout_sec=request.timeoutSec,
        )
    except (WorkflowError, httpx.HTTPError) as e:
        return _failure(e)

    data = run.model_dump(mode="json")
    if run.status == WorkflowStatus.COMPLETED:
        return ToolResult.ok(data, f"Workflow {request.workflowId} completed")
    logger.warning(f"Workflow {request.workflowId} run {run.runId} ended as {run.status}")
    return ToolResult.fail(
        ErrorCode.OPERATION_FAILED,
        f"Workflow {request.workflowId} ended with status {run.status.value}",
        error=run.status.value,
        data=data,
    )


TOOLS = [
    start_workflow_async,
    get_workflow_run_status,
    get_workflow_execution_result,
    run_workflow_with_polling,
]
