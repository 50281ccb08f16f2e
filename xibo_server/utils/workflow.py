"""Client for the workflow server's asynchronous run API.

    POST {base}/api/workflows/{id}/start-async                     -> runId
    GET  {base}/api/workflows/{id}/runs/{runId}                    -> status
    GET  {base}/api/workflows/{id}/runs/{runId}/execution-result   -> result
"""

import asyncio
from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from xibo_server.models.workflow import (
    TERMINAL_STATUSES,
    WorkflowRunResult,
    WorkflowStatus,
)


class WorkflowError(RuntimeError):
    """The workflow server rejected a request or answered with an unusable body."""


def _dig(payload: Any, *keys: str) -> Any:
    """First non-empty value among ``payload[key]`` and ``payload["data"][key]``."""
    if not isinstance(payload, dict):
        return None
    nested = payload.get("data") if isinstance(payload.get("data"), dict) else {}
    for key in keys:
        for source in (payload, nested):
            value = source.get(key)
            if value:
                return value
    return None


def parse_status(payload: Any) -> WorkflowStatus:
    raw = str(_dig(payload, "status") or "").lower()
    if raw in ("success", "succeeded"):
        return WorkflowStatus.COMPLETED
    if raw == "canceled":
        return WorkflowStatus.CANCELLED
    try:
        return WorkflowStatus(raw)
    except ValueError:
        return WorkflowStatus.RUNNING


class WorkflowClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _run_path(self, workflow_id: str, run_id: str) -> str:
        return f"/api/workflows/{quote(workflow_id, safe='')}/runs/{quote(run_id, safe='')}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            response = await client.request(method, path, **kwargs)
        if not response.is_success:
            raise WorkflowError(f"{method} {path} failed: {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            raise WorkflowError(f"{method} {path} returned a non-JSON body") from e

    async def start_async(
        self,
        workflow_id: str,
        input: dict[str, Any] | None = None,
        runtime_context: dict[str, Any] | None = None,
    ) -> str:
        payload = await self._request(
            "POST",
            f"/api/workflows/{quote(workflow_id, safe='')}/start-async",
            json={"input": input or {}, "runtimeContext": runtime_context or {}},
        )
        run_id = _dig(payload, "runId", "id")
        if not run_id:
            raise WorkflowError("runId not found in response")
        return str(run_id)

    async def get_run_status(self, workflow_id: str, run_id: str) -> WorkflowStatus:
        return parse_status(await self._request("GET", self._run_path(workflow_id, run_id)))

    async def get_execution_result(self, workflow_id: str, run_id: str) -> Any:
        return await self._request(
            "GET", f"{self._run_path(workflow_id, run_id)}/execution-result"
        )

    async def wait_for_run(
        self,
        workflow_id: str,
        run_id: str,
        *,
        poll_interval_sec: float = 2.0,
        timeout_sec: float = 300.0,
    ) -> WorkflowRunResult:
        """Poll until the run reaches a terminal status, then fetch its result once.

        Neither sleeps nor status requests extend past the deadline. If the deadline passes without
        a terminal status the result is not fetched and the status is TIMEOUT.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_sec
        polls = 0
        log = logger.bind(workflow_id=workflow_id, run_id=run_id)

        while True:
            try:
                # A slow status request counts against the same deadline
                async with asyncio.timeout_at(deadline):
                    status = await self.get_run_status(workflow_id, run_id)
            except TimeoutError:
                status = None
            else:
                polls += 1
                log.debug(f"Workflow poll {polls}: {status}")
                if status in TERMINAL_STATUSES:
                    break
            remaining = deadline - loop.time()
            if status is None or remaining <= 0:
                log.warning(f"Workflow run timed out after {timeout_sec}s ({polls} polls)")
                return WorkflowRunResult(
                    workflowId=workflow_id,
                    runId=run_id,
                    status=WorkflowStatus.TIMEOUT,
                    polls=polls,
                )
            await asyncio.sleep(min(poll_interval_sec, remaining))

        result = await self.get_execution_result(workflow_id, run_id)
        return WorkflowRunResult(
            workflowId=workflow_id, runId=run_id, status=status, polls=polls, result=result
        )

    async def run_with_polling(
        self,
        workflow_id: str,
        input: dict[str, Any] | None = None,
        runtime_context: dict[str, Any] | None = None,
        *,
        poll_interval_sec: float = 2.0,
        timeout_sec: float = 300.0,
    ) -> WorkflowRunResult:
        run_id = await self.start_async(workflow_id, input, runtime_context)
        logger.info(f"Started workflow {workflow_id} run {run_id}")
        return await self.wait_for_run(
            workflow_id,
            run_id,
            poll_interval_sec=poll_interval_sec,
            timeout_sec=timeout_sec,
        )
