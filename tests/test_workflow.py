"""Tests for workflow polling and the workflow tools."""

import asyncio
import json
import time

import httpx
import pytest

from xibo_server.models.workflow import (
    RunWorkflowWithPollingRequest,
    StartWorkflowRequest,
    WorkflowStatus,
)
from xibo_server.tools import workflow as workflow_tools
from xibo_server.utils.workflow import WorkflowClient, WorkflowError, parse_status

BASE_URL = "http://workflows.example.test"
RUN_PATH = "/api/workflows/marketResearchWorkflow/runs/run-1"


class FakeWorkflowServer:
    def __init__(self, statuses: list[str]) -> None:
        self.statuses = statuses
        self.status_polls = 0
        self.result_fetches = 0
        self.start_bodies: list[bytes] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/start-async"):
            self.start_bodies.append(request.content)
            return httpx.Response(200, json={"runId": "run-1"})
        if path == f"{RUN_PATH}/execution-result":
            self.result_fetches += 1
            return httpx.Response(200, json={"result": {"summarizedText": "done"}})
        if path == RUN_PATH:
            status = self.statuses[min(self.status_polls, len(self.statuses) - 1)]
            self.status_polls += 1
            return httpx.Response(200, json={"status": status})
        return httpx.Response(404, json={"error": "not found"})

    def client(self) -> WorkflowClient:
        return WorkflowClient(BASE_URL, transport=httpx.MockTransport(self.handle))


class TestWaitForRun:
    @pytest.mark.asyncio
    async def test_completed_on_third_poll(self) -> None:
        server = FakeWorkflowServer(["running", "running", "success"])

        run = await server.client().run_with_polling(
            "marketResearchWorkflow", {"topic": "signage"}, poll_interval_sec=0.01
        )

        assert run.status == WorkflowStatus.COMPLETED
        assert run.polls == 3, f"Expected 3 polls, got {run.polls}"
        assert server.status_polls == 3
        assert server.result_fetches == 1, "Result must be fetched exactly once"
        assert run.result == {"result": {"summarizedText": "done"}}

    @pytest.mark.asyncio
    async def test_timeout_stops_polling_without_fetching_result(self) -> None:
        server = FakeWorkflowServer(["running"])

        started = time.monotonic()
        run = await server.client().wait_for_run(
            "marketResearchWorkflow", "run-1", poll_interval_sec=0.05, timeout_sec=0.2
        )
        elapsed = time.monotonic() - started

        assert run.status == WorkflowStatus.TIMEOUT
        assert server.result_fetches == 0
        assert elapsed < 1.0, f"Polling overran its timeout: {elapsed:.2f}s"

    @pytest.mark.asyncio
    async def test_slow_status_request_is_cut_at_timeout(self) -> None:
        async def stalled(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200, json={"status": "running"})

        client = WorkflowClient(BASE_URL, transport=httpx.MockTransport(stalled))

        started = time.monotonic()
        run = await client.wait_for_run(
            "marketResearchWorkflow", "run-1", poll_interval_sec=0.05, timeout_sec=0.2
        )
        elapsed = time.monotonic() - started

        assert run.status == WorkflowStatus.TIMEOUT
        assert run.polls == 0, f"No poll completed, got {run.polls}"
        assert elapsed < 1.0, f"Status request overran the timeout: {elapsed:.2f}s"

    @pytest.mark.asyncio
    async def test_failed_run_still_fetches_result(self) -> None:
        server = FakeWorkflowServer(["failed"])

        run = await server.client().wait_for_run("marketResearchWorkflow", "run-1")

        assert run.status == WorkflowStatus.FAILED
        assert server.status_polls == 1
        assert server.result_fetches == 1

    @pytest.mark.asyncio
    async def test_missing_run_id_raises(self) -> None:
        client = WorkflowClient(
            BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(200, json={}))
        )

        with pytest.raises(WorkflowError, match="runId"):
            await client.start_async("marketResearchWorkflow")


class TestParseStatus:
    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            ({"status": "success"}, WorkflowStatus.COMPLETED),
            ({"data": {"status": "completed"}}, WorkflowStatus.COMPLETED),
            ({"status": "canceled"}, WorkflowStatus.CANCELLED),
            ({"status": "failed"}, WorkflowStatus.FAILED),
            ({"status": "suspended"}, WorkflowStatus.RUNNING),
            ({}, WorkflowStatus.RUNNING),
        ],
    )
    def test_status_mapping(self, payload, expected) -> None:
        assert parse_status(payload) == expected


class TestWorkflowTools:
    @pytest.mark.asyncio
    async def test_run_with_polling_success(self, monkeypatch: pytest.MonkeyPatch) -> None:
        server = FakeWorkflowServer(["running", "completed"])
        monkeypatch.setattr(workflow_tools, "get_workflow_client", server.client)

        result = await workflow_tools.run_workflow_with_polling(
            RunWorkflowWithPollingRequest(
                workflowId="marketResearchWorkflow",
                input={"topic": "digital signage"},
                pollIntervalSec=0.01,
            )
        )

        assert result.success, f"Expected success: {result}"
        assert result.data["polls"] == 2
        assert json.loads(server.start_bodies[0])["input"] == {"topic": "digital signage"}

    @pytest.mark.asyncio
    async def test_run_with_polling_failure_is_not_success(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        server = FakeWorkflowServer(["failed"])
        monkeypatch.setattr(workflow_tools, "get_workflow_client", server.client)

        result = await workflow_tools.run_workflow_with_polling(
            RunWorkflowWithPollingRequest(workflowId="marketResearchWorkflow")
        )

        assert not result.success
        assert result.error == "failed"
        assert result.data["status"] == "failed"

    @pytest.mark.asyncio
    async def test_server_error_becomes_envelope(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def client() -> WorkflowClient:
            return WorkflowClient(
                BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(500))
            )

        monkeypatch.setattr(workflow_tools, "get_workflow_client", client)

        result = await workflow_tools.start_workflow_async(
            StartWorkflowRequest(workflowId="marketResearchWorkflow")
        )

        assert not result.success
        assert result.message.startswith("[OPERATION_FAILED]"), result.message
