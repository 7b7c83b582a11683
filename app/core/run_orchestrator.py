# app/core/run_orchestrator.py
# Starts a run on a conversation and polls it to a terminal state, answering tool calls on the way.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

import asyncio
from app.core.errors import RemoteError
from app.core.tool_dispatcher import ToolCallDispatcher
from app.models.common import RunResult, RunSnapshot, TERMINAL_RUN_STATUSES
from app.services.assistant_client import AssistantGateway
from app.utils.logger import console


class RunOrchestrator:
    """
    Drives a single run:

        queued -> in_progress -> completed | failed | cancelled | expired | incomplete
                      ^   |
                      +-- requires_action (tool outputs submitted)

    Polling uses a fixed interval and a fixed ceiling on the total number of polls,
    `requires_action` cycles included. Reaching the ceiling gives outcome `timed_out`.
    """

    def __init__(
        self,
        gateway: AssistantGateway,
        dispatcher: ToolCallDispatcher,
        poll_interval: float = 1.0,
        max_polls: int = 30,
    ):
        self._gateway = gateway
        self._dispatcher = dispatcher
        self._poll_interval = poll_interval
        self._max_polls = max_polls

    async def run_and_await(self, conversation_id: str, assistant_id: str) -> RunResult:
        """
        Raises:
            RemoteError: If the run cannot be started. Failures while polling end the loop instead.
        """
        run = await self._gateway.create_run(conversation_id, assistant_id)
        console.info(f"Started run {run.id} on thread {conversation_id} (status: {run.status}).")

        polls = 0
        while run.status not in TERMINAL_RUN_STATUSES and polls < self._max_polls:
            await asyncio.sleep(self._poll_interval)
            polls += 1
            try:
                run = await self._gateway.retrieve_run(conversation_id, run.id)
                if run.status == "requires_action":
                    await self._answer_tool_calls(conversation_id, run)
            except RemoteError as e:
                console.error(f"Polling run {run.id} broke off after {polls} poll(s): {e}")
                return RunResult(run_id=run.id, status=run.status, outcome="transport_error", polls=polls)

        return self._result(run, polls)

    async def _answer_tool_calls(self, conversation_id: str, run: RunSnapshot) -> None:
        console.info(f"Run {run.id} requires action: {[call.name for call in run.tool_calls]}")
        outputs = await self._dispatcher.handle(conversation_id, run.tool_calls)
        if outputs:
            # All outputs of one `requires_action` go back in a single submission.
            await self._gateway.submit_tool_outputs(conversation_id, run.id, outputs)
            console.info(f"Submitted {len(outputs)} tool output(s) for run {run.id}.")

    def _result(self, run: RunSnapshot, polls: int) -> RunResult:
        if run.status == "completed":
            console.success(f"Run {run.id} completed after {polls} poll(s).")
            return RunResult(run_id=run.id, status=run.status, outcome="completed", polls=polls)
        if run.status in TERMINAL_RUN_STATUSES:
            console.error(f"Run {run.id} ended with status '{run.status}' after {polls} poll(s).")
            return RunResult(run_id=run.id, status=run.status, outcome="failed", polls=polls)
        console.error(f"Run {run.id} still '{run.status}' after {polls} poll(s); giving up.")
        return RunResult(run_id=run.id, status=run.status, outcome="timed_out", polls=polls)
