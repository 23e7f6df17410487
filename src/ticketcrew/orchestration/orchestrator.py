"""Workflow orchestrator - drives a ticket through a chain of agent handoffs."""
import asyncio
import logging
import time
from typing import Any, Awaitable, TypeVar

from ticketcrew.agents.factory import AgentFactory
from ticketcrew.agents.protocol import (
    AgentAnalysis,
    AgentRole,
    CancellationToken,
    HandoffDecision,
    Ticket,
)
from ticketcrew.errors import (
    AgentCannotHandle,
    TicketCrewError,
    WorkflowAborted,
    WorkflowCancelled,
)
from ticketcrew.orchestration.metrics import FailureRecord, WorkflowMetrics
from ticketcrew.orchestration.models import MultiAgentResponse, WorkflowContext, WorkflowState

T = TypeVar("T")


class WorkflowOrchestrator:
    """Runs the analyze -> handoff loop for tickets.

    Steps of one ticket run strictly in sequence; separate tickets may be
    processed concurrently against the same orchestrator.
    """

    def __init__(
        self,
        factory: AgentFactory,
        *,
        hop_budget: int | None = None,
        default_role: AgentRole = AgentRole.PROJECT_MANAGER,
        step_timeout: float | None = None,
        execute_tools: bool = False,
        logger: logging.Logger | None = None,
    ):
        if hop_budget is not None and hop_budget < 0:
            raise ValueError("hop_budget must be >= 0")
        if step_timeout is not None and step_timeout <= 0:
            raise ValueError("step_timeout must be > 0")
        self.factory = factory
        self.default_role = default_role
        self.step_timeout = step_timeout
        self.execute_tools = execute_tools
        self.logger = logger or logging.getLogger(__name__)
        self.metrics = WorkflowMetrics()
        self._hop_budget = hop_budget

    @property
    def hop_budget(self) -> int:
        """Maximum handoffs per ticket; defaults to the number of registered roles."""
        if self._hop_budget is not None:
            return self._hop_budget
        return len(self.factory.get_available_roles())

    def select_entry_agent(self, ticket: Ticket) -> AgentRole:
        """First registered role whose agent accepts the ticket, else the default role."""
        for role in self.factory.get_available_roles():
            if not self.factory.can_create_agent(role):
                continue
            try:
                agent = self.factory.create_agent(role)
            except TicketCrewError as e:
                self.logger.warning("Skipping %s during entry selection: %s", role.value, e)
                continue
            if agent.can_handle(ticket):
                return role
        return self.default_role

    async def process_ticket(
        self,
        ticket: Ticket,
        entry_role: AgentRole | str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> MultiAgentResponse:
        """Run the ticket through its handoff chain and return the combined result.

        Raises WorkflowAborted (WorkflowCancelled when cancelled) with the
        incomplete state attached if any step fails.
        """
        started = time.perf_counter()
        role = AgentRole.parse(entry_role) if entry_role else self.select_entry_agent(ticket)
        state = WorkflowState(
            ticket_id=ticket.id,
            current_agent=role,
            context=WorkflowContext(ticket=ticket),
        )
        task_results: list[dict[str, Any]] = []
        budget = self.hop_budget
        self.logger.info("Processing ticket %s starting with %s", ticket.id, role.value)

        while True:
            current = state.current_agent
            try:
                decision = await self._run_step(state, current, cancel_token, task_results)
            except WorkflowCancelled as e:
                e.state = state
                self._record_abort(state, current, "cancelled", str(e))
                raise
            except asyncio.TimeoutError as e:
                message = f"{current.value} step timed out after {self.step_timeout}s"
                self._record_abort(state, current, "timeout", message)
                raise WorkflowAborted(
                    message, ticket_id=ticket.id, role=current, state=state
                ) from e
            except Exception as e:
                message = f"{current.value} step failed: {e}"
                self._record_abort(state, current, type(e).__name__, message)
                raise WorkflowAborted(
                    message, ticket_id=ticket.id, role=current, state=state
                ) from e

            next_role = self._next_role(state, decision, budget)
            if next_role is None:
                break
            reason = f"{decision.category}: {current.value} -> {next_role.value}"
            self.metrics.record_handoff(current.value, next_role.value)
            state.hand_off(next_role, reason)
            self.logger.info("Ticket %s handed off (%s)", ticket.id, reason)

        state.is_complete = True
        elapsed_ms = (time.perf_counter() - started) * 1000
        insights = list(state.context.insights)
        response = MultiAgentResponse(
            ticket_id=ticket.id,
            workflow=state,
            final_recommendations=list(state.context.recommendations),
            confidence=insights[-1].confidence,
            processing_time_ms=elapsed_ms,
            agents_involved=state.agents_involved,
            handoff_count=state.handoff_count,
            agent_analyses=insights,
            task_results=task_results,
        )
        self.metrics.record_completion(elapsed_ms, state.handoff_count)
        self.logger.info(
            "Ticket %s complete: %d agent(s), confidence %.2f",
            ticket.id, len(response.agents_involved), response.confidence,
        )
        return response

    async def _run_step(
        self,
        state: WorkflowState,
        role: AgentRole,
        cancel_token: CancellationToken | None,
        task_results: list[dict[str, Any]],
    ) -> HandoffDecision | None:
        ticket = state.context.ticket
        if cancel_token is not None:
            cancel_token.raise_if_cancelled(ticket.id, role)

        agent = self.factory.create_agent(role)
        analysis = await self._with_timeout(agent.analyze(ticket, cancel_token))
        state.context.add_insight(analysis)
        self.metrics.record_step(role.value, analysis.confidence)
        self.logger.debug("%s analysis for ticket %s: %s", role.value, ticket.id, analysis.complexity)

        if self.execute_tools:
            result = await self._with_timeout(
                agent.execute(ticket, {"ticket_id": ticket.id}, cancel_token)
            )
            task_results.append({"role": role.value, **result.to_dict()})
            if not result.is_error:
                state.context.merge_recommendations(result.recommendations)

        return await self._handoff_decision(agent, state.context)

    async def _handoff_decision(self, agent: Any, context: WorkflowContext) -> HandoffDecision | None:
        """Handoff decision, falling back to should_handoff for agents without evaluate_handoff."""
        evaluate = getattr(agent, "evaluate_handoff", None)
        if evaluate is not None:
            return evaluate(context)
        target = await agent.should_handoff(context)
        if target is None:
            return None
        return HandoffDecision(role=AgentRole.parse(target), category="handoff", keyword="")

    async def _with_timeout(self, awaitable: Awaitable[T]) -> T:
        if self.step_timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self.step_timeout)

    def _next_role(
        self, state: WorkflowState, decision: HandoffDecision | None, budget: int
    ) -> AgentRole | None:
        if decision is None or decision.role is state.current_agent:
            return None
        if not self.factory.can_create_agent(decision.role):
            self.logger.warning(
                "Ticket %s: handoff target %s is not available, completing with %s",
                state.ticket_id, decision.role.value, state.current_agent.value,
            )
            return None
        if state.handoff_count >= budget:
            self.logger.info(
                "Ticket %s: hop budget of %d reached, completing with %s",
                state.ticket_id, budget, state.current_agent.value,
            )
            return None
        return decision.role

    def _record_abort(
        self, state: WorkflowState, role: AgentRole, error_type: str, message: str
    ) -> None:
        state.is_complete = False
        state.abort_reason = message
        self.metrics.record_failure(
            FailureRecord(
                ticket_id=state.ticket_id,
                role=role.value,
                error_type=error_type,
                error_message=message,
            )
        )
        self.logger.error("Workflow for ticket %s aborted: %s", state.ticket_id, message)

    async def route_to_agent(
        self,
        ticket: Ticket,
        role: AgentRole | str,
        cancel_token: CancellationToken | None = None,
    ) -> AgentAnalysis:
        """Single analysis by a specific agent, bypassing handoffs."""
        role = AgentRole.parse(role)
        agent = self.factory.create_agent(role)
        if not agent.can_handle(ticket):
            raise AgentCannotHandle(role, ticket.id)
        return await agent.analyze(ticket, cancel_token)

    def get_workflow_metrics(self) -> dict[str, Any]:
        stats = self.metrics.get_stats()
        stats["hop_budget"] = self.hop_budget
        stats["recent_failures"] = self.metrics.get_recent_failures()
        return stats

    def reset_metrics(self) -> None:
        self.metrics.reset()

    def get_agent_statuses(self) -> list[dict[str, Any]]:
        """describe() of every registered agent, or the reason it cannot be built."""
        statuses = []
        for role in self.factory.get_available_roles():
            try:
                agent = self.factory.create_agent(role)
            except TicketCrewError as e:
                statuses.append({"role": role.value, "available": False, "error": str(e)})
                continue
            status = agent.describe() if hasattr(agent, "describe") else {"role": role.value}
            status["available"] = True
            statuses.append(status)
        return statuses
