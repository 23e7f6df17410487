"""Tests for the workflow orchestrator."""
import asyncio
import logging

import pytest

from ticketcrew.agents.factory import AgentFactory, profile_constructor
from ticketcrew.agents.protocol import (
    AgentAnalysis,
    AgentCreationOptions,
    AgentRole,
    AgentTool,
    CancellationToken,
)
from ticketcrew.agents.roles import get_profile
from ticketcrew.agents.roles.protocol import ClassificationRule, HandoffTrigger, RoleProfile
from ticketcrew.errors import AgentCannotHandle, WorkflowAborted, WorkflowCancelled
from ticketcrew.orchestration.orchestrator import WorkflowOrchestrator


def bouncing_profile(role, target, category):
    """Profile that always hands tickets mentioning ``category`` to ``target``."""
    return RoleProfile(
        role=role,
        summary=f"{role.value} test profile",
        capabilities=(),
        rules=(),
        fallback=ClassificationRule(
            name="noop", when=(), actions=(f"{role.value} step", "check", "report"),
            confidence=0.7,
        ),
        handoff_triggers=(HandoffTrigger(category, target),),
    )


class FailingAgent:
    def __init__(self, spec):
        self.role = spec.role

    def can_handle(self, ticket):
        return True

    async def analyze(self, ticket, cancel_token=None):
        raise RuntimeError("model exploded")


class SlowAgent(FailingAgent):
    async def analyze(self, ticket, cancel_token=None):
        await asyncio.sleep(1)
        return AgentAnalysis(role=self.role, analysis="late", confidence=0.5)


@pytest.fixture
def orchestrator(default_factory):
    return WorkflowOrchestrator(default_factory)


def test_constructor_validates_arguments(default_factory):
    with pytest.raises(ValueError):
        WorkflowOrchestrator(default_factory, hop_budget=-1)
    with pytest.raises(ValueError):
        WorkflowOrchestrator(default_factory, step_timeout=0)


def test_hop_budget_defaults_to_registered_role_count(orchestrator, registry):
    assert orchestrator.hop_budget == 6
    assert WorkflowOrchestrator(AgentFactory(registry)).hop_budget == 0


def test_entry_agent_selection(orchestrator, make_ticket):
    assert orchestrator.select_entry_agent(
        make_ticket("App crashes with exception on login", "Users report an error and crash")
    ) is AgentRole.SOFTWARE_ENGINEER
    assert orchestrator.select_entry_agent(make_ticket("WordPress plugin broken")) is (
        AgentRole.WORDPRESS_DEVELOPER
    )
    assert orchestrator.select_entry_agent(make_ticket("Hello")) is AgentRole.PROJECT_MANAGER


@pytest.mark.asyncio
async def test_single_agent_workflow(orchestrator, make_ticket):
    ticket = make_ticket("App crashes with exception on login", "Users report an error and crash")

    response = await orchestrator.process_ticket(ticket)

    assert response.agents_involved == [AgentRole.SOFTWARE_ENGINEER]
    assert response.handoff_count == 0
    assert response.workflow.is_complete
    assert response.final_agent is AgentRole.SOFTWARE_ENGINEER
    assert len(response.final_recommendations) == 3
    assert response.confidence == response.agent_analyses[-1].confidence


@pytest.mark.asyncio
async def test_handoff_chain(orchestrator, make_ticket):
    ticket = make_ticket("WordPress plugin broken", ticket_id=42)

    response = await orchestrator.process_ticket(ticket, entry_role="project_manager")

    assert response.agents_involved == [
        AgentRole.PROJECT_MANAGER,
        AgentRole.WORDPRESS_DEVELOPER,
    ]
    assert response.handoff_count == 1
    assert response.workflow.previous_agents == [AgentRole.PROJECT_MANAGER]
    assert response.workflow.handoff_reason == (
        "wordpress: PROJECT_MANAGER -> WORDPRESS_DEVELOPER"
    )
    # recommendations from both agents, without duplicates
    assert len(response.final_recommendations) == len(set(response.final_recommendations))
    assert len(response.final_recommendations) == 6


@pytest.mark.asyncio
async def test_infrastructure_handoff_from_engineer(orchestrator, make_ticket):
    ticket = make_ticket("Server keeps restarting")

    response = await orchestrator.process_ticket(ticket, entry_role=AgentRole.SOFTWARE_ENGINEER)

    assert response.agents_involved == [AgentRole.SOFTWARE_ENGINEER, AgentRole.DEVOPS]


@pytest.mark.asyncio
async def test_zero_hop_budget_keeps_entry_agent(default_factory, make_ticket):
    orchestrator = WorkflowOrchestrator(default_factory, hop_budget=0)

    response = await orchestrator.process_ticket(
        make_ticket("WordPress plugin broken"), entry_role=AgentRole.PROJECT_MANAGER
    )

    assert response.agents_involved == [AgentRole.PROJECT_MANAGER]
    assert response.workflow.is_complete


@pytest.mark.asyncio
async def test_ping_pong_handoffs_stop_at_budget(registry, make_ticket):
    registry.register(
        AgentRole.DEVOPS,
        profile_constructor(bouncing_profile(AgentRole.DEVOPS, AgentRole.QA_TESTER, "testing")),
    )
    registry.register(
        AgentRole.QA_TESTER,
        profile_constructor(
            bouncing_profile(AgentRole.QA_TESTER, AgentRole.DEVOPS, "infrastructure")
        ),
    )
    orchestrator = WorkflowOrchestrator(AgentFactory(registry))

    response = await orchestrator.process_ticket(
        make_ticket("Test server is down"), entry_role=AgentRole.DEVOPS
    )

    assert response.handoff_count == 2
    assert response.agents_involved == [AgentRole.DEVOPS, AgentRole.QA_TESTER, AgentRole.DEVOPS]
    assert response.final_recommendations == [
        "DEVOPS step", "check", "report", "QA_TESTER step",
    ]


@pytest.mark.asyncio
async def test_unregistered_handoff_target_completes_with_warning(registry, make_ticket, caplog):
    registry.register(
        AgentRole.PROJECT_MANAGER, profile_constructor(get_profile(AgentRole.PROJECT_MANAGER))
    )
    orchestrator = WorkflowOrchestrator(AgentFactory(registry))

    with caplog.at_level(logging.WARNING):
        response = await orchestrator.process_ticket(
            make_ticket("WordPress plugin broken"), entry_role=AgentRole.PROJECT_MANAGER
        )

    assert response.agents_involved == [AgentRole.PROJECT_MANAGER]
    assert response.workflow.is_complete
    assert "WORDPRESS_DEVELOPER is not available" in caplog.text


@pytest.mark.asyncio
async def test_agent_failure_aborts_with_state(registry, make_ticket):
    registry.register(AgentRole.DEVOPS, FailingAgent)
    orchestrator = WorkflowOrchestrator(AgentFactory(registry))

    with pytest.raises(WorkflowAborted) as exc_info:
        await orchestrator.process_ticket(make_ticket("Outage", ticket_id=9), AgentRole.DEVOPS)

    error = exc_info.value
    assert error.role is AgentRole.DEVOPS
    assert error.ticket_id == 9
    assert not error.state.is_complete
    assert "model exploded" in error.state.abort_reason
    assert isinstance(error.__cause__, RuntimeError)

    metrics = orchestrator.get_workflow_metrics()
    assert metrics["failed"] == 1
    assert metrics["failures_by_error_type"] == {"RuntimeError": 1}
    assert metrics["recent_failures"][0]["ticket_id"] == 9


@pytest.mark.asyncio
async def test_unregistered_entry_role_aborts(registry, make_ticket):
    orchestrator = WorkflowOrchestrator(AgentFactory(registry))

    with pytest.raises(WorkflowAborted) as exc_info:
        await orchestrator.process_ticket(make_ticket("Anything"), AgentRole.DEVOPS)

    assert "No agent registered" in str(exc_info.value)


@pytest.mark.asyncio
async def test_step_timeout_aborts(registry, make_ticket):
    registry.register(AgentRole.DEVOPS, SlowAgent)
    orchestrator = WorkflowOrchestrator(AgentFactory(registry), step_timeout=0.01)

    with pytest.raises(WorkflowAborted) as exc_info:
        await orchestrator.process_ticket(make_ticket("Outage"), AgentRole.DEVOPS)

    assert "timed out" in str(exc_info.value)
    assert orchestrator.get_workflow_metrics()["failures_by_error_type"] == {"timeout": 1}


@pytest.mark.asyncio
async def test_agents_with_only_should_handoff_can_hand_off(registry, make_ticket):
    class MinimalAgent:
        """Implements analyze/can_handle/should_handoff and nothing else."""

        targets = {AgentRole.QA_TESTER: "devops"}

        def __init__(self, spec):
            self.role = spec.role

        def can_handle(self, ticket):
            return True

        async def analyze(self, ticket, cancel_token=None):
            return AgentAnalysis(role=self.role, analysis="looked", confidence=0.8)

        async def should_handoff(self, context):
            return self.targets.get(self.role)

    registry.register(AgentRole.QA_TESTER, MinimalAgent)
    registry.register(AgentRole.DEVOPS, MinimalAgent)
    orchestrator = WorkflowOrchestrator(AgentFactory(registry))

    response = await orchestrator.process_ticket(make_ticket("Flaky test"), AgentRole.QA_TESTER)

    assert response.agents_involved == [AgentRole.QA_TESTER, AgentRole.DEVOPS]
    assert response.handoff_count == 1


@pytest.mark.asyncio
async def test_step_timeout_releases_singleton_agent(registry, make_ticket):
    async def stall(params):
        await asyncio.sleep(1)

    tool = AgentTool(
        name="stall", description="Hangs", parameters={}, execute=stall, triggers=("stalled",),
    )
    registry.register(
        AgentRole.DEVOPS,
        profile_constructor(get_profile(AgentRole.DEVOPS)),
        singleton=True,
        defaults=AgentCreationOptions(tools=[tool]),
    )
    factory = AgentFactory(registry)
    orchestrator = WorkflowOrchestrator(factory, step_timeout=0.05, execute_tools=True)

    with pytest.raises(WorkflowAborted):
        await orchestrator.process_ticket(make_ticket("Nightly cron stalled"), AgentRole.DEVOPS)

    assert factory.create_agent(AgentRole.DEVOPS).get_metrics()["in_flight"] == 0


@pytest.mark.asyncio
async def test_cancelled_workflow_raises_with_state(orchestrator, make_ticket):
    token = CancellationToken()
    token.cancel("operator request")

    with pytest.raises(WorkflowCancelled) as exc_info:
        await orchestrator.process_ticket(
            make_ticket("API error"), AgentRole.SOFTWARE_ENGINEER, cancel_token=token
        )

    assert exc_info.value.state is not None
    assert exc_info.value.state.context.insights == []
    assert orchestrator.get_workflow_metrics()["failures_by_error_type"] == {"cancelled": 1}


@pytest.mark.asyncio
async def test_execute_tools_collects_task_results(default_factory, make_ticket):
    orchestrator = WorkflowOrchestrator(default_factory, execute_tools=True)
    ticket = make_ticket("App crashes with exception on login")

    response = await orchestrator.process_ticket(ticket, AgentRole.SOFTWARE_ENGINEER)

    assert response.task_results[0]["role"] == "SOFTWARE_ENGINEER"
    assert response.task_results[0]["tool"] == "analyze_code"
    assert any(r.startswith("Code analysis completed") for r in response.final_recommendations)


@pytest.mark.asyncio
async def test_concurrent_tickets_share_singletons(orchestrator, make_ticket):
    tickets = [make_ticket("API error", ticket_id=i) for i in range(5)]

    responses = await asyncio.gather(
        *(orchestrator.process_ticket(t, AgentRole.SOFTWARE_ENGINEER) for t in tickets)
    )

    assert [r.ticket_id for r in responses] == list(range(5))
    agent = orchestrator.factory.create_agent(AgentRole.SOFTWARE_ENGINEER)
    assert sorted(agent.memory.ticket_ids()) == list(range(5))
    assert orchestrator.get_workflow_metrics()["completed"] == 5


@pytest.mark.asyncio
async def test_route_to_agent(orchestrator, make_ticket):
    analysis = await orchestrator.route_to_agent(make_ticket("API error"), "software_engineer")

    assert analysis.role is AgentRole.SOFTWARE_ENGINEER

    with pytest.raises(AgentCannotHandle):
        await orchestrator.route_to_agent(make_ticket("Theme colours look off"), AgentRole.SOFTWARE_ENGINEER)


@pytest.mark.asyncio
async def test_metrics_and_reset(orchestrator, make_ticket):
    await orchestrator.process_ticket(make_ticket("WordPress plugin broken"), AgentRole.PROJECT_MANAGER)

    metrics = orchestrator.get_workflow_metrics()
    assert metrics["completed"] == 1
    assert metrics["average_handoffs"] == 1.0
    assert metrics["hop_budget"] == 6
    assert metrics["agent_utilization"]["PROJECT_MANAGER"]["handoffs_out"] == 1
    assert metrics["agent_utilization"]["WORDPRESS_DEVELOPER"]["handoffs_in"] == 1

    orchestrator.reset_metrics()
    assert orchestrator.get_workflow_metrics()["total_workflows"] == 0


def test_agent_statuses(registry):
    registry.register(AgentRole.DEVOPS, profile_constructor(get_profile(AgentRole.DEVOPS)))
    registry.register(AgentRole.QA_TESTER, FailingAgent, dependencies=["missing"])
    orchestrator = WorkflowOrchestrator(AgentFactory(registry))

    statuses = orchestrator.get_agent_statuses()

    assert statuses[0]["role"] == "DEVOPS"
    assert statuses[0]["available"] is True
    assert statuses[1] == {
        "role": "QA_TESTER",
        "available": False,
        "error": "Dependency 'missing' not found for role QA_TESTER "
        "(no dependency container configured)",
    }
