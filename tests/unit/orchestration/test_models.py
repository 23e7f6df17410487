"""Tests for workflow data models"""
import pytest

from ticketcrew.agents.protocol import AgentAnalysis, AgentRole, Ticket
from ticketcrew.orchestration.models import MultiAgentResponse, WorkflowContext, WorkflowState


def make_analysis(role=AgentRole.QA_TESTER, confidence=0.8, actions=("a", "b")):
    return AgentAnalysis(role=role, analysis="found it", confidence=confidence, recommended_actions=actions)


def test_analysis_confidence_must_be_in_range():
    with pytest.raises(ValueError):
        make_analysis(confidence=1.5)


def test_analysis_is_immutable():
    analysis = make_analysis()
    with pytest.raises(AttributeError):
        analysis.confidence = 0.1


def test_context_merges_recommendations_and_tracks_latest_confidence():
    context = WorkflowContext(ticket=Ticket(id=1, subject="x"))

    context.add_insight(make_analysis(confidence=0.9, actions=("a", "b")))
    context.add_insight(make_analysis(AgentRole.DEVOPS, confidence=0.6, actions=("b", "c")))

    assert context.recommendations == ["a", "b", "c"]
    assert context.confidence == 0.6
    assert len(context.insights) == 2


def test_state_hand_off():
    state = WorkflowState(
        ticket_id=1,
        current_agent=AgentRole.PROJECT_MANAGER,
        context=WorkflowContext(ticket=Ticket(id=1, subject="x")),
    )

    state.hand_off(AgentRole.QA_TESTER, "testing: PROJECT_MANAGER -> QA_TESTER")

    assert state.current_agent is AgentRole.QA_TESTER
    assert state.previous_agents == [AgentRole.PROJECT_MANAGER]
    assert state.handoff_count == 1
    assert state.agents_involved == [AgentRole.PROJECT_MANAGER, AgentRole.QA_TESTER]
    assert state.to_dict()["previous_agents"] == ["PROJECT_MANAGER"]


def test_response_to_dict():
    context = WorkflowContext(ticket=Ticket(id=7, subject="x"))
    context.add_insight(make_analysis())
    state = WorkflowState(ticket_id=7, current_agent=AgentRole.QA_TESTER, context=context, is_complete=True)
    response = MultiAgentResponse(
        ticket_id=7,
        workflow=state,
        final_recommendations=list(context.recommendations),
        confidence=0.8,
        processing_time_ms=1.23456,
        agents_involved=state.agents_involved,
        handoff_count=0,
        agent_analyses=list(context.insights),
    )

    data = response.to_dict()

    assert response.final_agent is AgentRole.QA_TESTER
    assert data["agents_involved"] == ["QA_TESTER"]
    assert data["processing_time_ms"] == 1.235
    assert data["agent_analyses"][0]["recommended_actions"] == ["a", "b"]
    assert data["workflow"]["is_complete"] is True
