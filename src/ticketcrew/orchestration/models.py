"""Data models for multi-agent ticket workflows."""
from dataclasses import dataclass, field
from typing import Any

from ticketcrew.agents.protocol import AgentAnalysis, AgentRole, Ticket


@dataclass
class WorkflowContext:
    """Accumulated findings for one ticket"""
    ticket: Ticket
    insights: list[AgentAnalysis] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    confidence: float = 0.0

    def add_insight(self, analysis: AgentAnalysis) -> None:
        """Record an analysis; confidence tracks the most recent one."""
        self.insights.append(analysis)
        self.merge_recommendations(analysis.recommended_actions)
        self.confidence = analysis.confidence

    def merge_recommendations(self, recommendations: tuple[str, ...] | list[str]) -> None:
        """Append recommendations not already present, keeping first-seen order."""
        for recommendation in recommendations:
            if recommendation not in self.recommendations:
                self.recommendations.append(recommendation)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticket": self.ticket.to_dict(),
            "insights": [insight.to_dict() for insight in self.insights],
            "recommendations": list(self.recommendations),
            "confidence": self.confidence,
        }


@dataclass
class WorkflowState:
    """State of one ticket's handoff chain. Only the orchestrator mutates it."""
    ticket_id: int | str
    current_agent: AgentRole
    context: WorkflowContext
    previous_agents: list[AgentRole] = field(default_factory=list)
    is_complete: bool = False
    handoff_reason: str | None = None
    abort_reason: str | None = None

    @property
    def handoff_count(self) -> int:
        return len(self.previous_agents)

    @property
    def agents_involved(self) -> list[AgentRole]:
        return [*self.previous_agents, self.current_agent]

    def hand_off(self, to_role: AgentRole, reason: str) -> None:
        """Move the current agent onto the visited list and switch to ``to_role``."""
        self.previous_agents.append(self.current_agent)
        self.current_agent = to_role
        self.handoff_reason = reason

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticket_id": self.ticket_id,
            "current_agent": self.current_agent.value,
            "previous_agents": [role.value for role in self.previous_agents],
            "context": self.context.to_dict(),
            "is_complete": self.is_complete,
            "handoff_reason": self.handoff_reason,
            "abort_reason": self.abort_reason,
        }


@dataclass
class MultiAgentResponse:
    """Final result of processing a ticket"""
    ticket_id: int | str
    workflow: WorkflowState
    final_recommendations: list[str]
    confidence: float
    processing_time_ms: float
    agents_involved: list[AgentRole]
    handoff_count: int
    agent_analyses: list[AgentAnalysis] = field(default_factory=list)
    task_results: list[dict[str, Any]] = field(default_factory=list)

    @property
    def final_agent(self) -> AgentRole:
        return self.workflow.current_agent

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticket_id": self.ticket_id,
            "workflow": self.workflow.to_dict(),
            "final_recommendations": list(self.final_recommendations),
            "confidence": self.confidence,
            "processing_time_ms": round(self.processing_time_ms, 3),
            "agents_involved": [role.value for role in self.agents_involved],
            "handoff_count": self.handoff_count,
            "agent_analyses": [analysis.to_dict() for analysis in self.agent_analyses],
            "task_results": list(self.task_results),
        }
