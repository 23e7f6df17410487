"""Multi-agent ticket workflows."""
from ticketcrew.orchestration.metrics import FailureRecord, WorkflowMetrics
from ticketcrew.orchestration.models import MultiAgentResponse, WorkflowContext, WorkflowState
from ticketcrew.orchestration.orchestrator import WorkflowOrchestrator

__all__ = [
    "FailureRecord",
    "MultiAgentResponse",
    "WorkflowContext",
    "WorkflowMetrics",
    "WorkflowOrchestrator",
    "WorkflowState",
]
