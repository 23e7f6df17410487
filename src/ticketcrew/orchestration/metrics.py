"""In-memory workflow metrics and failure log"""
import threading
from collections import defaultdict, deque
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class FailureRecord:
    """Record of an aborted workflow"""
    ticket_id: int | str
    role: str | None
    error_type: str  # "timeout" | "cancelled" | exception class name
    error_message: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization"""
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


@dataclass
class AgentUtilization:
    """Per-role counters across workflows"""
    steps: int = 0
    handoffs_out: int = 0
    handoffs_in: int = 0
    total_confidence: float = 0.0

    @property
    def average_confidence(self) -> float:
        return self.total_confidence / self.steps if self.steps else 0.0

    def to_dict(self) -> dict:
        return {
            "steps": self.steps,
            "handoffs_out": self.handoffs_out,
            "handoffs_in": self.handoffs_in,
            "average_confidence": round(self.average_confidence, 4),
        }


class WorkflowMetrics:
    """Aggregates workflow outcomes for the lifetime of an orchestrator"""

    def __init__(self, max_failures: int = 100):
        self._lock = threading.Lock()
        self._max_failures = max_failures
        self._clear()

    def _clear(self) -> None:
        self.completed = 0
        self.failed = 0
        self.total_processing_time_ms = 0.0
        self.total_handoffs = 0
        self.agents: dict[str, AgentUtilization] = defaultdict(AgentUtilization)
        self.failures: deque[FailureRecord] = deque(maxlen=self._max_failures)

    def reset(self) -> None:
        with self._lock:
            self._clear()

    def record_step(self, role: str, confidence: float) -> None:
        with self._lock:
            usage = self.agents[role]
            usage.steps += 1
            usage.total_confidence += confidence

    def record_handoff(self, from_role: str, to_role: str) -> None:
        with self._lock:
            self.agents[from_role].handoffs_out += 1
            self.agents[to_role].handoffs_in += 1

    def record_completion(self, processing_time_ms: float, handoff_count: int) -> None:
        with self._lock:
            self.completed += 1
            self.total_processing_time_ms += processing_time_ms
            self.total_handoffs += handoff_count

    def record_failure(self, failure: FailureRecord) -> None:
        with self._lock:
            self.failed += 1
            self.failures.append(failure)

    def get_stats(self) -> dict[str, Any]:
        """Aggregated workflow statistics"""
        with self._lock:
            by_error_type: dict[str, int] = defaultdict(int)
            for failure in self.failures:
                by_error_type[failure.error_type] += 1
            total = self.completed + self.failed
            return {
                "total_workflows": total,
                "completed": self.completed,
                "failed": self.failed,
                "success_rate": self.completed / total if total else 0.0,
                "average_processing_time_ms": (
                    self.total_processing_time_ms / self.completed if self.completed else 0.0
                ),
                "average_handoffs": self.total_handoffs / self.completed if self.completed else 0.0,
                "agent_utilization": {role: usage.to_dict() for role, usage in self.agents.items()},
                "failures_by_error_type": dict(by_error_type),
            }

    def get_recent_failures(self, limit: int = 10) -> list[dict]:
        """Most recent failures, newest first"""
        with self._lock:
            return [f.to_dict() for f in list(self.failures)[-limit:][::-1]]
