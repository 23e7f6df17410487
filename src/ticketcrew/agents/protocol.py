"""Agent data model - roles, tickets, tools, analyses and creation specs."""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Literal, Protocol, runtime_checkable

from ticketcrew.errors import WorkflowCancelled

Priority = Literal["low", "normal", "high", "urgent"]
Complexity = Literal["simple", "medium", "complex"]

DEFAULT_MAX_CONCURRENT_TASKS = 5


class AgentRole(Enum):
    """Specialist identities. Used as the key everywhere."""

    PROJECT_MANAGER = "PROJECT_MANAGER"
    SOFTWARE_ENGINEER = "SOFTWARE_ENGINEER"
    WORDPRESS_DEVELOPER = "WORDPRESS_DEVELOPER"
    BUSINESS_ANALYST = "BUSINESS_ANALYST"
    QA_TESTER = "QA_TESTER"
    DEVOPS = "DEVOPS"

    @classmethod
    def parse(cls, value: "str | AgentRole") -> "AgentRole":
        """Parse a role from its name, case-insensitively ('qa_tester', 'QA-TESTER')."""
        if isinstance(value, AgentRole):
            return value
        normalized = str(value).strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(r.value for r in cls)
            raise ValueError(f"Unknown agent role '{value}'. Valid roles: {valid}") from None

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass
class Ticket:
    """Support ticket as supplied by the ticketing system.

    Only id, subject, description and priority are read by the core.
    """

    id: int | str
    subject: str
    description: str = ""
    priority: Priority = "normal"
    tags: list[str] = field(default_factory=list)
    requester: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def content(self) -> str:
        """Lower-cased subject and description."""
        return f"{self.subject or ''} {self.description or ''}".lower()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ticket":
        """Build a ticket from a Zendesk-style payload."""
        requester = data.get("requester")
        if isinstance(requester, dict):
            requester = requester.get("email") or requester.get("name")
        return cls(
            id=data["id"],
            subject=data.get("subject") or "",
            description=data.get("description") or "",
            priority=data.get("priority") or "normal",
            tags=list(data.get("tags") or []),
            requester=requester,
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "subject": self.subject,
            "description": self.description,
            "priority": self.priority,
            "tags": list(self.tags),
            "requester": self.requester,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass
class AgentTool:
    """A named operation an agent can dispatch tasks to.

    The tool is owned by the declaring agent; ``triggers`` are the task
    keywords that select it in execute().
    """

    name: str
    description: str
    parameters: dict[str, str]
    execute: Callable[[dict[str, Any]], Awaitable[Any]]
    triggers: tuple[str, ...] = ()
    defaults: dict[str, Any] = field(default_factory=dict)

    def build_params(self, context: dict[str, Any]) -> dict[str, Any]:
        """Pick declared parameters from the context, falling back to defaults."""
        return {
            name: context[name] if context.get(name) is not None else self.defaults.get(name)
            for name in self.parameters
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": dict(self.parameters),
        }


@dataclass(frozen=True)
class AgentAnalysis:
    """One agent's findings for one ticket. Immutable once produced."""

    role: AgentRole
    analysis: str
    confidence: float
    recommended_actions: tuple[str, ...] = ()
    next_agent: AgentRole | None = None
    priority: Priority | None = None
    estimated_time: str | None = None
    complexity: Complexity | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")
        if isinstance(self.recommended_actions, list):
            object.__setattr__(self, "recommended_actions", tuple(self.recommended_actions))

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role.value,
            "analysis": self.analysis,
            "confidence": self.confidence,
            "recommended_actions": list(self.recommended_actions),
            "next_agent": self.next_agent.value if self.next_agent else None,
            "priority": self.priority,
            "estimated_time": self.estimated_time,
            "complexity": self.complexity,
        }


@dataclass
class TaskResult:
    """Normalized result of RoleAgent.execute."""

    status: Literal["completed", "failed"]
    details: str
    tool: str | None = None
    output: Any = None
    error: str | None = None
    recommendations: list[str] = field(default_factory=list)

    @property
    def is_error(self) -> bool:
        return self.status == "failed"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "details": self.details,
            "tool": self.tool,
            "output": self.output,
            "error": self.error,
            "recommendations": list(self.recommendations),
        }


@dataclass
class HandoffDecision:
    """Result of evaluating an agent's handoff triggers."""

    role: AgentRole
    category: str
    keyword: str


@dataclass
class AgentCreationOptions:
    """Per-call creation options. Does not outlive the create call."""

    capabilities: list[str] | None = None
    tools: list[AgentTool] | None = None
    max_concurrent_tasks: int | None = None
    dependencies: dict[str, Any] | None = None


@dataclass
class AgentSpec:
    """Explicit construction struct handed to an agent constructor.

    Fields follow the fixed argument order: role, capabilities, tools,
    max_concurrent_tasks, resolved dependencies, caller dependencies.
    """

    role: AgentRole
    capabilities: list[str] = field(default_factory=list)
    tools: list[AgentTool] = field(default_factory=list)
    max_concurrent_tasks: int = DEFAULT_MAX_CONCURRENT_TASKS
    resolved_dependencies: dict[str, Any] = field(default_factory=dict)
    extra_dependencies: dict[str, Any] | None = None

    def as_args(self) -> list[Any]:
        """Positional form; dependency slots are omitted when empty/absent."""
        args: list[Any] = [
            self.role,
            list(self.capabilities),
            list(self.tools),
            self.max_concurrent_tasks,
        ]
        if self.resolved_dependencies:
            args.append(dict(self.resolved_dependencies))
        if self.extra_dependencies is not None:
            args.append(dict(self.extra_dependencies))
        return args

    @property
    def dependencies(self) -> dict[str, Any]:
        """Resolved dependencies overlaid with caller-supplied ones."""
        merged = dict(self.resolved_dependencies)
        merged.update(self.extra_dependencies or {})
        return merged


@runtime_checkable
class DependencyContainer(Protocol):
    """External DI container consumed by AgentFactory."""

    def get(self, key: str) -> Any: ...

    def has(self, key: str) -> bool: ...


@dataclass
class ValidationReport:
    """Outcome of a fail-soft audit."""

    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}


class CancellationToken:
    """Cooperative cancellation shared between a caller and a workflow.

    Checked at suspension points; it never interrupts a step midway.
    """

    def __init__(self) -> None:
        self._cancelled = threading.Event()
        self.reason: str | None = None

    def cancel(self, reason: str = "cancelled by caller") -> None:
        self.reason = reason
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def raise_if_cancelled(self, ticket_id: Any = None, role: Any = None) -> None:
        if self.cancelled:
            raise WorkflowCancelled(
                f"Workflow for ticket {ticket_id} cancelled: {self.reason}",
                ticket_id=ticket_id,
                role=role,
            )
