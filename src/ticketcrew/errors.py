"""Exception hierarchy for ticketcrew.

Factory operations raise these to the caller. Audits (registry and factory
validation) never raise; they return a ValidationReport instead.
"""

from typing import Any


class TicketCrewError(Exception):
    """Base exception for all ticketcrew errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details or {}


# --- Registry / factory errors ---


class RegistrationNotFound(TicketCrewError):
    """No agent is registered for the requested role."""

    def __init__(self, role: Any):
        super().__init__(f"No agent registered for role: {_role_name(role)}")
        self.role = role


class DependencyNotFound(TicketCrewError):
    """A declared dependency could not be resolved."""

    def __init__(self, key: str, role: Any, reason: str | None = None):
        message = f"Dependency '{key}' not found for role {_role_name(role)}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.key = key
        self.role = role


class CircularDependency(TicketCrewError):
    """Role-keyed dependencies form a cycle."""

    def __init__(self, chain: list[Any]):
        path = " -> ".join(_role_name(r) for r in chain)
        super().__init__(f"Circular agent dependency: {path}")
        self.chain = chain


class InvalidConstructor(TicketCrewError):
    """The registered constructor is not callable."""

    def __init__(self, role: Any):
        super().__init__(f"Invalid constructor for role: {_role_name(role)}")
        self.role = role


class AgentCreationFailure(TicketCrewError):
    """Building an agent failed; wraps the underlying error with the role."""

    def __init__(self, role: Any, cause: BaseException):
        super().__init__(f"Failed to create agent {_role_name(role)}: {cause}")
        self.role = role
        self.cause = cause


# --- Agent errors ---


class ToolExecutionError(TicketCrewError):
    """A tool raised while executing.

    Caught inside RoleAgent.execute and turned into a failed TaskResult.
    """

    def __init__(self, tool: str, role: Any, cause: BaseException):
        super().__init__(f"Tool '{tool}' failed for {_role_name(role)}: {cause}")
        self.tool = tool
        self.role = role
        self.cause = cause


class AgentCannotHandle(TicketCrewError):
    """A ticket was routed to an agent that does not accept it."""

    def __init__(self, role: Any, ticket_id: Any):
        super().__init__(f"Agent {_role_name(role)} cannot handle ticket {ticket_id}")
        self.role = role
        self.ticket_id = ticket_id


# --- Workflow errors ---


class WorkflowAborted(TicketCrewError):
    """An agent step failed unexpectedly; the workflow is left incomplete."""

    def __init__(
        self,
        message: str,
        *,
        ticket_id: Any = None,
        role: Any = None,
        state: Any = None,
    ):
        super().__init__(message, details={"ticket_id": ticket_id, "role": _role_name(role)})
        self.ticket_id = ticket_id
        self.role = role
        self.state = state


class WorkflowCancelled(WorkflowAborted):
    """The caller cancelled the workflow between steps."""


def _role_name(role: Any) -> str:
    return getattr(role, "value", None) or str(role)
