"""Role-bound support agents, their registry and factory."""

from ticketcrew.agents.base import RoleAgent
from ticketcrew.agents.factory import (
    AgentFactory,
    DictContainer,
    build_default_registry,
    profile_constructor,
)
from ticketcrew.agents.protocol import (
    AgentAnalysis,
    AgentCreationOptions,
    AgentRole,
    AgentSpec,
    AgentTool,
    CancellationToken,
    TaskResult,
    Ticket,
    ValidationReport,
)
from ticketcrew.agents.registry import AgentRegistration, AgentRegistry, SingletonCache

__all__ = [
    "AgentAnalysis",
    "AgentCreationOptions",
    "AgentFactory",
    "AgentRegistration",
    "AgentRegistry",
    "AgentRole",
    "AgentSpec",
    "AgentTool",
    "CancellationToken",
    "DictContainer",
    "RoleAgent",
    "SingletonCache",
    "TaskResult",
    "Ticket",
    "ValidationReport",
    "build_default_registry",
    "profile_constructor",
]
