"""Configuration schema using Pydantic."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from ticketcrew.agents.protocol import DEFAULT_MAX_CONCURRENT_TASKS, AgentRole
from ticketcrew.config.defaults import (
    DEFAULT_AGENT_CAPACITY,
    DEFAULT_AGENT_ORDER,
    DEFAULT_ENTRY_ROLE,
    DEFAULT_LOG_LEVEL,
)


class AgentConfig(BaseModel):
    """Configuration for a specific agent role."""

    enabled: bool = True
    singleton: bool = True
    capabilities: list[str] | None = None  # None keeps the profile's capabilities
    max_concurrent_tasks: int | None = Field(default=None, ge=1)
    dependencies: list[str] = Field(default_factory=list)


class OrchestrationConfig(BaseModel):
    """Workflow orchestrator configuration."""

    hop_budget: int | None = Field(default=None, ge=0)  # None = number of registered roles
    default_role: str = DEFAULT_ENTRY_ROLE
    step_timeout: float | None = Field(default=None, gt=0)  # seconds
    execute_tools: bool = False

    @field_validator("default_role")
    @classmethod
    def _known_role(cls, value: str) -> str:
        return AgentRole.parse(value).value


class FactoryConfig(BaseModel):
    """Agent factory configuration."""

    default_max_concurrent_tasks: int = Field(default=DEFAULT_MAX_CONCURRENT_TASKS, ge=1)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = DEFAULT_LOG_LEVEL
    show_path: bool = False

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


class TicketCrewConfig(BaseModel):
    """Root configuration model for ticketcrew."""

    orchestration: OrchestrationConfig = Field(default_factory=OrchestrationConfig)
    factory: FactoryConfig = Field(default_factory=FactoryConfig)
    agents: dict[str, AgentConfig] = Field(default_factory=dict)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("agents")
    @classmethod
    def _known_agents(cls, value: dict[str, AgentConfig]) -> dict[str, AgentConfig]:
        return {AgentRole.parse(name).value: agent for name, agent in value.items()}

    @classmethod
    def default(cls) -> "TicketCrewConfig":
        """Create default configuration."""
        return cls(
            agents={
                role: AgentConfig(max_concurrent_tasks=DEFAULT_AGENT_CAPACITY[role])
                for role in DEFAULT_AGENT_ORDER
            }
        )

    def get_agent_config(self, role: AgentRole | str) -> AgentConfig:
        """Get configuration for a specific agent role."""
        return self.agents.get(AgentRole.parse(role).value, AgentConfig())


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    return Path.home() / ".config" / "ticketcrew"


def get_config_file() -> Path:
    """Get the main configuration file path."""
    return get_config_dir() / "config.toml"
