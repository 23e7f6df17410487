"""Configuration management."""

import logging

from ticketcrew.agents.factory import AgentFactory, profile_constructor
from ticketcrew.agents.protocol import AgentCreationOptions, AgentRole, DependencyContainer
from ticketcrew.agents.registry import AgentRegistry, SingletonCache
from ticketcrew.agents.roles import BUILTIN_PROFILES
from ticketcrew.config.manager import ConfigManager
from ticketcrew.config.schema import AgentConfig, TicketCrewConfig
from ticketcrew.orchestration.orchestrator import WorkflowOrchestrator

logger = logging.getLogger(__name__)


def build_factory(
    config: TicketCrewConfig | None = None,
    *,
    container: DependencyContainer | None = None,
    cache: SingletonCache | None = None,
) -> AgentFactory:
    """Factory with every enabled built-in agent registered per the config."""
    config = config or ConfigManager.get_config()
    registry = AgentRegistry(cache)
    for role, profile in BUILTIN_PROFILES.items():
        agent_config = config.get_agent_config(role)
        if not agent_config.enabled:
            logger.info("Agent %s disabled by configuration", role.value)
            continue
        registry.register(
            role,
            profile_constructor(profile),
            dependencies=agent_config.dependencies,
            singleton=agent_config.singleton,
            defaults=AgentCreationOptions(
                capabilities=agent_config.capabilities,
                max_concurrent_tasks=(
                    agent_config.max_concurrent_tasks
                    or config.factory.default_max_concurrent_tasks
                ),
            ),
        )
    return AgentFactory(registry, container)


def build_orchestrator(
    config: TicketCrewConfig | None = None,
    *,
    factory: AgentFactory | None = None,
    container: DependencyContainer | None = None,
    cache: SingletonCache | None = None,
    logger: logging.Logger | None = None,
) -> WorkflowOrchestrator:
    """Orchestrator over build_factory(config) unless a factory is supplied."""
    config = config or ConfigManager.get_config()
    if factory is None:
        factory = build_factory(config, container=container, cache=cache)
    settings = config.orchestration
    return WorkflowOrchestrator(
        factory,
        hop_budget=settings.hop_budget,
        default_role=AgentRole.parse(settings.default_role),
        step_timeout=settings.step_timeout,
        execute_tools=settings.execute_tools,
        logger=logger,
    )


__all__ = [
    "AgentConfig",
    "ConfigManager",
    "TicketCrewConfig",
    "build_factory",
    "build_orchestrator",
]
