"""Agent factory - builds agents from registrations with dependency injection."""

import functools
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ticketcrew.agents.base import RoleAgent
from ticketcrew.agents.protocol import (
    DEFAULT_MAX_CONCURRENT_TASKS,
    AgentCreationOptions,
    AgentRole,
    AgentSpec,
    DependencyContainer,
    ValidationReport,
)
from ticketcrew.agents.registry import (
    AgentRegistration,
    AgentRegistry,
    SingletonCache,
    role_from_key,
)
from ticketcrew.agents.roles import BUILTIN_PROFILES, RoleProfile
from ticketcrew.errors import (
    AgentCreationFailure,
    CircularDependency,
    DependencyNotFound,
    InvalidConstructor,
    RegistrationNotFound,
)

logger = logging.getLogger(__name__)


class DictContainer:
    """Mapping-backed dependency container."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def get(self, key: str) -> Any:
        if key not in self._values:
            raise KeyError(key)
        return self._values[key]

    def has(self, key: str) -> bool:
        return key in self._values

    def register(self, key: str, value: Any) -> None:
        self._values[key] = value


class AgentFactory:
    """Creates and retrieves agents for registered roles.

    Creation is fail-fast: any problem raises. validate_registrations()
    is the fail-soft audit of the same rules.
    """

    def __init__(
        self,
        registry: AgentRegistry,
        container: DependencyContainer | None = None,
    ) -> None:
        self.registry = registry
        self._container = container

    def set_dependency_container(self, container: DependencyContainer | None) -> None:
        self._container = container

    @property
    def container(self) -> DependencyContainer | None:
        return self._container

    def create_agent(
        self, role: AgentRole, options: AgentCreationOptions | None = None
    ) -> Any:
        """Build (or fetch the cached singleton of) the agent for a role.

        Options are ignored when a cached singleton is returned.
        """
        return self._create(role, options, ())

    def _create(
        self,
        role: AgentRole,
        options: AgentCreationOptions | None,
        chain: tuple[AgentRole, ...],
    ) -> Any:
        if role in chain:
            raise CircularDependency([*chain, role])

        registration = self.registry.get_registration(role)
        if registration is None:
            raise RegistrationNotFound(role)

        if registration.singleton:
            cached = self.registry.get_singleton_instance(role)
            if cached is not None:
                return cached

        if not callable(registration.constructor):
            raise InvalidConstructor(role)

        # Resolved outside the singleton lock: resolution may build other roles.
        resolved = self._resolve_dependencies(registration, (*chain, role))

        def build() -> Any:
            spec = _build_spec(role, _merge_options(registration.defaults, options), resolved)
            try:
                agent = registration.constructor(spec)
            except Exception as e:
                logger.error("Constructor for %s failed: %s", role.value, e)
                raise AgentCreationFailure(role, e) from e
            logger.debug("Created agent %s", role.value)
            return agent

        if registration.singleton:
            return self.registry.cache.get_or_create(role, build)
        return build()

    def _resolve_dependencies(
        self, registration: AgentRegistration, chain: tuple[AgentRole, ...]
    ) -> dict[str, Any]:
        resolved: dict[str, Any] = {}
        for key in registration.dependencies:
            if self._container is not None and self._container.has(key):
                resolved[key] = self._container.get(key)
                continue
            dep_role = role_from_key(key)
            if dep_role is not None and self.registry.is_registered(dep_role):
                resolved[key] = self._create(dep_role, None, chain)
                continue
            reason = (
                "no dependency container configured"
                if self._container is None
                else "not provided by the dependency container"
            )
            raise DependencyNotFound(str(key), registration.role, reason)
        return resolved

    def create_agents(
        self, roles: Iterable[AgentRole], options: AgentCreationOptions | None = None
    ) -> dict[AgentRole, Any]:
        """Create several agents, in order. The first failure aborts the whole call."""
        agents: dict[AgentRole, Any] = {}
        for role in roles:
            try:
                agents[role] = self.create_agent(role, options)
            except AgentCreationFailure as e:
                if e.role is role:
                    raise
                raise AgentCreationFailure(role, e) from e
            except Exception as e:
                raise AgentCreationFailure(role, e) from e
        return agents

    def create_all_agents(
        self, options: AgentCreationOptions | None = None
    ) -> dict[AgentRole, Any]:
        return self.create_agents(self.registry.get_registered_roles(), options)

    def get_available_roles(self) -> list[AgentRole]:
        return self.registry.get_registered_roles()

    def can_create_agent(self, role: AgentRole) -> bool:
        """Whether create_agent(role) is expected to succeed, without building anything."""
        registration = self.registry.get_registration(role)
        if registration is None:
            return False
        if registration.singleton and self.registry.get_singleton_instance(role) is not None:
            return True
        if not callable(registration.constructor):
            return False
        return not self._unresolvable(registration)

    def _unresolvable(self, registration: AgentRegistration) -> list[str]:
        missing = []
        for key in registration.dependencies:
            if not isinstance(key, str) or not key.strip():
                continue
            if self._container_has(key):
                continue
            dep_role = role_from_key(key)
            if dep_role is not None and self.registry.is_registered(dep_role):
                continue
            missing.append(key)
        return missing

    def _container_has(self, key: str) -> bool:
        if self._container is None:
            return False
        try:
            return bool(self._container.has(key))
        except Exception as e:
            logger.warning("Dependency container lookup for '%s' failed: %s", key, e)
            return False

    def validate_registrations(self) -> ValidationReport:
        """Audit every registration without building anything. Never raises."""
        report = ValidationReport(errors=list(self.registry.validate_dependencies().errors))
        for registration in self.registry.get_all_registrations():
            role = registration.role.value
            if not callable(registration.constructor):
                report.errors.append(f"{role}: constructor is not callable")
            for key in self._unresolvable(registration):
                if self._container is None:
                    report.errors.append(
                        f"{role}: dependency '{key}' cannot be resolved "
                        "(no dependency container configured)"
                    )
                else:
                    report.errors.append(f"{role}: dependency '{key}' not found in container")
        return report


def _merge_options(
    defaults: AgentCreationOptions | None, options: AgentCreationOptions | None
) -> AgentCreationOptions | None:
    """Per-call options field by field over registration defaults."""
    if defaults is None or options is None:
        return options or defaults
    return AgentCreationOptions(
        capabilities=options.capabilities if options.capabilities is not None else defaults.capabilities,
        tools=options.tools if options.tools is not None else defaults.tools,
        max_concurrent_tasks=(
            options.max_concurrent_tasks
            if options.max_concurrent_tasks is not None
            else defaults.max_concurrent_tasks
        ),
        dependencies=options.dependencies if options.dependencies is not None else defaults.dependencies,
    )


def _build_spec(
    role: AgentRole,
    options: AgentCreationOptions | None,
    resolved: dict[str, Any],
) -> AgentSpec:
    options = options or AgentCreationOptions()
    max_tasks = options.max_concurrent_tasks
    return AgentSpec(
        role=role,
        capabilities=list(options.capabilities or []),
        tools=list(options.tools or []),
        max_concurrent_tasks=max_tasks if max_tasks is not None else DEFAULT_MAX_CONCURRENT_TASKS,
        resolved_dependencies=resolved,
        extra_dependencies=dict(options.dependencies) if options.dependencies is not None else None,
    )


def profile_constructor(profile: RoleProfile):
    """Registration constructor building a RoleAgent for the profile."""
    return functools.partial(RoleAgent, profile)


def build_default_registry(
    cache: SingletonCache | None = None,
    profiles: Iterable[RoleProfile] | None = None,
    singleton: bool = True,
) -> AgentRegistry:
    """Registry with every built-in profile registered, in the standard order."""
    registry = AgentRegistry(cache)
    for profile in profiles if profiles is not None else BUILTIN_PROFILES.values():
        registry.register(profile.role, profile_constructor(profile), singleton=singleton)
    return registry
