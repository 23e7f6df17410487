"""Agent registry - role registrations plus the singleton instance cache."""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from ticketcrew.agents.protocol import (
    AgentCreationOptions,
    AgentRole,
    AgentSpec,
    ValidationReport,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

AgentConstructor = Callable[[AgentSpec], Any]


@dataclass
class AgentRegistration:
    """How to build the agent for one role."""

    role: AgentRole
    constructor: AgentConstructor
    dependencies: tuple[str, ...] = ()
    singleton: bool = False
    defaults: AgentCreationOptions | None = None


def role_from_key(key: Any) -> AgentRole | None:
    """The role a dependency key names, if it names one."""
    if not isinstance(key, str):
        return None
    try:
        return AgentRole.parse(key)
    except ValueError:
        return None


class SingletonCache:
    """Caller-owned store of singleton agent instances.

    Create one per process (or per test) and dispose of it when done.
    First-time construction is serialized per role, so concurrent first
    requests build the instance exactly once.
    """

    def __init__(self) -> None:
        self._instances: dict[AgentRole, Any] = {}
        self._locks: dict[AgentRole, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, role: AgentRole) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(role)
            if lock is None:
                lock = self._locks[role] = threading.Lock()
            return lock

    def get(self, role: AgentRole) -> Any | None:
        with self._guard:
            return self._instances.get(role)

    def set(self, role: AgentRole, instance: Any) -> None:
        with self._guard:
            self._instances[role] = instance

    def get_or_create(self, role: AgentRole, builder: Callable[[], T]) -> T:
        """Return the cached instance, building it under the role's lock if absent."""
        instance = self.get(role)
        if instance is not None:
            return instance
        with self._lock_for(role):
            instance = self.get(role)
            if instance is None:
                instance = builder()
                self.set(role, instance)
            return instance

    def evict(self, role: AgentRole) -> bool:
        with self._guard:
            return self._instances.pop(role, None) is not None

    def clear(self) -> None:
        with self._guard:
            self._instances.clear()

    def dispose(self) -> None:
        """Drop every instance and lock. The cache may be reused afterwards."""
        with self._guard:
            self._instances.clear()
            self._locks.clear()

    def __contains__(self, role: object) -> bool:
        with self._guard:
            return role in self._instances

    def __len__(self) -> int:
        with self._guard:
            return len(self._instances)


class AgentRegistry:
    """Maps each AgentRole to at most one registration.

    The singleton cache is passed in by the caller; a registry built
    without one gets a private cache.
    """

    def __init__(self, cache: SingletonCache | None = None) -> None:
        self.cache = cache if cache is not None else SingletonCache()
        self._registrations: dict[AgentRole, AgentRegistration] = {}
        self._lock = threading.RLock()

    def register(
        self,
        role: AgentRole,
        constructor: AgentConstructor,
        dependencies: Iterable[str] = (),
        singleton: bool = False,
        defaults: AgentCreationOptions | None = None,
    ) -> AgentRegistration:
        """Register (or replace) the constructor for a role.

        ``defaults`` are creation options applied under any per-call options.

        Replacing an existing registration logs a warning and evicts any
        cached singleton for the role.
        """
        if not isinstance(role, AgentRole):
            raise TypeError(f"role must be an AgentRole, got {type(role).__name__}")
        if isinstance(dependencies, (str, bytes)) or not isinstance(dependencies, Iterable):
            raise TypeError("dependencies must be a sequence of dependency keys")
        if not callable(constructor):
            logger.warning("Constructor registered for %s is not callable", role.value)

        registration = AgentRegistration(
            role=role,
            constructor=constructor,
            dependencies=tuple(dependencies),
            singleton=bool(singleton),
            defaults=defaults,
        )
        with self._lock:
            if role in self._registrations:
                logger.warning("Overwriting existing agent registration: %s", role.value)
                self.cache.evict(role)
            self._registrations[role] = registration
        logger.debug(
            "Registered %s (singleton=%s, dependencies=%s)",
            role.value, registration.singleton, list(registration.dependencies),
        )
        return registration

    def unregister(self, role: AgentRole) -> bool:
        with self._lock:
            removed = self._registrations.pop(role, None) is not None
            self.cache.evict(role)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._registrations.clear()
            self.cache.clear()

    def get_registration(self, role: AgentRole) -> AgentRegistration | None:
        with self._lock:
            return self._registrations.get(role)

    def is_registered(self, role: AgentRole) -> bool:
        with self._lock:
            return role in self._registrations

    def get_registered_roles(self) -> list[AgentRole]:
        """Registered roles in registration order."""
        with self._lock:
            return list(self._registrations)

    def get_all_registrations(self) -> list[AgentRegistration]:
        with self._lock:
            return list(self._registrations.values())

    def is_singleton(self, role: AgentRole) -> bool:
        registration = self.get_registration(role)
        return bool(registration and registration.singleton)

    def get_dependencies(self, role: AgentRole) -> tuple[str, ...]:
        registration = self.get_registration(role)
        return registration.dependencies if registration else ()

    def get_singleton_instance(self, role: AgentRole) -> Any | None:
        return self.cache.get(role)

    def set_singleton_instance(self, role: AgentRole, instance: Any) -> None:
        self.cache.set(role, instance)

    def validate_dependencies(self) -> ValidationReport:
        """Report malformed dependency keys and cycles between role-keyed dependencies.

        Never raises.
        """
        report = ValidationReport()
        registrations = self.get_all_registrations()

        graph: dict[AgentRole, list[AgentRole]] = {}
        for registration in registrations:
            edges = []
            for key in registration.dependencies:
                if not isinstance(key, str) or not key.strip():
                    report.errors.append(
                        f"{registration.role.value}: malformed dependency key {key!r}"
                    )
                    continue
                target = role_from_key(key)
                if target is not None and any(r.role is target for r in registrations):
                    edges.append(target)
            graph[registration.role] = edges

        for cycle in _find_cycles(graph):
            path = " -> ".join(role.value for role in cycle)
            report.errors.append(f"Circular dependency: {path}")
        return report


def _find_cycles(graph: dict[AgentRole, list[AgentRole]]) -> list[list[AgentRole]]:
    """Each distinct cycle once, as a closed path (first node repeated at the end)."""
    cycles: list[list[AgentRole]] = []
    seen: set[frozenset[AgentRole]] = set()
    done: set[AgentRole] = set()

    def visit(node: AgentRole, path: list[AgentRole]) -> None:
        if node in path:
            cycle = path[path.index(node):] + [node]
            members = frozenset(cycle)
            if members not in seen:
                seen.add(members)
                cycles.append(cycle)
            return
        if node in done:
            return
        path.append(node)
        for target in graph.get(node, ()):
            visit(target, path)
        path.pop()
        done.add(node)

    for node in graph:
        visit(node, [])
    return cycles
