"""Tests for the agent registry and singleton cache."""
import threading

import pytest

from ticketcrew.agents.protocol import AgentRole
from ticketcrew.agents.registry import AgentRegistry, SingletonCache, role_from_key


def make_constructor():
    return lambda spec: object()


def test_register_and_lookup(registry):
    registration = registry.register(
        AgentRole.SOFTWARE_ENGINEER, make_constructor(), dependencies=["logger"], singleton=True
    )

    assert registry.is_registered(AgentRole.SOFTWARE_ENGINEER)
    assert registry.get_registration(AgentRole.SOFTWARE_ENGINEER) is registration
    assert registry.is_singleton(AgentRole.SOFTWARE_ENGINEER)
    assert registry.get_dependencies(AgentRole.SOFTWARE_ENGINEER) == ("logger",)
    assert registry.get_registration(AgentRole.QA_TESTER) is None
    assert registry.get_dependencies(AgentRole.QA_TESTER) == ()


def test_registered_roles_keep_registration_order(registry):
    for role in (AgentRole.QA_TESTER, AgentRole.DEVOPS, AgentRole.PROJECT_MANAGER):
        registry.register(role, make_constructor())

    assert registry.get_registered_roles() == [
        AgentRole.QA_TESTER,
        AgentRole.DEVOPS,
        AgentRole.PROJECT_MANAGER,
    ]
    assert len(registry.get_all_registrations()) == 3


def test_register_rejects_non_role(registry):
    with pytest.raises(TypeError):
        registry.register("SOFTWARE_ENGINEER", make_constructor())


def test_register_rejects_string_dependencies(registry):
    with pytest.raises(TypeError):
        registry.register(AgentRole.DEVOPS, make_constructor(), dependencies="logger")


def test_register_accepts_non_callable_with_warning(registry, caplog):
    registry.register(AgentRole.DEVOPS, "not a function")

    assert registry.is_registered(AgentRole.DEVOPS)
    assert "not callable" in caplog.text


def test_duplicate_registration_replaces_and_evicts_singleton(registry, caplog):
    first = make_constructor()
    second = make_constructor()
    registry.register(AgentRole.DEVOPS, first, singleton=True)
    registry.set_singleton_instance(AgentRole.DEVOPS, object())

    registry.register(AgentRole.DEVOPS, second, singleton=True)

    assert registry.get_registration(AgentRole.DEVOPS).constructor is second
    assert registry.get_singleton_instance(AgentRole.DEVOPS) is None
    assert "Overwriting existing agent registration" in caplog.text


def test_unregister_and_clear(registry):
    registry.register(AgentRole.DEVOPS, make_constructor(), singleton=True)
    registry.register(AgentRole.QA_TESTER, make_constructor())
    registry.set_singleton_instance(AgentRole.DEVOPS, object())

    assert registry.unregister(AgentRole.DEVOPS) is True
    assert registry.unregister(AgentRole.DEVOPS) is False
    assert AgentRole.DEVOPS not in registry.cache

    registry.clear()
    assert registry.get_registered_roles() == []


def test_registries_share_a_caller_owned_cache():
    cache = SingletonCache()
    first = AgentRegistry(cache)
    second = AgentRegistry(cache)
    instance = object()

    first.set_singleton_instance(AgentRole.QA_TESTER, instance)

    assert second.get_singleton_instance(AgentRole.QA_TESTER) is instance


def test_separate_registries_do_not_share_state():
    first = AgentRegistry()
    second = AgentRegistry()
    first.register(AgentRole.QA_TESTER, make_constructor())

    assert not second.is_registered(AgentRole.QA_TESTER)


def test_cache_get_or_create_builds_once_under_contention():
    cache = SingletonCache()
    calls = []
    barrier = threading.Barrier(8)

    def builder():
        calls.append(1)
        return object()

    results = []

    def worker():
        barrier.wait()
        results.append(cache.get_or_create(AgentRole.DEVOPS, builder))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert len({id(r) for r in results}) == 1


def test_cache_dispose():
    cache = SingletonCache()
    cache.set(AgentRole.DEVOPS, object())
    assert len(cache) == 1

    cache.dispose()

    assert len(cache) == 0
    assert cache.get(AgentRole.DEVOPS) is None


def test_role_from_key():
    assert role_from_key("qa_tester") is AgentRole.QA_TESTER
    assert role_from_key("logger") is None
    assert role_from_key(42) is None


def test_validate_dependencies_reports_cycle(registry):
    registry.register(AgentRole.PROJECT_MANAGER, make_constructor(), dependencies=["QA_TESTER"])
    registry.register(AgentRole.QA_TESTER, make_constructor(), dependencies=["PROJECT_MANAGER"])

    report = registry.validate_dependencies()

    assert not report.valid
    assert report.errors == ["Circular dependency: PROJECT_MANAGER -> QA_TESTER -> PROJECT_MANAGER"]


def test_validate_dependencies_reports_malformed_keys(registry):
    registry.register(AgentRole.DEVOPS, make_constructor(), dependencies=["", "logger"])

    report = registry.validate_dependencies()

    assert report.errors == ["DEVOPS: malformed dependency key ''"]


def test_validate_dependencies_clean(registry):
    registry.register(AgentRole.DEVOPS, make_constructor(), dependencies=["logger"])
    registry.register(AgentRole.QA_TESTER, make_constructor(), dependencies=["DEVOPS"])

    assert registry.validate_dependencies().valid
