"""Tests for config loading and factory wiring."""
import logging
from pathlib import Path

import pytest

from ticketcrew.agents.protocol import AgentRole
from ticketcrew.config import build_factory, build_orchestrator
from ticketcrew.config.manager import ConfigManager
from ticketcrew.config.schema import TicketCrewConfig


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


def test_defaults_without_files():
    config = ConfigManager.get_config()

    assert config.logging.level == "WARNING"
    assert config.orchestration.hop_budget is None
    assert ConfigManager.get_config() is config


def test_user_project_and_explicit_files_merge_in_order(tmp_path):
    write(
        Path.home() / ".config" / "ticketcrew" / "config.toml",
        "[orchestration]\nhop_budget = 2\nstep_timeout = 5.0\n",
    )
    write(tmp_path / ".ticketcrew.toml", "[orchestration]\nhop_budget = 3\n")
    explicit = write(tmp_path / "extra.toml", "[logging]\nlevel = 'info'\n")

    config = ConfigManager.reload(explicit)

    assert config.orchestration.hop_budget == 3
    assert config.orchestration.step_timeout == 5.0
    assert config.logging.level == "INFO"


def test_agent_sections_merge_with_defaults(tmp_path):
    write(
        tmp_path / ".ticketcrew.toml",
        "[agents.qa-tester]\nenabled = false\n\n[agents.devops]\nmax_concurrent_tasks = 2\n",
    )

    config = ConfigManager.reload()

    assert not config.get_agent_config(AgentRole.QA_TESTER).enabled
    devops = config.get_agent_config(AgentRole.DEVOPS)
    assert devops.max_concurrent_tasks == 2
    assert devops.enabled


def test_get_value():
    assert ConfigManager.get_value("orchestration.default_role") == "PROJECT_MANAGER"
    assert ConfigManager.get_value("orchestration.nope", "fallback") == "fallback"


def test_build_factory_skips_disabled_agents(cache):
    config = TicketCrewConfig.default()
    config.agents["QA_TESTER"].enabled = False

    factory = build_factory(config, cache=cache)

    assert AgentRole.QA_TESTER not in factory.get_available_roles()
    assert len(factory.get_available_roles()) == 5


def test_build_factory_applies_agent_settings(cache):
    config = TicketCrewConfig.default()
    config.agents["DEVOPS"].capabilities = ["cloud_services"]

    agent = build_factory(config, cache=cache).create_agent(AgentRole.DEVOPS)

    assert agent.max_concurrent_tasks == 8
    assert agent.capabilities == ["cloud_services"]


def test_build_orchestrator_uses_orchestration_settings(cache):
    config = TicketCrewConfig.model_validate(
        {"orchestration": {"hop_budget": 1, "default_role": "devops", "step_timeout": 2.5}}
    )
    logger = logging.getLogger("tests.orchestrator")

    orchestrator = build_orchestrator(config, cache=cache, logger=logger)

    assert orchestrator.hop_budget == 1
    assert orchestrator.default_role is AgentRole.DEVOPS
    assert orchestrator.step_timeout == 2.5
    assert orchestrator.logger is logger


def test_invalid_file_raises(tmp_path):
    write(tmp_path / ".ticketcrew.toml", "[orchestration]\ndefault_role = 'janitor'\n")

    with pytest.raises(ValueError):
        ConfigManager.reload()
