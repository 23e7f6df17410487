"""Tests for ticketcrew CLI commands"""
import json
import logging

import pytest
from click.testing import CliRunner

from ticketcrew.cli.main import cli


@pytest.fixture
def runner():
    """Create Click test runner"""
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_process_json_output(runner):
    result = runner.invoke(cli, [
        "--no-color", "process",
        "-s", "App crashes with exception on login",
        "-d", "Users report an error and crash",
        "--json",
    ])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["agents_involved"] == ["SOFTWARE_ENGINEER"]
    assert data["handoff_count"] == 0
    assert data["workflow"]["is_complete"] is True


def test_process_with_entry_agent_shows_chain(runner):
    result = runner.invoke(cli, [
        "--no-color", "process", "-s", "WordPress plugin broken", "--agent", "project_manager",
    ])

    assert result.exit_code == 0, result.output
    assert "PROJECT_MANAGER -> WORDPRESS_DEVELOPER" in result.stdout
    assert "Recommendations" in result.stdout


def test_process_from_file(runner, tmp_path):
    ticket_file = tmp_path / "ticket.json"
    ticket_file.write_text(json.dumps({
        "id": 321,
        "subject": "Server keeps restarting",
        "priority": "high",
    }))

    result = runner.invoke(cli, [
        "--no-color", "process", "--file", str(ticket_file), "--agent", "SOFTWARE_ENGINEER", "--json",
    ])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["ticket_id"] == 321
    assert data["agents_involved"] == ["SOFTWARE_ENGINEER", "DEVOPS"]


def test_process_requires_subject(runner):
    result = runner.invoke(cli, ["--no-color", "process"])

    assert result.exit_code == 1
    assert "Provide --subject" in result.output


def test_process_with_tools(runner):
    result = runner.invoke(cli, [
        "--no-color", "process", "-s", "API endpoint returns error",
        "--agent", "software_engineer", "--execute-tools", "--json",
    ])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["task_results"][0]["tool"] == "check_api_integration"


def test_config_file_option_sets_hop_budget(runner, tmp_path):
    config_file = tmp_path / "crew.toml"
    config_file.write_text("[orchestration]\nhop_budget = 0\n")

    result = runner.invoke(cli, [
        "--no-color", "--config", str(config_file),
        "process", "-s", "WordPress plugin broken", "--agent", "project_manager", "--json",
    ])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["agents_involved"] == ["PROJECT_MANAGER"]


def test_disabled_entry_agent_aborts(runner, tmp_path):
    config_file = tmp_path / "crew.toml"
    config_file.write_text("[agents.devops]\nenabled = false\n")

    result = runner.invoke(cli, [
        "--no-color", "--config", str(config_file),
        "process", "-s", "Outage", "--agent", "devops",
    ])

    assert result.exit_code == 1
    assert "No agent registered for role: DEVOPS" in result.output


def test_route_single_agent(runner):
    result = runner.invoke(cli, [
        "--no-color", "route", "software_engineer", "-s", "HTTP 500 server error on checkout", "--json",
    ])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["role"] == "SOFTWARE_ENGINEER"
    assert data["priority"] == "urgent"


def test_route_rejects_unrelated_ticket(runner):
    result = runner.invoke(cli, [
        "--no-color", "route", "SOFTWARE_ENGINEER", "-s", "Theme colours look off",
    ])

    assert result.exit_code == 1
    assert "cannot handle ticket" in result.output


def test_route_unknown_role(runner):
    result = runner.invoke(cli, ["--no-color", "route", "janitor", "-s", "x"])

    assert result.exit_code == 2


def test_agents_list(runner):
    result = runner.invoke(cli, ["--no-color", "agents", "list", "--json"])

    assert result.exit_code == 0, result.output
    statuses = json.loads(result.stdout)
    assert [s["role"] for s in statuses][:2] == ["PROJECT_MANAGER", "SOFTWARE_ENGINEER"]
    assert all(s["available"] for s in statuses)


def test_agents_list_table(runner):
    result = runner.invoke(cli, ["--no-color", "agents", "list"])

    assert result.exit_code == 0, result.output
    assert "Registered Agents" in result.stdout


def test_agents_validate(runner):
    result = runner.invoke(cli, ["--no-color", "agents", "validate"])

    assert result.exit_code == 0, result.output
    assert "All agent registrations are valid" in result.stdout


def test_agents_validate_reports_missing_dependency(runner, tmp_path):
    config_file = tmp_path / "crew.toml"
    config_file.write_text("[agents.devops]\ndependencies = ['metrics_client']\n")

    result = runner.invoke(cli, [
        "--no-color", "--config", str(config_file), "agents", "validate", "--json",
    ])

    assert result.exit_code == 1
    report = json.loads(result.stdout)
    assert report["valid"] is False
    assert "DEVOPS: dependency 'metrics_client' cannot be resolved" in report["errors"][0]


def test_config_show_json(runner):
    result = runner.invoke(cli, ["--no-color", "config", "show", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert set(data) == {"orchestration", "factory", "agents", "logging"}


def test_config_get(runner):
    result = runner.invoke(cli, ["--no-color", "config", "get", "orchestration.default_role"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == "PROJECT_MANAGER"


def test_config_get_unknown_key(runner):
    result = runner.invoke(cli, ["--no-color", "config", "get", "orchestration.nope"])

    assert result.exit_code == 1
    assert "Unknown config key" in result.output


def test_invalid_config_file_is_reported(runner, tmp_path):
    config_file = tmp_path / "crew.toml"
    config_file.write_text("[orchestration]\ndefault_role = 'janitor'\n")

    result = runner.invoke(cli, ["--no-color", "--config", str(config_file), "config", "show"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
