"""Main CLI entry point for ticketcrew."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import click
import toml
from rich.console import Console
from rich.logging import RichHandler

from ticketcrew.agents.protocol import AgentRole, Ticket
from ticketcrew.config import build_factory, build_orchestrator
from ticketcrew.config.manager import ConfigManager
from ticketcrew.errors import TicketCrewError, WorkflowAborted
from ticketcrew.output.formatter import get_formatter

ROLE_CHOICES = [role.value for role in AgentRole]


def _setup_logging(level: str, verbose: bool, show_path: bool = False) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=show_path)],
        force=True,
    )


def _load_ticket(
    file: Path | None,
    ticket_id: str | None,
    subject: str | None,
    description: str | None,
    priority: str,
) -> Ticket:
    """Build a ticket from a JSON file or from command-line options."""
    formatter = get_formatter()
    if file is not None:
        try:
            data = json.loads(file.read_text())
        except (OSError, json.JSONDecodeError) as e:
            formatter.print_error(f"Cannot read ticket file {file}: {e}")
            raise SystemExit(1)
        if not isinstance(data, dict) or "id" not in data:
            formatter.print_error("Ticket file must contain a JSON object with an 'id'")
            raise SystemExit(1)
        return Ticket.from_dict(data)

    if not subject:
        formatter.print_error("Provide --subject (and optionally --description) or --file")
        raise SystemExit(1)
    return Ticket(
        id=ticket_id or "cli",
        subject=subject,
        description=description or "",
        priority=priority,
    )


def ticket_options(func: Any) -> Any:
    """Shared options describing the ticket to process."""
    options = [
        click.option("--id", "ticket_id", help="Ticket id"),
        click.option("-s", "--subject", help="Ticket subject"),
        click.option("-d", "--description", help="Ticket description"),
        click.option(
            "-p",
            "--priority",
            type=click.Choice(["low", "normal", "high", "urgent"]),
            default="normal",
            show_default=True,
            help="Ticket priority",
        ),
        click.option(
            "-f",
            "--file",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Read the ticket from a JSON file",
        ),
        click.option("--json", "output_json", is_flag=True, help="JSON output"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option("--no-color", is_flag=True, help="Disable colors")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Extra TOML config file, applied last",
)
@click.version_option(package_name="ticketcrew")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    no_color: bool,
    config_path: Path | None,
) -> None:
    """Ticketcrew - route support tickets through specialist agents.

    \b
    Examples:
        ticketcrew process -s "Checkout broken" -d "WooCommerce payment fails"
        ticketcrew process -f ticket.json --json
        ticketcrew route SOFTWARE_ENGINEER -s "API returns 500"
        ticketcrew agents list
        ticketcrew config get orchestration.hop_budget
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["no_color"] = no_color

    # Initialize formatter
    formatter = get_formatter(color=not no_color, verbose=verbose)

    try:
        config = ConfigManager.reload(config_path) if config_path else ConfigManager.get_config()
    except (ValueError, toml.TomlDecodeError) as e:
        formatter.print_error(f"Invalid configuration: {e}")
        raise SystemExit(1)
    _setup_logging(config.logging.level, verbose, config.logging.show_path)


@cli.command()
@ticket_options
@click.option(
    "-a",
    "--agent",
    "entry_role",
    type=click.Choice(ROLE_CHOICES, case_sensitive=False),
    help="Start the workflow with this agent instead of auto-selecting",
)
@click.option("--execute-tools", is_flag=True, help="Also run each agent's tools")
def process(
    ticket_id: str | None,
    subject: str | None,
    description: str | None,
    priority: str,
    file: Path | None,
    output_json: bool,
    entry_role: str | None,
    execute_tools: bool,
) -> None:
    """Run a ticket through the multi-agent workflow."""
    ticket = _load_ticket(file, ticket_id, subject, description, priority)
    asyncio.run(_process(ticket, entry_role, output_json, execute_tools))


async def _process(
    ticket: Ticket,
    entry_role: str | None,
    output_json: bool,
    execute_tools: bool,
) -> None:
    formatter = get_formatter()
    orchestrator = build_orchestrator(ConfigManager.get_config())
    if execute_tools:
        orchestrator.execute_tools = True

    try:
        response = await orchestrator.process_ticket(ticket, entry_role=entry_role)
    except WorkflowAborted as e:
        if output_json:
            formatter.print_json({
                "error": str(e),
                "workflow": e.state.to_dict() if e.state is not None else None,
            })
        else:
            formatter.print_error(str(e), e.role.value if isinstance(e.role, AgentRole) else None)
        raise SystemExit(1)

    if output_json:
        formatter.print_json(response.to_dict())
    else:
        formatter.print_response(response)


@cli.command()
@click.argument("role", type=click.Choice(ROLE_CHOICES, case_sensitive=False))
@ticket_options
def route(
    role: str,
    ticket_id: str | None,
    subject: str | None,
    description: str | None,
    priority: str,
    file: Path | None,
    output_json: bool,
) -> None:
    """Analyze a ticket with a single agent, without handoffs."""
    ticket = _load_ticket(file, ticket_id, subject, description, priority)
    asyncio.run(_route(ticket, role, output_json))


async def _route(ticket: Ticket, role: str, output_json: bool) -> None:
    formatter = get_formatter()
    orchestrator = build_orchestrator(ConfigManager.get_config())
    try:
        analysis = await orchestrator.route_to_agent(ticket, role)
    except TicketCrewError as e:
        formatter.print_error(str(e), role.upper())
        raise SystemExit(1)

    if output_json:
        formatter.print_json(analysis.to_dict())
    else:
        formatter.print_analysis(analysis)


# --- Subcommands ---


@cli.group()
def agents() -> None:
    """Inspect registered agents."""
    pass


@agents.command("list")
@click.option("--json", "output_json", is_flag=True, help="JSON output")
def agents_list(output_json: bool) -> None:
    """List registered agents and whether they can be created."""
    formatter = get_formatter()
    orchestrator = build_orchestrator(ConfigManager.get_config())
    statuses = orchestrator.get_agent_statuses()

    if output_json:
        formatter.print_json(statuses)
        return
    if not statuses:
        formatter.print_warning("No agents registered")
        return
    formatter.print_agent_list(statuses)


@agents.command("validate")
@click.option("--json", "output_json", is_flag=True, help="JSON output")
def agents_validate(output_json: bool) -> None:
    """Audit agent registrations and dependencies."""
    formatter = get_formatter()
    factory = build_factory(ConfigManager.get_config())
    report = factory.validate_registrations()

    if output_json:
        formatter.print_json(report.to_dict())
    else:
        formatter.print_validation(report)
    if not report.valid:
        raise SystemExit(1)


@cli.group()
def config() -> None:
    """Inspect configuration."""
    pass


@config.command("show")
@click.option("--json", "output_json", is_flag=True, help="JSON output")
def config_show(output_json: bool) -> None:
    """Show current configuration."""
    formatter = get_formatter()
    config_dict = ConfigManager.get_config().model_dump()

    if output_json:
        formatter.print_json(config_dict)
    else:
        formatter.print_config(config_dict)


@config.command("get")
@click.argument("key")
def config_get(key: str) -> None:
    """Print one value by dot-separated path, e.g. orchestration.hop_budget."""
    formatter = get_formatter()
    missing = object()
    value = ConfigManager.get_value(key, missing)
    if value is missing:
        formatter.print_error(f"Unknown config key: {key}")
        raise SystemExit(1)
    formatter.print_json(value)


if __name__ == "__main__":
    cli()
