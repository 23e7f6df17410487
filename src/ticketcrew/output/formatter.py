"""Output formatting using Rich for terminal output."""

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from ticketcrew.agents.protocol import AgentAnalysis, ValidationReport
from ticketcrew.orchestration.models import MultiAgentResponse

TICKETCREW_THEME = Theme(
    {
        "agent": "cyan",
        "success": "green",
        "error": "red bold",
        "warning": "yellow",
        "info": "blue",
        "metadata": "dim",
        "complexity.simple": "green",
        "complexity.medium": "yellow",
        "complexity.complex": "red",
    }
)


class OutputFormatter:
    """Handles all output formatting for ticketcrew."""

    def __init__(self, color: bool = True, verbose: bool = False) -> None:
        self.console = Console(theme=TICKETCREW_THEME, force_terminal=color, no_color=not color)
        self.verbose = verbose

    def print_error(self, message: str, role: str | None = None) -> None:
        """Print an error message."""
        prefix = escape(f"[{role}] ") if role else ""
        self.console.print(f"[error]{prefix}Error: {escape(message)}[/error]")

    def print_success(self, message: str) -> None:
        self.console.print(f"[success]{message}[/success]")

    def print_info(self, message: str) -> None:
        self.console.print(f"[info]{message}[/info]")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[warning]{message}[/warning]")

    def print_json(self, data: Any) -> None:
        """Print data as plain JSON, without highlighting."""
        self.console.print_json(json.dumps(data, default=str), highlight=False)

    def print_analysis(self, analysis: AgentAnalysis) -> None:
        """Print a single agent analysis as a panel."""
        complexity = analysis.complexity or "medium"
        lines = [
            analysis.analysis,
            "",
            f"Confidence: {analysis.confidence:.2f}",
            f"Complexity: [complexity.{complexity}]{complexity}[/complexity.{complexity}]",
            f"Estimated time: {analysis.estimated_time or 'n/a'}",
        ]
        if analysis.priority:
            lines.append(f"Priority: {analysis.priority}")
        if analysis.next_agent:
            lines.append(f"Suggested next agent: {analysis.next_agent.value}")
        if analysis.recommended_actions:
            lines.append("")
            lines.extend(f"- {action}" for action in analysis.recommended_actions)
        self.console.print(Panel(
            "\n".join(lines),
            title=f"[agent]{analysis.role.display_name}[/agent]",
            border_style="agent",
        ))

    def print_response(self, response: MultiAgentResponse) -> None:
        """Print the result of a multi-agent workflow."""
        chain = " -> ".join(role.value for role in response.agents_involved)
        self.console.print(f"[info]Ticket {response.ticket_id}[/info]: {chain}")
        if response.workflow.handoff_reason:
            self.console.print(f"[metadata]Last handoff: {response.workflow.handoff_reason}[/metadata]")

        if self.verbose:
            for analysis in response.agent_analyses:
                self.print_analysis(analysis)

        table = Table(title="Recommendations")
        table.add_column("#", justify="right", style="metadata")
        table.add_column("Action")
        for index, recommendation in enumerate(response.final_recommendations, start=1):
            table.add_row(str(index), recommendation)
        self.console.print(table)

        self.console.print(
            f"[metadata](confidence={response.confidence:.2f}, "
            f"handoffs={response.handoff_count}, "
            f"time={response.processing_time_ms:.1f}ms)[/metadata]"
        )

    def print_agent_list(self, statuses: list[dict[str, Any]]) -> None:
        """Print registered agents with their availability."""
        table = Table(title="Registered Agents")
        table.add_column("Role", style="cyan")
        table.add_column("Summary")
        table.add_column("Max tasks", justify="right")
        table.add_column("Tools")
        table.add_column("Status", justify="center")

        for status in statuses:
            available = status.get("available", False)
            table.add_row(
                status["role"],
                status.get("summary", status.get("error", "")),
                str(status.get("max_concurrent_tasks", "")),
                ", ".join(status.get("tools", [])),
                "[success]available[/success]" if available else "[error]unavailable[/error]",
            )

        self.console.print(table)

    def print_validation(self, report: ValidationReport) -> None:
        """Print the outcome of a registration audit."""
        if report.valid:
            self.print_success("All agent registrations are valid")
            return
        self.print_error(f"{len(report.errors)} problem(s) found")
        for error in report.errors:
            self.console.print(f"  - {error}", markup=False)

    def print_config(self, config: dict[str, Any]) -> None:
        """Print configuration sections as tables."""
        for section, values in config.items():
            table = Table(title=section)
            table.add_column("Key", style="cyan")
            table.add_column("Value")
            if isinstance(values, dict):
                for key, value in values.items():
                    table.add_row(str(key), json.dumps(value, default=str))
            else:
                table.add_row(section, json.dumps(values, default=str))
            self.console.print(table)


# Global formatter instance
_formatter: OutputFormatter | None = None


def get_formatter(color: bool = True, verbose: bool = False) -> OutputFormatter:
    """Get or create the global formatter instance."""
    global _formatter
    if _formatter is None:
        _formatter = OutputFormatter(color=color, verbose=verbose)
    return _formatter
