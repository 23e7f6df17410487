"""Generic role-bound agent driven by a RoleProfile."""

import json
import logging
import threading
import time
from collections.abc import Mapping
from typing import Any

from ticketcrew.agents.keywords import keywords_for, match_topic, matches_all
from ticketcrew.agents.memory import MemoryEntry, MemoryLog
from ticketcrew.agents.protocol import (
    AgentAnalysis,
    AgentRole,
    AgentSpec,
    AgentTool,
    CancellationToken,
    HandoffDecision,
    TaskResult,
    Ticket,
)
from ticketcrew.agents.roles.protocol import ClassificationRule, RoleProfile
from ticketcrew.errors import ToolExecutionError

BASE_CONFIDENCE = 0.5


class RoleAgent:
    """A specialist agent.

    Every role shares this implementation; the profile supplies the keyword
    rule tables, handoff triggers and tools that make the role distinct.
    """

    def __init__(self, profile: RoleProfile, spec: AgentSpec) -> None:
        if spec.role is not profile.role:
            raise ValueError(
                f"Profile for {profile.role.value} cannot build an agent for {spec.role.value}"
            )
        self.profile = profile
        self.role: AgentRole = spec.role
        self.capabilities: list[str] = list(spec.capabilities) or list(profile.capabilities)
        self.tools: list[AgentTool] = _merge_tools(profile.tools, spec.tools)
        self.max_concurrent_tasks = spec.max_concurrent_tasks
        self.dependencies: dict[str, Any] = spec.dependencies
        self.logger: logging.Logger = self.dependencies.get("logger") or logging.getLogger(
            f"{__name__}.{self.role.value.lower()}"
        )
        self.memory = MemoryLog()

        self._metrics_lock = threading.Lock()
        self._in_flight = 0
        self._tasks_processed = 0
        self._failures = 0
        self._total_time = 0.0

    # --- Classification ---

    def classify(self, content: str) -> ClassificationRule:
        """First rule (in declaration order) whose topics all match."""
        for rule in self.profile.rules:
            if matches_all(content, rule.when):
                return rule
        return self.profile.fallback

    def calculate_confidence(self, content: str) -> float:
        """Share of the agent's capabilities mentioned by the ticket, scaled into [0.5, 1]."""
        if not self.capabilities:
            return BASE_CONFIDENCE
        matched = sum(1 for capability in self.capabilities if match_topic(content, capability))
        return BASE_CONFIDENCE + (1 - BASE_CONFIDENCE) * matched / len(self.capabilities)

    async def analyze(
        self, ticket: Ticket, cancel_token: CancellationToken | None = None
    ) -> AgentAnalysis:
        """Classify the ticket and recommend actions."""
        if cancel_token is not None:
            cancel_token.raise_if_cancelled(ticket.id, self.role)

        started = time.perf_counter()
        self._begin()
        success = False
        try:
            analysis = self._analyze(ticket)
            success = True
        finally:
            self._finish(started, success=success)
        return analysis

    def _analyze(self, ticket: Ticket) -> AgentAnalysis:
        content = ticket.content
        rule = self.classify(content)
        confidence = rule.confidence if rule.confidence is not None else self.calculate_confidence(content)
        confidence = min(1.0, max(0.0, confidence))
        priority = rule.priority or ticket.priority
        matched = sorted(
            {kw for kw in (match_topic(content, topic) for topic in rule.when) if kw}
        )

        analysis = AgentAnalysis(
            role=self.role,
            analysis=_describe(self.role, rule, matched),
            confidence=round(confidence, 4),
            recommended_actions=rule.actions,
            next_agent=rule.next_agent if rule.next_agent is not self.role else None,
            priority=priority,
            estimated_time=rule.estimated_time,
            complexity=rule.complexity,
        )

        self.store_memory(
            ticket.id,
            "analysis",
            "\n".join(rule.actions),
            {
                "rule": rule.name,
                "complexity": rule.complexity,
                "estimated_time": rule.estimated_time,
                "priority": priority,
                "matched_keywords": matched,
            },
        )
        self.logger.debug(
            "%s classified ticket %s as %s (confidence %.2f)",
            self.role.value, ticket.id, rule.name, analysis.confidence,
        )
        return analysis

    # --- Tool dispatch ---

    def select_tool(self, task_text: str) -> AgentTool | None:
        """First tool whose triggers appear in the task text."""
        text = task_text.lower()
        for tool in self.tools:
            if any(trigger.lower() in text for trigger in tool.triggers):
                return tool
        return None

    async def execute(
        self,
        task: str | Ticket,
        context: Mapping[str, Any] | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> TaskResult:
        """Run the task through the matching tool.

        Tool failures are returned as a failed TaskResult, never raised.
        """
        context = dict(context or {})
        if isinstance(task, Ticket):
            ticket_id = task.id
            label = task.subject
            text = f"{task.subject} {task.description}"
        else:
            ticket_id = context.get("ticket_id", 0)
            label = text = str(task)

        started = time.perf_counter()
        self._begin()
        success = False
        try:
            tool = self.select_tool(text)
            if tool is None:
                result = TaskResult(
                    status="completed",
                    details=f"{self.role.display_name} task executed: {label}",
                    recommendations=list(self.profile.default_recommendations),
                )
            else:
                if cancel_token is not None:
                    cancel_token.raise_if_cancelled(ticket_id, self.role)
                result = await self._run_tool(tool, context)

            self.store_memory(ticket_id, "task_execution", json.dumps(result.to_dict(), default=str))
            success = not result.is_error
        finally:
            # timeouts and cancellation surface here as CancelledError
            self._finish(started, success=success)
        return result

    async def _run_tool(self, tool: AgentTool, context: dict[str, Any]) -> TaskResult:
        try:
            output = await tool.execute(tool.build_params(context))
        except Exception as e:
            error = ToolExecutionError(tool.name, self.role, e)
            self.logger.warning("%s", error)
            return TaskResult(
                status="failed",
                details=f"{self.role.display_name} task execution failed",
                tool=tool.name,
                error=str(error),
            )

        if isinstance(output, Mapping) and "recommendations" in output:
            recommendations = [str(r) for r in output["recommendations"]]
        else:
            recommendations = [str(output)] if output else []
        return TaskResult(
            status="completed",
            details=f"{tool.description} completed",
            tool=tool.name,
            output=output,
            recommendations=recommendations,
        )

    # --- Handoff ---

    def evaluate_handoff(self, context: Any) -> HandoffDecision | None:
        """First handoff trigger that matches the context, with its category."""
        content = _content_of(context)
        for trigger in self.profile.handoff_triggers:
            if trigger.target is self.role:
                continue
            keyword = match_topic(content, trigger.category)
            if keyword:
                return HandoffDecision(role=trigger.target, category=trigger.category, keyword=keyword)
        return None

    async def should_handoff(self, context: Any) -> AgentRole | None:
        """Role better suited to continue with the ticket, if any."""
        decision = self.evaluate_handoff(context)
        return decision.role if decision else None

    def can_handle(self, ticket: Ticket) -> bool:
        """Whether the ticket mentions anything in the agent's vocabulary."""
        content = ticket.content
        topics = self.profile.interests or tuple(self.capabilities)
        return any(match_topic(content, topic) for topic in topics)

    def keywords_for_capability(self, capability: str) -> tuple[str, ...]:
        return keywords_for(capability)

    def get_capabilities(self) -> list[str]:
        return list(self.capabilities)

    # --- Memory ---

    def store_memory(
        self, ticket_id: Any, kind: str, content: str, meta: dict[str, Any] | None = None
    ) -> MemoryEntry:
        """Append an entry to this agent's log for the ticket."""
        entry = MemoryEntry(
            ticket_id=ticket_id,
            role=self.role.value,
            kind=kind,
            content=content,
            meta=dict(meta or {}),
        )
        self.memory.append(entry)
        return entry

    def get_memory(self, ticket_id: Any) -> tuple[MemoryEntry, ...]:
        return self.memory.entries(ticket_id)

    # --- Metrics ---

    def _begin(self) -> None:
        with self._metrics_lock:
            self._in_flight += 1

    def _finish(self, started: float, success: bool) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000
        with self._metrics_lock:
            self._in_flight -= 1
            self._tasks_processed += 1
            self._total_time += elapsed_ms
            if not success:
                self._failures += 1

    def get_metrics(self) -> dict[str, Any]:
        with self._metrics_lock:
            processed = self._tasks_processed
            return {
                "tasks_processed": processed,
                "failures": self._failures,
                "in_flight": self._in_flight,
                "success_rate": (processed - self._failures) / processed if processed else 0.0,
                "average_processing_time_ms": self._total_time / processed if processed else 0.0,
            }

    def reset_metrics(self) -> None:
        with self._metrics_lock:
            self._tasks_processed = 0
            self._failures = 0
            self._total_time = 0.0

    def describe(self) -> dict[str, Any]:
        """Status summary for listings."""
        return {
            "role": self.role.value,
            "name": self.role.display_name,
            "summary": self.profile.summary,
            "capabilities": self.get_capabilities(),
            "tools": [tool.name for tool in self.tools],
            "max_concurrent_tasks": self.max_concurrent_tasks,
            "metrics": self.get_metrics(),
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} role={self.role.value!r}>"


def _merge_tools(
    profile_tools: tuple[AgentTool, ...], extra_tools: list[AgentTool]
) -> list[AgentTool]:
    """Profile tools first; a caller tool with the same name replaces the profile's."""
    merged = {tool.name: tool for tool in profile_tools}
    for tool in extra_tools:
        merged[tool.name] = tool
    return list(merged.values())


def _describe(role: AgentRole, rule: ClassificationRule, matched: list[str]) -> str:
    lines = [
        f"{role.display_name} assessment: {rule.name.replace('_', ' ')}",
        f"Complexity: {rule.complexity}, estimated time: {rule.estimated_time}",
    ]
    if matched:
        lines.append(f"Matched keywords: {', '.join(matched)}")
    if rule.next_agent and rule.next_agent is not role:
        lines.append(f"Suggested specialist: {rule.next_agent.display_name}")
    return "\n".join(lines)


def _content_of(context: Any) -> str:
    """Lower-cased subject/description text from a ticket, mapping or workflow context."""
    if context is None:
        return ""
    if isinstance(context, Ticket):
        return context.content
    if isinstance(context, str):
        return context.lower()
    if isinstance(context, Mapping):
        if "ticket" in context:
            return _content_of(context["ticket"])
        return f"{context.get('subject') or ''} {context.get('description') or ''}".lower()
    ticket = getattr(context, "ticket", None)
    if ticket is not None:
        return _content_of(ticket)
    inner = getattr(context, "context", None)
    if inner is not None:
        return _content_of(inner)
    subject = getattr(context, "subject", "") or ""
    description = getattr(context, "description", "") or ""
    return f"{subject} {description}".lower()
