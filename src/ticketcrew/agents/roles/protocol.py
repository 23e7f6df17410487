"""Role profile records - the per-role tables a RoleAgent is driven by."""
from dataclasses import dataclass, field
from typing import Any

from ticketcrew.agents.keywords import KEYWORDS
from ticketcrew.agents.protocol import AgentRole, AgentTool, Complexity, Priority


@dataclass(frozen=True)
class ClassificationRule:
    """One row of an agent's ordered classification table.

    The rule matches when every topic in ``when`` has a keyword in the ticket.
    """

    name: str
    when: tuple[str, ...]
    actions: tuple[str, str, str]
    complexity: Complexity = "medium"
    estimated_time: str = "2-4 hours"
    priority: Priority | None = None
    confidence: float | None = None
    next_agent: AgentRole | None = None


@dataclass(frozen=True)
class HandoffTrigger:
    """Hand the ticket to ``target`` when the ``category`` topic matches."""

    category: str
    target: AgentRole


@dataclass(frozen=True)
class RoleProfile:
    """Everything that distinguishes one specialist from another."""

    role: AgentRole
    summary: str
    capabilities: tuple[str, ...]
    rules: tuple[ClassificationRule, ...]
    fallback: ClassificationRule
    handoff_triggers: tuple[HandoffTrigger, ...]
    tools: tuple[AgentTool, ...] = ()
    interests: tuple[str, ...] = ()
    default_recommendations: tuple[str, ...] = field(default_factory=tuple)

    @property
    def vocabulary_topics(self) -> tuple[str, ...]:
        """Topics whose keywords make up the agent's interest vocabulary.

        Profiles without explicit interests claim tickets by capability.
        """
        return self.interests or self.capabilities

    def referenced_topics(self) -> set[str]:
        topics = set(self.capabilities + self.interests)
        for rule in self.rules:
            topics.update(rule.when)
        topics.update(trigger.category for trigger in self.handoff_triggers)
        return topics

    def check(self) -> list[str]:
        """Problems with the profile tables (unknown topics, self handoffs)."""
        problems = [
            f"{self.role.value}: unknown keyword topic '{topic}'"
            for topic in sorted(self.referenced_topics())
            if topic not in KEYWORDS
        ]
        for trigger in self.handoff_triggers:
            if trigger.target is self.role:
                problems.append(
                    f"{self.role.value}: handoff trigger '{trigger.category}' targets its own role"
                )
        if self.fallback.when:
            problems.append(f"{self.role.value}: fallback rule must not have conditions")
        return problems


def joined(value: Any, sep: str = ", ") -> str:
    """Render a list-valued tool parameter for a tool's text output."""
    if isinstance(value, (list, tuple)):
        return sep.join(str(v) for v in value)
    return "" if value is None else str(value)
