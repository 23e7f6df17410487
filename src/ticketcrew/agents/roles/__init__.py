"""Built-in role profiles."""

from ticketcrew.agents.protocol import AgentRole
from ticketcrew.agents.roles import (
    business_analyst,
    devops,
    project_manager,
    qa_tester,
    software_engineer,
    wordpress_developer,
)
from ticketcrew.agents.roles.protocol import ClassificationRule, HandoffTrigger, RoleProfile

# Registration order; entry-agent selection walks roles in this order.
BUILTIN_PROFILES: dict[AgentRole, RoleProfile] = {
    profile.role: profile
    for profile in (
        project_manager.PROFILE,
        software_engineer.PROFILE,
        wordpress_developer.PROFILE,
        devops.PROFILE,
        qa_tester.PROFILE,
        business_analyst.PROFILE,
    )
}


def get_profile(role: AgentRole | str) -> RoleProfile:
    """Built-in profile for a role."""
    return BUILTIN_PROFILES[AgentRole.parse(role)]


__all__ = [
    "BUILTIN_PROFILES",
    "ClassificationRule",
    "HandoffTrigger",
    "RoleProfile",
    "get_profile",
]
