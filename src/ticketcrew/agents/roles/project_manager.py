"""Project manager profile - the default entry point and coordinator."""
from typing import Any

from ticketcrew.agents.protocol import AgentRole, AgentTool
from ticketcrew.agents.roles.protocol import (
    ClassificationRule,
    HandoffTrigger,
    RoleProfile,
    joined,
)


async def project_planning(params: dict[str, Any]) -> str:
    return (
        f"Project plan created: {params.get('project_name')} - Scope: {params.get('scope')}, "
        f"Timeline: {params.get('timeline')}, Resources: {joined(params.get('resources'))}"
    )


async def resource_allocation(params: dict[str, Any]) -> str:
    return (
        f"Resource allocation for {params.get('project')}: Team: "
        f"{joined(params.get('team_members'))}, Roles: {joined(params.get('roles'))}, "
        f"Workload: {params.get('workload')}"
    )


async def risk_management(params: dict[str, Any]) -> str:
    return (
        f"Risk management: Risks identified: {joined(params.get('risks'))}, "
        f"Impact: {params.get('impact_level')}, "
        f"Mitigation: {joined(params.get('mitigation_strategies'))}"
    )


async def progress_tracking(params: dict[str, Any]) -> str:
    completed = params.get("completed_tasks") or 0
    total = params.get("total_tasks") or 0
    progress = round(completed / total * 100) if total else 0
    return (
        f"Progress tracking for {params.get('project')}: {progress}% complete "
        f"({completed}/{total} tasks), Milestones: {joined(params.get('milestones'))}"
    )


async def stakeholder_communication(params: dict[str, Any]) -> str:
    return (
        f"Stakeholder communication: {params.get('communication_type')} to "
        f"{joined(params.get('stakeholders'))} {params.get('frequency')}, "
        f"Updates: {joined(params.get('updates'))}"
    )


async def quality_assurance(params: dict[str, Any]) -> str:
    return (
        f"Quality assurance for {params.get('deliverable')}: Criteria: "
        f"{joined(params.get('quality_criteria'))}, Status: {params.get('review_status')}"
    )


TOOLS = (
    AgentTool(
        name="project_planning",
        description="Create and manage project plans, timelines, and milestones",
        parameters={"project_name": "string", "scope": "string", "timeline": "string", "resources": "array"},
        execute=project_planning,
        triggers=("plan", "scope", "milestone", "timeline"),
        defaults={"project_name": "ticket", "scope": "as reported", "timeline": "tbd", "resources": []},
    ),
    AgentTool(
        name="resource_allocation",
        description="Allocate and manage project resources and team assignments",
        parameters={"project": "string", "team_members": "array", "roles": "array", "workload": "string"},
        execute=resource_allocation,
        triggers=("resource", "allocation", "assign", "capacity"),
        defaults={"project": "ticket", "team_members": [], "roles": [], "workload": "normal"},
    ),
    AgentTool(
        name="risk_management",
        description="Identify, assess, and mitigate project risks",
        parameters={"risks": "array", "impact_level": "string", "mitigation_strategies": "array"},
        execute=risk_management,
        triggers=("risk", "mitigation", "escalation"),
        defaults={"risks": [], "impact_level": "medium", "mitigation_strategies": []},
    ),
    AgentTool(
        name="progress_tracking",
        description="Track project progress and milestone completion",
        parameters={"project": "string", "completed_tasks": "number", "total_tasks": "number", "milestones": "array"},
        execute=progress_tracking,
        triggers=("progress", "status", "tracking"),
        defaults={"project": "ticket", "completed_tasks": 0, "total_tasks": 0, "milestones": []},
    ),
    AgentTool(
        name="stakeholder_communication",
        description="Manage stakeholder communication and reporting",
        parameters={"stakeholders": "array", "communication_type": "string", "frequency": "string", "updates": "array"},
        execute=stakeholder_communication,
        triggers=("stakeholder", "communication", "update"),
        defaults={"stakeholders": [], "communication_type": "status update", "frequency": "weekly", "updates": []},
    ),
    AgentTool(
        name="quality_assurance",
        description="Ensure project quality standards and deliverable reviews",
        parameters={"deliverable": "string", "quality_criteria": "array", "review_status": "string"},
        execute=quality_assurance,
        triggers=("quality", "deliverable", "review"),
        defaults={"deliverable": "ticket outcome", "quality_criteria": [], "review_status": "pending"},
    ),
)

RULES = (
    ClassificationRule(
        name="time_sensitive",
        when=("time_sensitive",),
        actions=(
            "Confirm the deadline and the business impact of missing it",
            "Assign an owner and escalate to the right specialist",
            "Schedule status updates until the ticket is resolved",
        ),
        complexity="medium",
        estimated_time="1-2 hours",
        priority="urgent",
    ),
    ClassificationRule(
        name="wordpress_issue",
        when=("wordpress",),
        actions=(
            "Log the affected site and component",
            "Assign the ticket to the WordPress developer",
            "Track progress and keep the requester informed",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
        next_agent=AgentRole.WORDPRESS_DEVELOPER,
    ),
    ClassificationRule(
        name="technical_issue",
        when=("debugging",),
        actions=(
            "Gather reproduction details from the requester",
            "Assign the ticket to the software engineer",
            "Track progress and keep the requester informed",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
        next_agent=AgentRole.SOFTWARE_ENGINEER,
    ),
    ClassificationRule(
        name="infrastructure_issue",
        when=("infrastructure",),
        actions=(
            "Confirm the affected environment",
            "Assign the ticket to DevOps",
            "Track progress and keep the requester informed",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
        next_agent=AgentRole.DEVOPS,
    ),
    ClassificationRule(
        name="testing_request",
        when=("testing",),
        actions=(
            "Confirm the scope of testing required",
            "Assign the ticket to QA",
            "Agree on the acceptance criteria with the requester",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
        next_agent=AgentRole.QA_TESTER,
    ),
    ClassificationRule(
        name="reporting_request",
        when=("business_intelligence",),
        actions=(
            "Confirm the audience and purpose of the report",
            "Assign the ticket to the business analyst",
            "Agree on the delivery date",
        ),
        complexity="simple",
        estimated_time="1-3 hours",
        next_agent=AgentRole.BUSINESS_ANALYST,
    ),
    ClassificationRule(
        name="requirements_request",
        when=("requirements_gathering",),
        actions=(
            "Collect the initial request details",
            "Assign the ticket to the business analyst",
            "Schedule a requirements session with the requester",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
        next_agent=AgentRole.BUSINESS_ANALYST,
    ),
)

FALLBACK = ClassificationRule(
    name="coordination",
    when=(),
    actions=(
        "Triage the request and confirm its priority",
        "Identify the specialist best suited to the ticket",
        "Set expectations with the requester",
    ),
    complexity="simple",
    estimated_time="1-2 hours",
)

PROFILE = RoleProfile(
    role=AgentRole.PROJECT_MANAGER,
    summary="Triage, coordination and stakeholder communication",
    capabilities=(
        "project_planning",
        "resource_management",
        "timeline_management",
        "risk_management",
        "stakeholder_communication",
        "quality_assurance",
        "budget_management",
        "team_coordination",
        "progress_monitoring",
    ),
    rules=RULES,
    fallback=FALLBACK,
    interests=("project_request",),
    handoff_triggers=(
        HandoffTrigger("wordpress", AgentRole.WORDPRESS_DEVELOPER),
        HandoffTrigger("debugging", AgentRole.SOFTWARE_ENGINEER),
        HandoffTrigger("api_integration", AgentRole.SOFTWARE_ENGINEER),
        HandoffTrigger("infrastructure", AgentRole.DEVOPS),
        HandoffTrigger("testing", AgentRole.QA_TESTER),
        HandoffTrigger("requirements_gathering", AgentRole.BUSINESS_ANALYST),
        HandoffTrigger("business_intelligence", AgentRole.BUSINESS_ANALYST),
    ),
    tools=TOOLS,
    default_recommendations=(
        "Confirm the ticket owner and priority",
        "Communicate the plan to the requester",
        "Track progress until resolution",
    ),
)
