"""Business analyst profile."""
from typing import Any

from ticketcrew.agents.protocol import AgentRole, AgentTool
from ticketcrew.agents.roles.protocol import (
    ClassificationRule,
    HandoffTrigger,
    RoleProfile,
    joined,
)


async def requirements_analysis(params: dict[str, Any]) -> str:
    return (
        f"Requirements analysis: {params.get('requirement')} for stakeholders: "
        f"{joined(params.get('stakeholders'))} (Priority: {params.get('priority')})"
    )


async def data_analysis(params: dict[str, Any]) -> str:
    return (
        f"Data analysis from {params.get('data_source')}: "
        f"{joined(params.get('metrics'))} over {params.get('time_period')}"
    )


async def process_optimization(params: dict[str, Any]) -> str:
    return (
        f"Process optimization for {params.get('process')}: Current state - "
        f"{params.get('current_state')}. Improvements: {joined(params.get('improvement_areas'))}"
    )


async def roi_analysis(params: dict[str, Any]) -> str:
    return (
        f"ROI analysis: Investment ${params.get('investment')}, Benefits: "
        f"{joined(params.get('expected_benefits'))} over {params.get('timeframe')}"
    )


async def stakeholder_impact_assessment(params: dict[str, Any]) -> str:
    return (
        f"Stakeholder impact assessment: {params.get('change')} affects "
        f"{joined(params.get('stakeholders'))} with {params.get('impact_level')} impact"
    )


async def reporting_dashboard(params: dict[str, Any]) -> str:
    return (
        f"BI Report: {params.get('report_type')} tracking {joined(params.get('kpis'))} "
        f"for {params.get('audience')}"
    )


TOOLS = (
    AgentTool(
        name="requirements_analysis",
        description="Analyze business requirements and stakeholder needs",
        parameters={"requirement": "string", "stakeholders": "array", "priority": "string"},
        execute=requirements_analysis,
        triggers=("requirement", "specification", "user story", "acceptance criteria"),
        defaults={"requirement": "reported requirement", "stakeholders": [], "priority": "normal"},
    ),
    AgentTool(
        name="data_analysis",
        description="Analyze business data and metrics",
        parameters={"data_source": "string", "metrics": "array", "time_period": "string"},
        execute=data_analysis,
        triggers=("data", "analytics", "metrics", "insights"),
        defaults={"data_source": "ticket history", "metrics": [], "time_period": "last 30 days"},
    ),
    AgentTool(
        name="process_optimization",
        description="Identify process improvements",
        parameters={"process": "string", "current_state": "string", "improvement_areas": "array"},
        execute=process_optimization,
        triggers=("process", "workflow", "efficiency"),
        defaults={"process": "support workflow", "current_state": "undocumented", "improvement_areas": []},
    ),
    AgentTool(
        name="roi_analysis",
        description="Estimate return on investment",
        parameters={"investment": "number", "expected_benefits": "array", "timeframe": "string"},
        execute=roi_analysis,
        triggers=("roi", "cost", "budget", "investment"),
        defaults={"investment": 0, "expected_benefits": [], "timeframe": "12 months"},
    ),
    AgentTool(
        name="stakeholder_impact_assessment",
        description="Assess the impact of a change on stakeholders",
        parameters={"change": "string", "stakeholders": "array", "impact_level": "string"},
        execute=stakeholder_impact_assessment,
        triggers=("stakeholder", "impact", "client"),
        defaults={"change": "proposed change", "stakeholders": [], "impact_level": "medium"},
    ),
    AgentTool(
        name="reporting_dashboard",
        description="Design business intelligence reports",
        parameters={"report_type": "string", "kpis": "array", "audience": "string"},
        execute=reporting_dashboard,
        triggers=("report", "dashboard", "kpi"),
        defaults={"report_type": "summary", "kpis": [], "audience": "management"},
    ),
)

RULES = (
    ClassificationRule(
        name="requirements",
        when=("requirements_gathering",),
        actions=(
            "Interview stakeholders to capture the requirement",
            "Write user stories with acceptance criteria",
            "Prioritise the requirement against the backlog",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
    ),
    ClassificationRule(
        name="data_analysis",
        when=("data_analysis",),
        actions=(
            "Identify the data sources and their owners",
            "Define the metrics that answer the question",
            "Summarise findings with supporting charts",
        ),
        complexity="medium",
        estimated_time="3-5 hours",
    ),
    ClassificationRule(
        name="business_intelligence",
        when=("business_intelligence",),
        actions=(
            "Agree on the KPIs and their definitions",
            "Design the report or dashboard layout",
            "Schedule automated refreshes",
        ),
        complexity="medium",
        estimated_time="3-6 hours",
    ),
    ClassificationRule(
        name="process_optimization",
        when=("process_optimization",),
        actions=(
            "Map the current process end to end",
            "Identify bottlenecks and manual steps",
            "Propose and measure improvements",
        ),
        complexity="complex",
        estimated_time="4-8 hours",
    ),
    ClassificationRule(
        name="cost_benefit",
        when=("cost_benefit_analysis",),
        actions=(
            "Estimate the costs of each option",
            "Quantify the expected benefits",
            "Present ROI and payback period",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
    ),
    ClassificationRule(
        name="stakeholder_management",
        when=("stakeholder_management",),
        actions=(
            "Identify affected stakeholders",
            "Plan communication for each group",
            "Track feedback and open concerns",
        ),
        complexity="simple",
        estimated_time="1-2 hours",
    ),
    ClassificationRule(
        name="project_planning",
        when=("project_planning",),
        actions=(
            "Define scope and deliverables",
            "Break the work into milestones",
            "Align the timeline with stakeholders",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
    ),
    ClassificationRule(
        name="risk_assessment",
        when=("risk_assessment",),
        actions=(
            "List risks with likelihood and impact",
            "Check applicable compliance requirements",
            "Define mitigation owners",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
    ),
    ClassificationRule(
        name="system_integration",
        when=("system_integration",),
        actions=(
            "Document the data exchanged between the systems",
            "Define field mappings and ownership",
            "Agree on error handling with both system owners",
        ),
        complexity="medium",
        estimated_time="3-5 hours",
    ),
    ClassificationRule(
        name="service_quality",
        when=("service_quality",),
        actions=(
            "Compare service levels against the SLA",
            "Identify recurring quality issues",
            "Propose measurable quality targets",
        ),
        complexity="simple",
        estimated_time="1-3 hours",
    ),
    ClassificationRule(
        name="development_request",
        when=("development_request",),
        actions=(
            "Capture the functional requirement",
            "Define acceptance criteria",
            "Hand over to the software engineer for implementation",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
        next_agent=AgentRole.SOFTWARE_ENGINEER,
    ),
    ClassificationRule(
        name="validation_request",
        when=("validation_request",),
        actions=(
            "Summarise the acceptance criteria to validate",
            "Identify the test data needed",
            "Hand over to QA for validation",
        ),
        complexity="simple",
        estimated_time="1-2 hours",
        next_agent=AgentRole.QA_TESTER,
    ),
)

FALLBACK = ClassificationRule(
    name="business_review",
    when=(),
    actions=(
        "Clarify the business goal behind the request",
        "Identify the stakeholders involved",
        "Define success criteria",
    ),
    complexity="simple",
    estimated_time="1-2 hours",
)

PROFILE = RoleProfile(
    role=AgentRole.BUSINESS_ANALYST,
    summary="Requirements, data analysis and business process improvement",
    capabilities=(
        "requirements_gathering",
        "data_analysis",
        "process_optimization",
        "business_intelligence",
        "stakeholder_management",
        "project_planning",
        "risk_assessment",
        "cost_benefit_analysis",
        "reporting_analytics",
        "system_integration",
    ),
    rules=RULES,
    fallback=FALLBACK,
    interests=("business_request",),
    handoff_triggers=(
        HandoffTrigger("implementation_handoff", AgentRole.SOFTWARE_ENGINEER),
        HandoffTrigger("acceptance_testing", AgentRole.QA_TESTER),
        HandoffTrigger("infrastructure_planning", AgentRole.DEVOPS),
        HandoffTrigger("content_management", AgentRole.WORDPRESS_DEVELOPER),
    ),
    tools=TOOLS,
    default_recommendations=(
        "Clarify the business objective",
        "Identify affected stakeholders",
        "Define measurable success criteria",
    ),
)
