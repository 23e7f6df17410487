"""QA tester profile."""
from typing import Any

from ticketcrew.agents.protocol import AgentRole, AgentTool
from ticketcrew.agents.roles.protocol import (
    ClassificationRule,
    HandoffTrigger,
    RoleProfile,
    joined,
)


async def test_case_analysis(params: dict[str, Any]) -> str:
    return (
        f"Test case analysis for {params.get('feature')}: "
        f"{params.get('issue_type')} (Priority: {params.get('priority')})"
    )


async def bug_reproduction(params: dict[str, Any]) -> str:
    return (
        f"Bug reproduction: {joined(params.get('steps'), ' -> ')} in "
        f"{params.get('environment')}. Expected: {params.get('expected_result')}"
    )


async def regression_testing(params: dict[str, Any]) -> str:
    return (
        f"Regression testing: {params.get('test_suite')} covering "
        f"{joined(params.get('affected_areas'))}. Results: {params.get('test_results')}"
    )


async def performance_testing(params: dict[str, Any]) -> str:
    return (
        f"Performance testing: {params.get('test_type')} measuring "
        f"{joined(params.get('metrics'))} against {params.get('benchmark')}"
    )


async def usability_testing(params: dict[str, Any]) -> str:
    return (
        f"Usability testing: {params.get('user_flow')}. "
        f"Issues: {joined(params.get('usability_issues'))}. "
        f"Recommendations: {joined(params.get('recommendations'))}"
    )


async def compatibility_testing(params: dict[str, Any]) -> str:
    return (
        f"Compatibility testing across {joined(params.get('platforms'))} and "
        f"{joined(params.get('browsers'))}. Issues: {joined(params.get('compatibility_issues'))}"
    )


TOOLS = (
    AgentTool(
        name="test_case_analysis",
        description="Analyze test cases and coverage for a feature",
        parameters={"feature": "string", "issue_type": "string", "priority": "string"},
        execute=test_case_analysis,
        triggers=("test case", "test plan", "coverage"),
        defaults={"feature": "reported feature", "issue_type": "functional", "priority": "normal"},
    ),
    AgentTool(
        name="bug_reproduction",
        description="Reproduce reported bugs step by step",
        parameters={"steps": "array", "environment": "string", "expected_result": "string"},
        execute=bug_reproduction,
        triggers=("bug", "reproduce", "not working", "broken"),
        defaults={"steps": [], "environment": "staging", "expected_result": "unspecified"},
    ),
    AgentTool(
        name="regression_testing",
        description="Run regression suites over affected areas",
        parameters={"test_suite": "string", "affected_areas": "array", "test_results": "string"},
        execute=regression_testing,
        triggers=("regression", "retest", "after update"),
        defaults={"test_suite": "full", "affected_areas": [], "test_results": "pending"},
    ),
    AgentTool(
        name="performance_testing",
        description="Measure performance against benchmarks",
        parameters={"test_type": "string", "metrics": "array", "benchmark": "string"},
        execute=performance_testing,
        triggers=("performance", "load", "stress", "slow"),
        defaults={"test_type": "load", "metrics": ["response time"], "benchmark": "baseline"},
    ),
    AgentTool(
        name="usability_testing",
        description="Evaluate user flows for usability issues",
        parameters={"user_flow": "string", "usability_issues": "array", "recommendations": "array"},
        execute=usability_testing,
        triggers=("usability", "ux", "user experience", "confusing"),
        defaults={"user_flow": "reported flow", "usability_issues": [], "recommendations": []},
    ),
    AgentTool(
        name="compatibility_testing",
        description="Test across platforms and browsers",
        parameters={"platforms": "array", "browsers": "array", "compatibility_issues": "array"},
        execute=compatibility_testing,
        triggers=("compatibility", "browser", "mobile", "device", "responsive"),
        defaults={
            "platforms": ["desktop", "mobile"],
            "browsers": ["chrome", "firefox", "safari"],
            "compatibility_issues": [],
        },
    ),
)

RULES = (
    ClassificationRule(
        name="defect_report",
        when=("defect_report",),
        actions=(
            "Reproduce the defect and record exact steps",
            "Capture environment details, screenshots and logs",
            "Classify severity and link related test cases",
        ),
        complexity="medium",
        estimated_time="1-3 hours",
    ),
    ClassificationRule(
        name="manual_testing",
        when=("manual_testing",),
        actions=(
            "Write test cases for the affected functionality",
            "Execute manual test passes on staging",
            "Document results and open defects for failures",
        ),
        complexity="complex",
        estimated_time="4-8 hours",
    ),
    ClassificationRule(
        name="performance_testing",
        when=("performance_testing",),
        actions=(
            "Define load profiles matching production traffic",
            "Run load and stress tests against staging",
            "Compare results with the performance baseline",
        ),
        complexity="complex",
        estimated_time="3-6 hours",
    ),
    ClassificationRule(
        name="usability_testing",
        when=("usability_testing",),
        actions=(
            "Walk through the reported user flow",
            "List usability problems by severity",
            "Propose interface improvements",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
    ),
    ClassificationRule(
        name="compatibility_testing",
        when=("compatibility_testing",),
        actions=(
            "Test on the supported browser and device matrix",
            "Record layout and behaviour differences",
            "Prioritise fixes by audience share",
        ),
        complexity="complex",
        estimated_time="3-5 hours",
    ),
    ClassificationRule(
        name="regression_testing",
        when=("regression_testing",),
        actions=(
            "Identify areas affected by the latest change",
            "Run the regression suite over those areas",
            "Report regressions with the change that introduced them",
        ),
        complexity="complex",
        estimated_time="4-8 hours",
    ),
    ClassificationRule(
        name="security_testing",
        when=("security_testing",),
        actions=(
            "Test authentication and authorization paths",
            "Check input validation on exposed endpoints",
            "Report findings to the engineering team",
        ),
        complexity="complex",
        estimated_time="3-6 hours",
        priority="high",
    ),
    ClassificationRule(
        name="api_testing",
        when=("api_testing",),
        actions=(
            "Exercise the API endpoints with valid and invalid payloads",
            "Verify status codes and response schemas",
            "Automate the checks in the API test suite",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
    ),
    ClassificationRule(
        name="code_level_testing",
        when=("code_level_testing",),
        actions=(
            "Identify the code paths lacking unit tests",
            "Agree on the test framework and fixtures",
            "Hand over to the software engineer for code-level tests",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
        next_agent=AgentRole.SOFTWARE_ENGINEER,
    ),
    ClassificationRule(
        name="requirements_clarification",
        when=("requirements_clarification",),
        actions=(
            "List the ambiguous acceptance criteria",
            "Collect questions for the stakeholders",
            "Hand over to the business analyst for clarification",
        ),
        complexity="simple",
        estimated_time="1-2 hours",
        next_agent=AgentRole.BUSINESS_ANALYST,
    ),
)

FALLBACK = ClassificationRule(
    name="quality_review",
    when=(),
    actions=(
        "Review the reported behaviour against expected results",
        "Run a smoke test of the affected area",
        "Document findings for the team",
    ),
    complexity="medium",
    estimated_time="1-3 hours",
)

PROFILE = RoleProfile(
    role=AgentRole.QA_TESTER,
    summary="Defect reproduction, test planning and quality validation",
    capabilities=(
        "manual_testing",
        "automated_testing",
        "bug_validation",
        "test_planning",
        "regression_testing",
        "performance_testing",
        "usability_testing",
        "compatibility_testing",
        "test_documentation",
    ),
    rules=RULES,
    fallback=FALLBACK,
    interests=("qa_intake",),
    handoff_triggers=(
        HandoffTrigger("technical_defect", AgentRole.SOFTWARE_ENGINEER),
        HandoffTrigger("environment_testing", AgentRole.DEVOPS),
        HandoffTrigger("wordpress_testing", AgentRole.WORDPRESS_DEVELOPER),
        HandoffTrigger("acceptance_validation", AgentRole.BUSINESS_ANALYST),
    ),
    tools=TOOLS,
    default_recommendations=(
        "Reproduce the issue and document the steps",
        "Run regression tests on the affected area",
        "Verify the fix across supported environments",
    ),
)
