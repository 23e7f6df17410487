"""Software engineer profile."""
from typing import Any

from ticketcrew.agents.protocol import AgentRole, AgentTool
from ticketcrew.agents.roles.protocol import ClassificationRule, HandoffTrigger, RoleProfile


async def analyze_code(params: dict[str, Any]) -> str:
    code = str(params.get("code") or "")
    return f"Code analysis completed for {params.get('language')}: {code[:100]}..."


async def check_api_integration(params: dict[str, Any]) -> str:
    return (
        f"API integration analysis: {params.get('method')} "
        f"{params.get('endpoint')} - {params.get('error')}"
    )


async def database_query_analysis(params: dict[str, Any]) -> str:
    return f"Database query analysis completed: {params.get('query')}"


async def security_assessment(params: dict[str, Any]) -> str:
    return f"Security assessment: {params.get('vulnerability_type')} ({params.get('severity')})"


TOOLS = (
    AgentTool(
        name="analyze_code",
        description="Analyze code snippets for bugs and improvements",
        parameters={"code": "string", "language": "string"},
        execute=analyze_code,
        triggers=("code", "bug", "exception", "crash", "stack trace"),
        defaults={"code": "", "language": "unknown"},
    ),
    AgentTool(
        name="check_api_integration",
        description="Analyze API integration issues",
        parameters={"endpoint": "string", "method": "string", "error": "string"},
        execute=check_api_integration,
        triggers=("api", "endpoint", "webhook", "integration"),
        defaults={"endpoint": "unknown endpoint", "method": "GET", "error": "unspecified error"},
    ),
    AgentTool(
        name="database_query_analysis",
        description="Analyze database performance and query issues",
        parameters={"query": "string", "performance_metrics": "object"},
        execute=database_query_analysis,
        triggers=("database", "sql", "query"),
        defaults={"query": "n/a", "performance_metrics": {}},
    ),
    AgentTool(
        name="security_assessment",
        description="Assess security vulnerabilities",
        parameters={"vulnerability_type": "string", "severity": "string"},
        execute=security_assessment,
        triggers=("security", "vulnerability", "breach"),
        defaults={"vulnerability_type": "general", "severity": "medium"},
    ),
)

RULES = (
    ClassificationRule(
        name="server_error",
        when=("server_error",),
        actions=(
            "Check server error logs for stack traces around the failure time",
            "Review recent deployments and configuration changes",
            "Verify database connectivity and upstream service health",
        ),
        complexity="complex",
        estimated_time="1-3 hours",
        priority="urgent",
        confidence=0.9,
    ),
    ClassificationRule(
        name="not_found",
        when=("not_found",),
        actions=(
            "Verify routing configuration and URL rewrites",
            "Check that the requested resource exists and is deployed",
            "Review recent changes to links and redirects",
        ),
        complexity="simple",
        estimated_time="1-2 hours",
    ),
    ClassificationRule(
        name="timeout",
        when=("timeout",),
        actions=(
            "Measure response times of the slow endpoint and its dependencies",
            "Review gateway and proxy timeout settings",
            "Look for long-running queries or blocking calls",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
    ),
    ClassificationRule(
        name="wordpress_issue",
        when=("wordpress",),
        actions=(
            "Identify the WordPress component (plugin, theme, core) involved",
            "Collect PHP error logs and the active plugin list",
            "Hand over to the WordPress developer for platform-specific debugging",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
        next_agent=AgentRole.WORDPRESS_DEVELOPER,
    ),
    ClassificationRule(
        name="debugging",
        when=("debugging",),
        actions=(
            "Reproduce the issue and capture the full stack trace",
            "Inspect application logs around the reported failure",
            "Write a regression test before applying the fix",
        ),
        complexity="medium",
        estimated_time="3-6 hours",
    ),
    ClassificationRule(
        name="api_integration",
        when=("api_integration", "failure"),
        actions=(
            "Test the API endpoint manually with curl or Postman",
            "Verify authentication tokens, permissions and rate limits",
            "Review request and response logs for malformed payloads",
        ),
        complexity="medium",
        estimated_time="2-3 hours",
    ),
    ClassificationRule(
        name="performance",
        when=("performance_tuning",),
        actions=(
            "Profile the slow code paths under realistic load",
            "Review database query plans and add missing indexes",
            "Introduce caching for hot read paths",
        ),
        complexity="complex",
        estimated_time="4-8 hours",
    ),
    ClassificationRule(
        name="security",
        when=("security_analysis",),
        actions=(
            "Contain the exposure and rotate affected credentials",
            "Audit access logs for unauthorized activity",
            "Patch the vulnerable component and schedule a security review",
        ),
        complexity="complex",
        estimated_time="6-12 hours",
        priority="urgent",
    ),
    ClassificationRule(
        name="database_connectivity",
        when=("database_connectivity", "failure"),
        actions=(
            "Check connection pool configuration and limits",
            "Verify database server status and resource usage",
            "Validate credentials and network security groups",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
    ),
    ClassificationRule(
        name="infrastructure",
        when=("infrastructure",),
        actions=(
            "Confirm whether the issue is in application code or the platform",
            "Gather deployment and environment details",
            "Hand over to DevOps for infrastructure investigation",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
        next_agent=AgentRole.DEVOPS,
    ),
)

FALLBACK = ClassificationRule(
    name="technical_review",
    when=(),
    actions=(
        "Review system logs for error patterns",
        "Verify component functionality and integration points",
        "Check recent changes for potential regressions",
    ),
    complexity="medium",
    estimated_time="2-4 hours",
    priority="normal",
    confidence=0.6,
)

PROFILE = RoleProfile(
    role=AgentRole.SOFTWARE_ENGINEER,
    summary="Backend, API, database and application debugging",
    capabilities=(
        "technical_analysis",
        "code_review",
        "api_integration",
        "backend_development",
        "database_optimization",
        "security_analysis",
        "performance_tuning",
        "debugging",
        "architecture_design",
    ),
    rules=RULES,
    fallback=FALLBACK,
    interests=("technical_request",),
    handoff_triggers=(
        HandoffTrigger("wordpress", AgentRole.WORDPRESS_DEVELOPER),
        HandoffTrigger("infrastructure", AgentRole.DEVOPS),
        HandoffTrigger("testing", AgentRole.QA_TESTER),
    ),
    tools=TOOLS,
    default_recommendations=(
        "Review system logs for error patterns and anomalies",
        "Verify component functionality and integration points",
        "Test system performance under current load conditions",
        "Check recent changes and deployments for potential issues",
    ),
)
