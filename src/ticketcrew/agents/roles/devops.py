"""DevOps engineer profile."""
from typing import Any

from ticketcrew.agents.protocol import AgentRole, AgentTool
from ticketcrew.agents.roles.protocol import (
    ClassificationRule,
    HandoffTrigger,
    RoleProfile,
    joined,
)


async def server_health_check(params: dict[str, Any]) -> str:
    return f"Server health check for {params.get('server')}: {joined(params.get('metrics'))}"


async def deployment_analysis(params: dict[str, Any]) -> str:
    return (
        f"Deployment analysis: {params.get('environment')} - "
        f"{params.get('deployment_type')} - {params.get('error')}"
    )


async def infrastructure_monitoring(params: dict[str, Any]) -> str:
    return (
        f"Infrastructure monitoring: {params.get('service')} status: {params.get('status')}, "
        f"alerts: {joined(params.get('alerts'))}"
    )


async def security_compliance_check(params: dict[str, Any]) -> str:
    return (
        f"Security compliance check: {params.get('system')} - {params.get('compliance_type')} "
        f"- findings: {joined(params.get('findings'))}"
    )


async def backup_recovery_analysis(params: dict[str, Any]) -> str:
    return (
        f"Backup/Recovery analysis: {params.get('backup_type')} - "
        f"RTO: {params.get('recovery_time')} - Status: {params.get('status')}"
    )


async def network_diagnostics(params: dict[str, Any]) -> str:
    return (
        f"Network diagnostics: {params.get('network_component')} - "
        f"{params.get('issue_type')} - Latency: {params.get('latency')}ms"
    )


TOOLS = (
    AgentTool(
        name="server_health_check",
        description="Check server health and resource usage",
        parameters={"server": "string", "metrics": "array"},
        execute=server_health_check,
        triggers=("server", "downtime", "outage", "cpu", "memory"),
        defaults={"server": "primary", "metrics": ["cpu", "memory", "disk"]},
    ),
    AgentTool(
        name="deployment_analysis",
        description="Analyze deployment pipelines and failures",
        parameters={"environment": "string", "deployment_type": "string", "error": "string"},
        execute=deployment_analysis,
        triggers=("deploy", "pipeline", "ci/cd", "release", "build"),
        defaults={"environment": "production", "deployment_type": "rolling", "error": "none reported"},
    ),
    AgentTool(
        name="infrastructure_monitoring",
        description="Review monitoring data and active alerts",
        parameters={"service": "string", "status": "string", "alerts": "array"},
        execute=infrastructure_monitoring,
        triggers=("monitoring", "alert", "metrics", "logging"),
        defaults={"service": "all services", "status": "unknown", "alerts": []},
    ),
    AgentTool(
        name="security_compliance_check",
        description="Check infrastructure security and compliance",
        parameters={"system": "string", "compliance_type": "string", "findings": "array"},
        execute=security_compliance_check,
        triggers=("security", "compliance", "ssl", "certificate", "vulnerability"),
        defaults={"system": "infrastructure", "compliance_type": "baseline", "findings": []},
    ),
    AgentTool(
        name="backup_recovery_analysis",
        description="Analyze backup coverage and recovery readiness",
        parameters={"backup_type": "string", "recovery_time": "string", "status": "string"},
        execute=backup_recovery_analysis,
        triggers=("backup", "recovery", "restore", "disaster"),
        defaults={"backup_type": "full", "recovery_time": "unknown", "status": "unknown"},
    ),
    AgentTool(
        name="network_diagnostics",
        description="Diagnose network connectivity and latency problems",
        parameters={"network_component": "string", "issue_type": "string", "latency": "number"},
        execute=network_diagnostics,
        triggers=("network", "dns", "firewall", "latency", "load balancer"),
        defaults={"network_component": "edge", "issue_type": "connectivity", "latency": "n/a"},
    ),
)

RULES = (
    ClassificationRule(
        name="outage",
        when=("infrastructure_outage",),
        actions=(
            "Check server status and resource usage on affected hosts",
            "Review recent infrastructure and configuration changes",
            "Fail over or scale out to restore service",
        ),
        complexity="complex",
        estimated_time="1-6 hours",
        priority="urgent",
    ),
    ClassificationRule(
        name="deployment",
        when=("deployment_automation",),
        actions=(
            "Inspect the failing pipeline stage and its logs",
            "Compare environment configuration with the last good release",
            "Roll back if the release cannot be fixed forward quickly",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
    ),
    ClassificationRule(
        name="performance",
        when=("system_performance",),
        actions=(
            "Collect latency and resource metrics for the affected services",
            "Identify saturated resources and scaling limits",
            "Tune autoscaling and caching layers",
        ),
        complexity="complex",
        estimated_time="4-8 hours",
    ),
    ClassificationRule(
        name="security_compliance",
        when=("security_compliance",),
        actions=(
            "Check certificate validity and TLS configuration",
            "Run a vulnerability scan on exposed hosts",
            "Document findings against the compliance baseline",
        ),
        complexity="complex",
        estimated_time="3-8 hours",
        priority="urgent",
    ),
    ClassificationRule(
        name="backup_recovery",
        when=("backup_recovery",),
        actions=(
            "Verify the most recent backups completed successfully",
            "Test a restore into an isolated environment",
            "Review recovery time and recovery point objectives",
        ),
        complexity="complex",
        estimated_time="3-6 hours",
        priority="high",
    ),
    ClassificationRule(
        name="network",
        when=("network_administration",),
        actions=(
            "Trace connectivity between the affected endpoints",
            "Check DNS records and firewall rules",
            "Review load balancer health checks",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
    ),
    ClassificationRule(
        name="cloud_services",
        when=("cloud_services",),
        actions=(
            "Review the cloud provider status page and quotas",
            "Inspect container and cluster events",
            "Validate infrastructure-as-code against the live state",
        ),
        complexity="complex",
        estimated_time="3-6 hours",
    ),
    ClassificationRule(
        name="monitoring",
        when=("monitoring_alerting",),
        actions=(
            "Confirm the alert source and threshold",
            "Correlate the alert with logs and recent changes",
            "Adjust alerting rules to reduce noise",
        ),
        complexity="medium",
        estimated_time="1-3 hours",
    ),
    ClassificationRule(
        name="application_code",
        when=("application_code",),
        actions=(
            "Confirm the platform is healthy",
            "Collect application logs for the failing component",
            "Hand over to the software engineer for a code fix",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
        next_agent=AgentRole.SOFTWARE_ENGINEER,
    ),
    ClassificationRule(
        name="database_work",
        when=("database_work",),
        actions=(
            "Check database host resources and replication status",
            "Collect slow query logs",
            "Hand over to the software engineer for query optimization",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
        next_agent=AgentRole.SOFTWARE_ENGINEER,
    ),
)

FALLBACK = ClassificationRule(
    name="infrastructure_review",
    when=(),
    actions=(
        "Review infrastructure health dashboards",
        "Check recent deployments and configuration changes",
        "Verify monitoring coverage for the affected service",
    ),
    complexity="medium",
    estimated_time="2-4 hours",
)

PROFILE = RoleProfile(
    role=AgentRole.DEVOPS,
    summary="Infrastructure, deployments, monitoring and reliability",
    capabilities=(
        "infrastructure_management",
        "deployment_automation",
        "system_performance",
        "monitoring_alerting",
        "security_compliance",
        "backup_recovery",
        "network_administration",
        "cloud_services",
        "containerization",
        "ci_cd_pipeline",
    ),
    rules=RULES,
    fallback=FALLBACK,
    interests=("devops_request",),
    handoff_triggers=(
        HandoffTrigger("software_handoff", AgentRole.SOFTWARE_ENGINEER),
        HandoffTrigger("wordpress_hosting", AgentRole.WORDPRESS_DEVELOPER),
        HandoffTrigger("test_infrastructure", AgentRole.QA_TESTER),
        HandoffTrigger("infrastructure_reporting", AgentRole.BUSINESS_ANALYST),
    ),
    tools=TOOLS,
    default_recommendations=(
        "Check infrastructure health and resource usage",
        "Review recent deployments and configuration changes",
        "Verify monitoring and alerting coverage",
    ),
)
