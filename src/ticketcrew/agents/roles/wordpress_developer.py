"""WordPress developer profile."""
from typing import Any

from ticketcrew.agents.protocol import AgentRole, AgentTool
from ticketcrew.agents.roles.protocol import (
    ClassificationRule,
    HandoffTrigger,
    RoleProfile,
    joined,
)


async def analyze_plugin_conflict(params: dict[str, Any]) -> str:
    return f"Plugin conflict analysis: {joined(params.get('plugins'))} - {params.get('error_message')}"


async def theme_compatibility_check(params: dict[str, Any]) -> str:
    return (
        f"Theme compatibility check: {params.get('theme')} on WP "
        f"{params.get('wp_version')} - {params.get('issue')}"
    )


async def wp_performance_analysis(params: dict[str, Any]) -> str:
    return (
        f"WP Performance analysis: {params.get('load_time')}s load time, "
        f"{params.get('plugins_count')} plugins, theme: {params.get('theme')}"
    )


async def wp_security_scan(params: dict[str, Any]) -> str:
    return (
        f"WP Security scan: {params.get('wp_version')}, plugins: "
        f"{joined(params.get('plugins'))}, issue: {params.get('security_issue')}"
    )


async def woocommerce_analysis(params: dict[str, Any]) -> str:
    return (
        f"WooCommerce analysis: {params.get('wc_version')} - "
        f"{params.get('issue_type')}: {params.get('error')}"
    )


TOOLS = (
    AgentTool(
        name="analyze_plugin_conflict",
        description="Analyze WordPress plugin conflicts and compatibility issues",
        parameters={"plugins": "array", "error_message": "string"},
        execute=analyze_plugin_conflict,
        triggers=("plugin", "conflict"),
        defaults={"plugins": [], "error_message": "unspecified error"},
    ),
    AgentTool(
        name="theme_compatibility_check",
        description="Check theme compatibility with WordPress versions and plugins",
        parameters={"theme": "string", "wp_version": "string", "issue": "string"},
        execute=theme_compatibility_check,
        triggers=("theme", "layout", "css"),
        defaults={"theme": "active theme", "wp_version": "latest", "issue": "unspecified"},
    ),
    AgentTool(
        name="wp_performance_analysis",
        description="Analyze WordPress site performance issues",
        parameters={"load_time": "number", "plugins_count": "number", "theme": "string"},
        execute=wp_performance_analysis,
        triggers=("performance", "slow", "speed", "loading"),
        defaults={"load_time": "unknown", "plugins_count": "unknown", "theme": "active theme"},
    ),
    AgentTool(
        name="wp_security_scan",
        description="Perform WordPress security analysis",
        parameters={"wp_version": "string", "plugins": "array", "security_issue": "string"},
        execute=wp_security_scan,
        triggers=("security", "hack", "malware"),
        defaults={"wp_version": "latest", "plugins": [], "security_issue": "unspecified"},
    ),
    AgentTool(
        name="woocommerce_analysis",
        description="Analyze WooCommerce-specific issues",
        parameters={"wc_version": "string", "issue_type": "string", "error": "string"},
        execute=woocommerce_analysis,
        triggers=("woocommerce", "checkout", "cart", "payment"),
        defaults={"wc_version": "latest", "issue_type": "general", "error": "unspecified"},
    ),
)

RULES = (
    ClassificationRule(
        name="plugin_issue",
        when=("plugin_analysis",),
        actions=(
            "Deactivate plugins one at a time to isolate the conflict",
            "Check plugin versions against the WordPress core version",
            "Review PHP error logs for fatal errors raised by plugins",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
    ),
    ClassificationRule(
        name="theme_issue",
        when=("theme_debugging",),
        actions=(
            "Switch to a default theme to confirm the theme is at fault",
            "Inspect custom CSS and child theme overrides",
            "Check theme compatibility with the current WordPress version",
        ),
        complexity="simple",
        estimated_time="1-2 hours",
    ),
    ClassificationRule(
        name="performance",
        when=("wp_performance",),
        actions=(
            "Measure page load with caching disabled and enabled",
            "Audit heavy plugins and unoptimized images",
            "Configure object and page caching",
        ),
        complexity="complex",
        estimated_time="3-6 hours",
    ),
    ClassificationRule(
        name="security",
        when=("wp_security",),
        actions=(
            "Scan core, plugin and theme files for malware",
            "Reset administrator credentials and security keys",
            "Update WordPress core and all plugins to patched versions",
        ),
        complexity="complex",
        estimated_time="4-8 hours",
        priority="urgent",
    ),
    ClassificationRule(
        name="woocommerce",
        when=("woocommerce_support",),
        actions=(
            "Check WooCommerce system status and template overrides",
            "Verify payment gateway configuration and logs",
            "Test the checkout flow end to end",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
    ),
    ClassificationRule(
        name="migration",
        when=("wp_migration",),
        actions=(
            "Take a full backup of files and database",
            "Search-replace serialized URLs after the move",
            "Verify permalinks and media paths on the target site",
        ),
        complexity="complex",
        estimated_time="3-6 hours",
    ),
    ClassificationRule(
        name="maintenance",
        when=("wp_maintenance",),
        actions=(
            "Apply updates on a staging copy first",
            "Check plugin and theme compatibility with the new version",
            "Schedule the production update in a maintenance window",
        ),
        complexity="medium",
        estimated_time="2-3 hours",
    ),
    ClassificationRule(
        name="custom_development",
        when=("custom_development",),
        actions=(
            "Capture the functional requirements of the custom feature",
            "Decide between a custom plugin and a backend service",
            "Hand over to the software engineer for backend work",
        ),
        complexity="complex",
        estimated_time="4-8 hours",
        next_agent=AgentRole.SOFTWARE_ENGINEER,
    ),
    ClassificationRule(
        name="testing_request",
        when=("testing_request",),
        actions=(
            "Prepare a staging site matching production",
            "List the affected pages and user flows",
            "Hand over to QA for test execution",
        ),
        complexity="medium",
        estimated_time="2-4 hours",
        next_agent=AgentRole.QA_TESTER,
    ),
)

FALLBACK = ClassificationRule(
    name="wordpress_review",
    when=(),
    actions=(
        "Review the WordPress site health report",
        "Check the active plugins and theme for known issues",
        "Confirm WordPress core is up to date",
    ),
    complexity="medium",
    estimated_time="1-3 hours",
)

PROFILE = RoleProfile(
    role=AgentRole.WORDPRESS_DEVELOPER,
    summary="WordPress plugins, themes, WooCommerce and site maintenance",
    capabilities=(
        "wordpress_development",
        "plugin_analysis",
        "theme_debugging",
        "wp_performance",
        "wp_security",
        "woocommerce_support",
        "wp_customization",
        "wp_migration",
        "wp_maintenance",
    ),
    rules=RULES,
    fallback=FALLBACK,
    interests=("wordpress_platform",),
    handoff_triggers=(
        HandoffTrigger("backend_request", AgentRole.SOFTWARE_ENGINEER),
        HandoffTrigger("hosting", AgentRole.DEVOPS),
        HandoffTrigger("qa_request", AgentRole.QA_TESTER),
        HandoffTrigger("reporting_request", AgentRole.BUSINESS_ANALYST),
    ),
    tools=TOOLS,
    default_recommendations=(
        "Check WordPress site health and debug log",
        "Verify plugin and theme compatibility",
        "Confirm backups exist before making changes",
    ),
)
