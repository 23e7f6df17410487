"""Keyword vocabulary shared by every agent.

Classification rules, handoff triggers and capability descriptions all refer
to topics in KEYWORDS by name, so a keyword list is defined exactly once.
Matching is case-insensitive substring matching.
"""

import re
from functools import lru_cache

KEYWORDS: dict[str, tuple[str, ...]] = {
    # --- Software engineering ---
    "server_error": ("500", "internal server error", "server error", "http 500"),
    "not_found": ("404", "not found", "page not found", "missing"),
    "timeout": ("timeout", "gateway timeout", "504", "connection timeout"),
    "failure": ("error", "fail", "timeout"),
    "technical_analysis": ("bug", "error", "technical", "code", "system"),
    "code_review": ("code", "review", "programming", "development"),
    "api_integration": ("api", "integration", "webhook", "endpoint", "rest"),
    "backend_development": ("backend", "server", "database", "sql"),
    "database_optimization": ("database", "sql", "query", "performance"),
    "database_connectivity": ("database", "connection"),
    "security_analysis": ("security", "vulnerability", "breach", "unauthorized"),
    "performance_tuning": ("performance", "slow", "optimization", "speed"),
    "debugging": ("bug", "debug", "error", "exception", "crash", "broken"),
    "architecture_design": ("architecture", "design", "scalability", "structure"),
    "infrastructure": (
        "deploy", "server", "infrastructure", "docker", "kubernetes", "aws", "cloud",
    ),
    "testing": ("test", "testing", "qa", "quality", "automation test"),
    # --- WordPress ---
    "wordpress": ("wordpress", "wp-", "plugin", "theme", "woocommerce"),
    "wordpress_development": (
        "wordpress", "wp-admin", "wp-content", "wp-config", "gutenberg",
        "elementor", "divi", "shortcode", "widget", "customizer",
    ),
    "plugin_analysis": ("plugin", "wp-", "activate", "deactivate", "conflict"),
    "theme_debugging": ("theme", "styling", "css", "layout", "appearance"),
    "wp_performance": ("performance", "slow", "loading", "speed", "caching"),
    "wp_security": ("security", "hack", "malware", "vulnerability", "breach", "unauthorized"),
    "woocommerce_support": ("woocommerce", "shop", "cart", "checkout", "payment", "order"),
    "wp_customization": ("custom", "customization", "modification"),
    "wp_migration": ("migration", "import", "export", "backup", "restore"),
    "wp_maintenance": ("update", "upgrade", "maintenance", "version", "compatibility"),
    "custom_development": ("custom api", "custom development", "advanced functionality"),
    "testing_request": ("testing", "qa", "quality assurance"),
    "backend_request": (
        "custom api", "backend development", "database design", "complex integration",
    ),
    "hosting": ("server", "hosting", "deployment", "ssl", "domain", "dns"),
    "qa_request": ("comprehensive testing", "qa testing", "user acceptance testing"),
    "reporting_request": ("analytics", "reporting", "data analysis", "metrics"),
    # --- DevOps ---
    "infrastructure_outage": ("server", "infrastructure", "hosting", "downtime", "outage"),
    "infrastructure_management": ("server", "infrastructure", "hosting", "cloud"),
    "deployment_automation": ("deployment", "deploy", "ci/cd", "pipeline", "build", "release"),
    "system_performance": ("performance", "slow", "latency", "response time", "optimization"),
    "monitoring_alerting": ("monitoring", "alerts", "metrics", "logging", "observability"),
    "security_compliance": (
        "security", "vulnerability", "breach", "compliance", "ssl", "certificate",
    ),
    "backup_recovery": ("backup", "recovery", "disaster", "restore", "data loss"),
    "network_administration": ("network", "connectivity", "dns", "firewall", "load balancer"),
    "cloud_services": ("aws", "azure", "gcp", "cloud", "kubernetes", "docker"),
    "containerization": ("docker", "container", "kubernetes", "orchestration"),
    "ci_cd_pipeline": ("pipeline", "build", "release", "automation"),
    "application_code": ("application", "code", "api", "custom development"),
    "database_work": ("database", "sql", "query optimization", "data migration"),
    "software_handoff": ("application bug", "code issue", "api problem", "database optimization"),
    "wordpress_hosting": ("wordpress hosting", "wp-cli", "wordpress performance"),
    "test_infrastructure": ("testing environment", "qa infrastructure", "test automation"),
    "infrastructure_reporting": ("infrastructure reporting", "cost analysis", "capacity planning"),
    # --- QA ---
    "defect_report": ("bug", "error", "issue", "problem", "not working", "broken"),
    "manual_testing": ("manual", "test", "testing", "validation", "verify"),
    "automated_testing": ("automation", "automated", "script", "framework"),
    "bug_validation": ("bug", "error", "issue", "reproduce"),
    "test_planning": ("test plan", "test case", "strategy"),
    "regression_testing": ("regression", "retest", "after update", "release"),
    "performance_testing": ("performance", "load", "stress", "speed", "lag", "timeout"),
    "usability_testing": ("usability", "ux", "user experience", "interface", "confusing"),
    "compatibility_testing": (
        "compatibility", "browser", "mobile", "responsive", "device", "cross-platform",
    ),
    "test_documentation": ("documentation", "report", "results", "findings"),
    "security_testing": (
        "security", "vulnerability", "authentication", "authorization", "data protection",
    ),
    "api_testing": ("api", "endpoint", "integration", "webhook", "rest", "graphql"),
    "code_level_testing": ("code review", "unit tests", "test automation", "framework"),
    "requirements_clarification": ("requirements", "acceptance criteria", "business logic"),
    "technical_defect": ("test automation", "unit tests", "technical bug", "code issue"),
    "environment_testing": ("deployment testing", "infrastructure testing", "environment issues"),
    "wordpress_testing": ("wordpress testing", "plugin testing", "theme testing"),
    "acceptance_validation": (
        "requirements testing", "acceptance criteria", "business logic validation",
    ),
    # --- Business analysis ---
    "requirements_gathering": (
        "requirements", "specification", "acceptance criteria", "user story", "feature request",
    ),
    "data_analysis": ("data", "analytics", "insights", "metrics"),
    "process_optimization": ("process", "workflow", "optimization", "efficiency", "improvement"),
    "business_intelligence": ("report", "dashboard", "kpi", "intelligence"),
    "stakeholder_management": ("stakeholder", "communication", "customer", "client"),
    "project_planning": ("project", "planning", "timeline", "milestone", "deliverable", "scope"),
    "risk_assessment": ("risk", "compliance", "audit", "governance", "regulation"),
    "cost_benefit_analysis": (
        "cost", "budget", "roi", "investment", "benefit", "financial", "revenue",
    ),
    "reporting_analytics": ("reporting", "analytics", "visualization", "insights"),
    "system_integration": ("integration", "system", "api", "zendesk", "clickup"),
    "service_quality": ("quality", "sla", "benchmark", "measurement", "monitoring"),
    "development_request": (
        "development", "coding", "technical implementation", "api development",
    ),
    "validation_request": ("testing", "validation", "qa", "user acceptance testing"),
    "implementation_handoff": (
        "technical implementation", "api development", "system integration", "database design",
    ),
    "acceptance_testing": ("user acceptance testing", "validation testing", "quality assurance"),
    "infrastructure_planning": (
        "infrastructure planning", "deployment strategy", "scalability analysis",
    ),
    "content_management": (
        "wordpress business requirements", "ecommerce analysis", "content management",
    ),
    # --- Intake vocabularies (can_handle) ---
    "technical_request": (
        "bug", "error", "api", "code", "database", "sql", "integration", "backend",
        "server", "performance", "security", "authentication", "authorization",
        "webhook", "endpoint", "json", "xml", "rest",
    ),
    "wordpress_platform": (
        "wordpress", "wp-", "plugin", "theme", "woocommerce", "gutenberg", "elementor",
        "divi", "wp-admin", "wp-content", "shortcode", "widget", "customizer", "wp-config",
    ),
    "devops_request": (
        "server", "infrastructure", "deployment", "ci/cd", "pipeline", "hosting", "cloud",
        "aws", "azure", "gcp", "kubernetes", "docker", "monitoring", "alerts", "backup",
        "recovery", "security", "network", "firewall", "load balancer", "ssl",
        "certificate", "performance", "scaling", "devops", "sysadmin",
    ),
    "qa_intake": (
        "test", "testing", "qa", "quality", "bug", "error", "issue", "validation", "verify",
        "reproduce", "regression", "performance", "usability", "compatibility", "browser",
        "mobile", "responsive", "functionality", "feature", "broken", "not working",
    ),
    "business_request": (
        "requirements", "specification", "analysis", "data", "analytics", "report",
        "dashboard", "metrics", "kpi", "process", "workflow", "optimization", "efficiency",
        "cost", "budget", "roi", "investment", "stakeholder", "business", "strategy",
        "planning", "project",
    ),
    "project_request": (
        "project", "planning", "coordination", "management", "timeline", "milestone",
        "resource", "team", "stakeholder", "communication", "deadline", "schedule",
        "priority", "scope", "deliverable", "quality", "budget", "risk", "issue", "escalation",
    ),
    # --- Project management ---
    "time_sensitive": ("deadline", "urgent", "asap", "friday"),
    "resource_management": ("resource", "team", "allocation", "capacity"),
    "timeline_management": ("timeline", "schedule", "deadline", "milestone"),
    "risk_management": ("risk", "issue", "problem", "mitigation"),
    "stakeholder_communication": ("stakeholder", "communication", "reporting", "update"),
    "quality_assurance": ("quality", "standard", "review", "deliverable"),
    "budget_management": ("budget", "cost", "expense", "financial"),
    "team_coordination": ("team", "coordination", "collaboration", "workflow"),
    "progress_monitoring": ("progress", "tracking", "monitoring", "metrics"),
}


def keywords_for(topic: str) -> tuple[str, ...]:
    """Keywords of a topic; an unknown topic has none."""
    return KEYWORDS.get(topic, ())


@lru_cache(maxsize=None)
def _pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    # Longest first so the reported keyword is the most specific one.
    ordered = sorted(keywords, key=len, reverse=True)
    return re.compile("|".join(re.escape(kw) for kw in ordered), re.IGNORECASE)


def find_keyword(content: str, keywords: tuple[str, ...]) -> str | None:
    """Return the first keyword found in content, or None."""
    if not keywords:
        return None
    match = _pattern(keywords).search(content)
    return match.group(0).lower() if match else None


def match_topic(content: str, topic: str) -> str | None:
    """Return the keyword of ``topic`` found in content, or None."""
    return find_keyword(content, keywords_for(topic))


def matches_all(content: str, topics: tuple[str, ...]) -> bool:
    """True when every topic has at least one keyword in content."""
    return bool(topics) and all(match_topic(content, topic) for topic in topics)


def unknown_topics(topics: tuple[str, ...]) -> list[str]:
    """Topics that have no entry in KEYWORDS."""
    return [topic for topic in topics if topic not in KEYWORDS]
