"""Default configuration values."""

# Roles registered by default, in registration (entry-selection) order
DEFAULT_AGENT_ORDER = [
    "PROJECT_MANAGER",
    "SOFTWARE_ENGINEER",
    "WORDPRESS_DEVELOPER",
    "DEVOPS",
    "QA_TESTER",
    "BUSINESS_ANALYST",
]

# Concurrent task capacity per role
DEFAULT_AGENT_CAPACITY = {
    "PROJECT_MANAGER": 10,
    "SOFTWARE_ENGINEER": 8,
    "WORDPRESS_DEVELOPER": 6,
    "DEVOPS": 8,
    "QA_TESTER": 7,
    "BUSINESS_ANALYST": 5,
}

# Role used when no agent claims a ticket
DEFAULT_ENTRY_ROLE = "PROJECT_MANAGER"

DEFAULT_LOG_LEVEL = "WARNING"

PROJECT_CONFIG_FILENAME = ".ticketcrew.toml"
