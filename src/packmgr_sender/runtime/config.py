"""Configuration constants for runtime module."""

# Package manager endpoints
PACKMGR_PATH_AEM = "/crx/packmgr/service.jsp"
PACKMGR_PATH_SLING = "/bin/cpm/package.service.html"
SYSTEM_CONSOLE_BUNDLES = "/system/console/bundles.json"

# HTTP client configuration
DEFAULT_STATUS_TIMEOUT = 10  # seconds
DEFAULT_SUBMIT_TIMEOUT = 300  # seconds, package installs can be slow

# Readiness polling
MAX_READINESS_ATTEMPTS = 11  # first check plus 10 retries
READINESS_RETRY_INTERVAL = 1.0  # seconds, fixed

# Response interpretation
INVALID_RESPONSE_MESSAGE = "Invalid response; is the packmgr path valid?"
EXHAUSTED_MESSAGE = "exhausted all retries, system not ready"
PARSE_FAILED_MESSAGE = f"not able to parse response from {SYSTEM_CONSOLE_BUNDLES}"
