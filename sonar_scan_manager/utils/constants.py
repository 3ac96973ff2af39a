"""Shared constants used across the application."""

# This file is intended to hold shared constants.

# SonarQube Server Constants
# --------------------------

DEFAULT_SONAR_URL = "http://localhost:9000"
"""Default URL of the SonarQube server (also the scanner's own default)."""

DEFAULT_SONAR_USER = "admin"
"""Default administrator user of a fresh SonarQube server."""

DEFAULT_SONAR_PASSWORD = "admin"
"""Default administrator password of a fresh SonarQube server."""

DEFAULT_PROJECT_KEY = "bu-project"
"""Project key under which every scan run and issue query is grouped."""

DEFAULT_SONAR_SERVER_IMAGE = "sonarqube:8.2-community"
"""Docker image used to launch the SonarQube server."""

DEFAULT_SONAR_SERVER_PORT = 9000
"""Port published by the SonarQube server container."""

DEFAULT_SONAR_SCANNER_IMAGE = "sonarsource/sonar-scanner-cli"
"""Docker image used to run the scanner against a source tree."""

SCANNER_SOURCE_MOUNT = "/usr/src"
"""Directory inside the scanner container where the source tree is mounted."""

# Web API Constants
# -----------------

HEALTH_API_PATH = "/api/system/health"
DELETE_PROJECT_API_PATH = "/api/projects/delete"
SEARCH_ISSUES_API_PATH = "/api/issues/search"

HEALTHY_STATUS_TOKEN = "GREEN"
"""Token present in the health API response body when the server is healthy."""

DEFAULT_HEALTH_POLL_INTERVAL = 10.0
"""Seconds to sleep between two health polls."""

DEFAULT_ISSUES_PAGE_SIZE = 500
"""Page size requested from the issue search API (SonarQube's maximum)."""

SONAR_MAX_SEARCH_RESULTS = 10000
"""SonarQube refuses to page beyond this many issue search results."""

# Function Resolution Constants
# -----------------------------

DEFAULT_LANGUAGE = "go"
"""Language filter applied to issue searches."""

DEFAULT_FUNCTION_KEYWORD = "func"
"""Keyword that starts a function declaration in the analysed language."""

GLOBAL_FUNCTION_SENTINEL = "global"
"""Function name reported for lines not enclosed by any function declaration."""
