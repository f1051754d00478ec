"""Constants used throughout the release action."""

# Git references
TAG_REF_PREFIX = "refs/tags/"
SHORT_SHA_LENGTH = 7

# GitHub API paging
DEFAULT_PER_PAGE = 100
PULL_REQUEST_PAGE_SIZE = 100

# Release defaults
DEFAULT_RELEASE_NAME_TEMPLATE = "Release {{ version }}"

# Fixed asset attached when the aquasec input is enabled
AQUASEC_REPORT_PATH = "./aquasec.txt"

# Notification defaults
SLACK_MESSAGE_TEMPLATE = "New release:\n\n*{{ name }}:{{ version }}*\n\n{{ changelog }}"
TEAMS_TITLE_TEMPLATE = "New release: {{ name }}:{{ version }}"
WEBHOOK_TIMEOUT_SECONDS = 30.0
