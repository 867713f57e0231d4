"""Configuration for the part-match MCP server."""

import os


# Server settings
HTTP_PORT = int(os.getenv("HTTP_PORT", "8080"))
RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", "100"))

# Profile used by the server when a caller does not name one
DEFAULT_PROFILE = os.getenv("DEFAULT_PROFILE", "REPLACEMENT").strip().upper()

# Inputs longer than this resolve to UNKNOWN without touching the regexes
MAX_MPN_LENGTH = int(os.getenv("MAX_MPN_LENGTH", "128"))

# Tolerance acceptance thresholds
DEFAULT_ACCEPTANCE_THRESHOLD = 0.7
MINIMUM_REQUIRED_ACCEPTANCE = 0.8

# Score floor granted to pairs listed in an equivalence table
EQUIVALENCE_SCORE = 0.95

# Float comparison slack for "equal" numeric values
VALUE_MATCH_EPSILON = 1e-9
