"""
Application-level constants for hardcoded validation limits.

These values define the public contract of the API and should NEVER be
changed via environment variables or configuration.

For configurable values (connection pool, default page size, logging, etc.),
see bookshelf/settings.py where values can be overridden via environment
variables.
"""

# ============================================================================
# Identifiers
# ============================================================================

# Largest id accepted in paths and in the book -> author reference
MAX_ID = 10_000_000


# ============================================================================
# Pagination Safety Limits
# ============================================================================

# Maximum allowed page size to prevent excessive database loads
# For default page size, see bookshelf/settings.py (DEFAULT_PAGE_SIZE)
MAX_PAGE_SIZE = 100

# Highest page number a client may request
MAX_PAGE = 100_000

# Longest free-text filter accepted by browse endpoints
MAX_FIND_LENGTH = 100


# ============================================================================
# Author fields
# ============================================================================

PEN_NAME_MIN_LENGTH = 2
PEN_NAME_MAX_LENGTH = 100
PERSON_NAME_MIN_LENGTH = 2
PERSON_NAME_MAX_LENGTH = 50


# ============================================================================
# Book fields
# ============================================================================

TITLE_MIN_LENGTH = 1
TITLE_MAX_LENGTH = 300
SYNOPSIS_MAX_LENGTH = 1000

# ISBN values must be strictly greater than the thresholds and have
# exactly 10 or 13 digits
ISBN10_THRESHOLD = 1_000_000_000
ISBN10_MAX = 9_999_999_999
ISBN13_THRESHOLD = 1_000_000_000_000
ISBN13_MAX = 9_999_999_999_999
