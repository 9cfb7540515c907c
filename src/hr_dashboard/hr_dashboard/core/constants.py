"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_EMPTY_TEXT = "No records found."
LOADING_TEXT = "Loading..."
DEFAULT_PAGE_SIZE = 10
DEFAULT_LABEL_KEY = "name"
DEFAULT_API_TIMEOUT = 10.0

# The only switch field that is on by default in a new record.
ACTIVE_FLAG_KEY = "is_active"

# Longer plain-text error bodies (HTML error pages, tracebacks) are not shown to the user
MAX_PLAIN_ERROR_LENGTH = 160
