"""Application-wide constants."""

# Search
MIN_SEARCH_LENGTH = 2
SEARCH_DEBOUNCE_MS = 300  # Client-side debounce; the core does not wait
SEARCH_MAX_RESULTS = 5

# Project view
RECENT_DECISIONS_LIMIT = 5

# Column limits
NAME_MAX_LENGTH = 255
EFFORT_MAX_LENGTH = 50
