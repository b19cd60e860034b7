"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MONTHLY_LESSONS = 8
SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 20
MIN_PASSWORD_LENGTH = 6
DEFAULT_TOKEN_MAX_AGE_SECONDS = 24 * 60 * 60

# Ages at which a student moves into the next testing age range.
TRANSITION_AGES = (9, 13, 18)
