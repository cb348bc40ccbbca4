"""Constants and defaults.

Note: Statutory thresholds live here only; do not repeat the literals elsewhere.
"""

# Statutory break rules (minutes of elapsed work time -> minimum break).
FIRST_BREAK_THRESHOLD_MINUTES = 6 * 60
SECOND_BREAK_THRESHOLD_MINUTES = 9 * 60
FIRST_REQUIRED_BREAK_MINUTES = 30
SECOND_REQUIRED_BREAK_MINUTES = 45

# Statutory daily ceiling.
LEGAL_MAX_WORK_MINUTES = 10 * 60

# Display estimate for where a break is drawn on the timeline.
ESTIMATED_BREAK_OFFSET_MINUTES = 4 * 60

DEFAULT_REFRESH_INTERVAL_SECONDS = 60
DEFAULT_TARGET_WEEK_HOURS = 40
DEFAULT_HISTORY_DAYS = 30
