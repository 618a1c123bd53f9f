"""Shared application constants.

Centralizes repeat values used by the goal and habit stores so we can
document and adjust them in one place.
"""

# Target protein is stored as Numeric(6, 2)
TARGET_PROTEIN_DECIMALS = 2

# Habit cadence is expressed as completions per week
MIN_TARGET_FREQUENCY = 1
MAX_TARGET_FREQUENCY = 7

HABIT_TITLE_MAX_LEN = 255

# Trailing window used by weekly completion counts (inclusive of "now")
WEEK_WINDOW_DAYS = 7

# Completion rates are reported with this many decimals
RATE_DECIMALS = 2
