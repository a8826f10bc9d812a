"""Application constants."""

# Session limits
MAX_SETS_PER_EXERCISE_PER_SESSION = 10
MAX_WORKING_SETS_PER_PLAN_EXERCISE = 4

# Default progressive warmup curve (compound lifts)
DEFAULT_WARMUP_LOAD_PERCENTAGES = (0.4, 0.5, 0.6, 0.7, 0.8)
DEFAULT_WARMUP_REPS_PER_SET = (8, 6, 5, 3, 2)
DEFAULT_WORKING_LOAD_KG = 60.0
DEFAULT_WARMUP_SETS = 3

# Equipment increments (kg): plates come in 2.5, micro plates in 1.25
LOAD_INCREMENT_KG = 2.5
FINE_LOAD_INCREMENT_KG = 1.25
FINE_INCREMENT_BELOW_KG = 20.0

# Completed sessions considered when attaching history to an exercise
DEFAULT_HISTORY_LOOKBACK = 5
