# config.py
# Seconds into the future the field is computed for; aircraft that have not
# reached their goal by then are simply cut off.
DEFAULT_LOOK_AHEAD = 20
DEFAULT_LOOK_BEHIND = 2

# Risk of a square that currently holds an aircraft
PLANE_DANGER = 0.98

# Multiplier for the buffer ("fuzz") spread around each predicted square
FIELD_WEIGHT = 0.5

# Upper bound on a single projected contribution
DANGER_CEILING = 0.4

EPSILON = 1e-6

# Extra seconds projected past the final destination along the approach
TAIL_SECONDS = 2
MAX_TAIL_SECONDS = 3
