"""Constants for the matching module.

Default tuning for result-to-question matching. Every value here can be
overridden per run through MatchingConfig; these are only the defaults.
For pattern/alias data, see resultmatch/utilities/constants.py
"""

# How far back to look for concluded results.
DEFAULT_WINDOW_DAYS = 7

# =============================================================================
# CONFIDENCE THRESHOLDS
# Pair confidence (mean of home/away similarity) required to propose a match.
# =============================================================================

# Domestic league fixtures
DOMESTIC_THRESHOLD = 75.0

# Continental fixtures: team names diverge more across languages and sources
CHAMPIONS_LEAGUE_THRESHOLD = 85.0

# Each side must clear this on its own, otherwise one strong side could
# carry a wrong opponent over the threshold.
# "sant andreu" vs "sabadell" scores 52.6, "barcelona" vs
# "atletic barceloneta" 64.3; "terrassa" vs "terrasa" 93.3.
SIMILARITY_FLOOR = 70.0

# =============================================================================
# GOAL BUCKETS
# =============================================================================

# Inclusive mid-range for the bonus goal sub-question
DEFAULT_BUCKET_LOW = 11
DEFAULT_BUCKET_HIGH = 12

# Seconds to wait for all sources before giving up on stragglers
DEFAULT_FETCH_TIMEOUT = 20.0
