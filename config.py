"""Application configuration driven by environment variables.

All settings have sensible defaults for local development.  Without a
``TMDB_API_KEY`` the demo runs against the bundled in-memory catalogue.
"""

import os

# ---------------------------------------------------------------------------
# Movie catalogue (TMDB)
# ---------------------------------------------------------------------------

TMDB_API_KEY: str = os.getenv("TMDB_API_KEY", "")
TMDB_BASE_URL: str = os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")

# Per-request timeout.  A timed-out genre query only drops that query's
# candidates; see RecommendationEngine.
TMDB_TIMEOUT_SECONDS: float = float(os.getenv("TMDB_TIMEOUT_SECONDS", "10"))
TMDB_UI_LANGUAGE: str = os.getenv("TMDB_UI_LANGUAGE", "en-US")

# ---------------------------------------------------------------------------
# Recommendation engine
# ---------------------------------------------------------------------------

DEFAULT_LIMIT: int = int(os.getenv("MOODRECO_DEFAULT_LIMIT", "20"))

# Comma-separated ISO 639-1 codes, or "all".
DEFAULT_LANGUAGES: list[str] = [
    code.strip()
    for code in os.getenv("MOODRECO_LANGUAGES", "en").split(",")
    if code.strip()
]

# Upper bound of the random freshness bonus added to each match score.
# Set to 0 for stable scores per mood analysis.
SCORE_JITTER: float = float(os.getenv("MOODRECO_SCORE_JITTER", "5"))

# Warn if a recommendation request takes longer than this.
RECOMMENDATION_WARN_THRESHOLD_MS: float = float(
    os.getenv("MOODRECO_WARN_THRESHOLD_MS", "2000")
)

# ---------------------------------------------------------------------------
# Mood analysis
# ---------------------------------------------------------------------------

MOOD_HISTORY_SIZE: int = int(os.getenv("MOODRECO_HISTORY_SIZE", "50"))
SECONDARY_MOOD_THRESHOLD: float = 0.15
MAX_SECONDARY_MOODS: int = 3
