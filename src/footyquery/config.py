"""
Global configuration for the FootyQuery project.

This module centralizes paths and key query parameters (page sizes, form
window), so you can tweak them in one place.
"""

from pathlib import Path

# Project root = folder that contains "src", "data", etc.
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]

# Data directories
DATA_DIR: Path = PROJECT_ROOT / "data"

# Default match dataset ({"matches": [...]})
MATCHES_FILENAME: str = "combined_matches.json"

# Environment variable that overrides the dataset location
DATA_FILE_ENV_VAR: str = "FOOTYQUERY_DATA_FILE"

# Pagination
DEFAULT_PAGE_SIZE: int = 100
MAX_PAGE_SIZE: int = 500  # prevent excessive response sizes

# Number of most recent matches used for the form index
RECENT_FORM_WINDOW: int = 5

# Outcome labels used by the winner prediction
OUTCOME_LABELS = ["home", "draw", "away"]
UNKNOWN_OUTCOME: str = "unknown"

# Columns expected in uploaded CSV files
CSV_REQUIRED_COLUMNS = [
    "home_team",
    "away_team",
    "score_home",
    "score_away",
    "score_home_ht",
    "score_away_ht",
    "date",
]
