"""
Helper functions for file and directory paths used in FootyQuery.
"""

import os
from pathlib import Path

from footyquery.config import (
    DATA_DIR,
    MATCHES_FILENAME,
    DATA_FILE_ENV_VAR,
)


def get_matches_path(filename: str | None = None) -> Path:
    """
    Return the path to the match dataset.

    Parameters
    ----------
    filename : str | None
        Specific filename inside the data directory. If None, the
        FOOTYQUERY_DATA_FILE environment variable is honoured first, then the
        default combined matches file.

    Returns
    -------
    Path
        Full path to the dataset file.
    """
    if filename is None:
        override = os.environ.get(DATA_FILE_ENV_VAR)
        if override:
            return Path(override)
        filename = MATCHES_FILENAME
    return DATA_DIR / filename
