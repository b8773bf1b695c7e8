"""
Data loading utilities for FootyQuery.

The dataset is a JSON document of the form ``{"matches": [ {...}, ... ]}``.
It is re-read on every request; `parse_matches` is the pure bytes-to-records
step so it can be tested (and reused) without touching the filesystem.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Tuple, Union

from footyquery.data.schema import MatchRecord
from footyquery.errors import DataCorrupt, DataUnavailable
from footyquery.utils.logging_utils import get_logger
from footyquery.utils.paths import get_matches_path

logger = get_logger(__name__)


def parse_matches(raw: Union[bytes, str]) -> Tuple[MatchRecord, ...]:
    """
    Parse a raw dataset document into match records.

    Parameters
    ----------
    raw : bytes | str
        The JSON document.

    Returns
    -------
    tuple[MatchRecord, ...]
        Records in file order. A document without a "matches" key yields an
        empty tuple.

    Raises
    ------
    DataCorrupt
        If the document is not JSON, its top level is not an object, or
        "matches" is not a list of objects.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DataCorrupt(f"Invalid JSON data: {exc}") from exc

    if not isinstance(data, dict):
        raise DataCorrupt(
            f"Expected a JSON object at top level, got {type(data).__name__}"
        )

    entries = data.get("matches")
    if entries is None:
        logger.warning("Dataset has no 'matches' key; treating it as empty.")
        return ()
    if not isinstance(entries, list):
        raise DataCorrupt(
            f"Expected 'matches' to be a list, got {type(entries).__name__}"
        )

    records = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise DataCorrupt(
                f"Match entry {index} is not an object: {entry!r}"
            )
        records.append(MatchRecord.from_dict(entry))

    return tuple(records)


def load_matches(path: Optional[Path | str] = None) -> Tuple[MatchRecord, ...]:
    """
    Load the match dataset from disk.

    Parameters
    ----------
    path : pathlib.Path | str | None
        Path to the JSON dataset. If None, uses the configured default
        (see `get_matches_path`).

    Returns
    -------
    tuple[MatchRecord, ...]
        All records in file order.

    Raises
    ------
    DataUnavailable
        If the file does not exist or cannot be read.
    DataCorrupt
        If the file is not a well-formed dataset.
    """
    json_path = Path(path) if path is not None else get_matches_path()
    if not json_path.is_file():
        raise DataUnavailable(f"JSON file not found: {json_path}")

    try:
        raw = json_path.read_bytes()
    except OSError as exc:
        raise DataUnavailable(f"Failed to read JSON file: {json_path}") from exc

    records = parse_matches(raw)
    logger.info("Loaded %d matches from %s", len(records), json_path)
    return records
