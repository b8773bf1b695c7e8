"""
Query parameter sanitization for FootyQuery.

Raw request parameters are strings. `sanitize_params` keeps only the entries
that are recognized and valid, converting them to typed values; malformed
entries are dropped instead of failing the whole request.
"""

from __future__ import annotations

import html
import re
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from footyquery.data.schema import is_numeric_string, parse_date
from footyquery.utils.logging_utils import get_logger

logger = get_logger(__name__)

SCORE_PREFIX = "score_"

_INT_RE = re.compile(r"^\s*[+-]?\d+\s*$")

_BOOL_VALUES = {"true": True, "1": True, "false": False, "0": False}

# Sanitized parameters: int for page/page_size, bool for
# both_teams_scored, str for everything else.
QueryParams = Dict[str, Any]


class ParamKind(Enum):
    """Closed set of recognized parameter kinds plus a generic fallback."""

    TEAM = "team"
    HOME_TEAM = "home_team"
    AWAY_TEAM = "away_team"
    DATE = "date"
    SCORE = "score"
    BOTH_TEAMS_SCORED = "both_teams_scored"
    PAGE = "page"
    PAGE_SIZE = "page_size"
    GENERIC = "generic"


_NAMED_KINDS = {
    "team": ParamKind.TEAM,
    "home_team": ParamKind.HOME_TEAM,
    "away_team": ParamKind.AWAY_TEAM,
    "date": ParamKind.DATE,
    "both_teams_scored": ParamKind.BOTH_TEAMS_SCORED,
    "page": ParamKind.PAGE,
    "page_size": ParamKind.PAGE_SIZE,
}

PAGINATION_KINDS = frozenset({ParamKind.PAGE, ParamKind.PAGE_SIZE})


def classify_key(key: str) -> ParamKind:
    """Map a parameter name to its kind."""
    if key in _NAMED_KINDS:
        return _NAMED_KINDS[key]
    if key.startswith(SCORE_PREFIX):
        return ParamKind.SCORE
    return ParamKind.GENERIC


def score_field(key: str) -> str:
    """Return the score sub-field addressed by a ``score_<field>`` key."""
    return key[len(SCORE_PREFIX):]


def parse_int(value: str) -> Optional[int]:
    if not _INT_RE.match(value):
        return None
    return int(value.strip())


def parse_bool(value: str) -> Optional[bool]:
    """
    Three-way boolean parse: True, False, or None when unparsable.
    """
    return _BOOL_VALUES.get(value.strip().lower())


def _escape(value: str) -> str:
    return html.escape(value, quote=True)


def _sanitize_value(kind: ParamKind, value: str) -> Optional[Any]:
    if kind in PAGINATION_KINDS:
        return parse_int(value)
    if kind is ParamKind.DATE:
        return _escape(value) if parse_date(value) is not None else None
    if kind is ParamKind.BOTH_TEAMS_SCORED:
        return parse_bool(value)
    if kind is ParamKind.SCORE:
        return _escape(value) if is_numeric_string(value) else None
    return _escape(value)


def sanitize_params(raw: Mapping[str, Any]) -> QueryParams:
    """
    Validate and normalize raw query parameters.

    Parameters
    ----------
    raw : Mapping[str, str]
        Raw key -> string mapping, e.g. a request's query string.

    Returns
    -------
    dict
        Only the recognized-and-valid entries. Empty values are dropped.
    """
    sanitized: QueryParams = {}
    for key, value in raw.items():
        if value is None:
            continue
        value = str(value)
        if value == "":
            continue

        kind = classify_key(key)
        clean = _sanitize_value(kind, value)
        if clean is None:
            logger.debug("Dropping invalid %s parameter %r=%r", kind.value, key, value)
            continue
        sanitized[key] = clean

    return sanitized
