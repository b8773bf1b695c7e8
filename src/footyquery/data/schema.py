"""
Match record model and field coercion helpers for FootyQuery.

Raw dataset entries are free-form mappings. `MatchRecord` wraps one entry
read-only and pre-computes the two things every query needs: the coerced
goals of the `score` pair and the parsed match date.
"""

from __future__ import annotations

import copy
import math
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import pandas as pd

# PHP-style numeric strings: optional sign, decimal or exponent form,
# surrounding whitespace tolerated.
_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

# Undated matches sort as if played at the earliest representable instant.
MIN_DATE: pd.Timestamp = pd.Timestamp.min


def is_numeric_string(value: str) -> bool:
    """Return True if `value` is a plain integer/decimal/exponent literal."""
    return bool(_NUMERIC_RE.match(value))


def parse_date(value: Any) -> Optional[pd.Timestamp]:
    """
    Parse a free-form date string.

    Returns None for missing, non-string or unparsable values. Timezone-aware
    values are converted to naive UTC so that all parsed dates compare.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        parsed = pd.to_datetime(value.strip(), errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None

    if parsed is None or pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert("UTC").tz_localize(None)
    return parsed


def coerce_goals(value: Any) -> Optional[int]:
    """
    Coerce a raw goal count to int.

    Accepts ints, finite floats and numeric strings (truncated towards zero).
    Booleans, None and anything else are not goal counts.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str) and is_numeric_string(value):
        number = float(value)
        return int(number) if math.isfinite(number) else None
    return None


def stringify_scalar(value: Any) -> Optional[str]:
    """
    Render a scalar field the way it is compared against query strings.

    Integral floats lose their trailing ".0"; booleans become "1"/"".
    Mappings, lists and None have no string form and return None.
    """
    if value is None or isinstance(value, (Mapping, list, tuple)):
        return None
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def same_team(name: Any, team: str) -> bool:
    """Case-insensitive team identity; a missing name never matches."""
    if name is None:
        return False
    return str(name).lower() == team.lower()


@dataclass(frozen=True)
class MatchRecord:
    """Immutable view over one raw match entry."""

    raw: Mapping[str, Any]
    home_goals: Optional[int] = None
    away_goals: Optional[int] = None
    match_date: Optional[pd.Timestamp] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatchRecord":
        score = data.get("score")
        home_goals = away_goals = None
        if isinstance(score, Mapping):
            home_goals = coerce_goals(score.get("home"))
            away_goals = coerce_goals(score.get("away"))

        return cls(
            raw=MappingProxyType(dict(data)),
            home_goals=home_goals,
            away_goals=away_goals,
            match_date=parse_date(data.get("date")),
        )

    @property
    def home_team(self) -> Any:
        return self.raw.get("home_team")

    @property
    def away_team(self) -> Any:
        return self.raw.get("away_team")

    @property
    def date(self) -> Any:
        return self.raw.get("date")

    @property
    def score(self) -> Any:
        return self.raw.get("score")

    @property
    def is_score_valid(self) -> bool:
        """Both `score.home` and `score.away` are present and numeric."""
        return self.home_goals is not None and self.away_goals is not None

    @property
    def both_scored(self) -> bool:
        return self.is_score_valid and self.home_goals > 0 and self.away_goals > 0

    @property
    def sort_date(self) -> pd.Timestamp:
        return self.match_date if self.match_date is not None else MIN_DATE

    def get(self, field: str, default: Any = None) -> Any:
        return self.raw.get(field, default)

    def involves(self, team: str) -> bool:
        """True if `team` played in this match, home or away."""
        return same_team(self.home_team, team) or same_team(self.away_team, team)

    def to_dict(self) -> Dict[str, Any]:
        """Return a detached copy of the raw entry for serialization."""
        return copy.deepcopy(dict(self.raw))
