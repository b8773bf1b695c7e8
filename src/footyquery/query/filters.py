"""
Match filtering for FootyQuery.

A record is kept iff it satisfies every parameter predicate (logical AND).
Each key is dispatched on its `ParamKind`; unknown keys fall back to a
case-insensitive comparison with the same-named top-level field.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Sequence

import pandas as pd

from footyquery.data.schema import (
    MatchRecord,
    parse_date,
    same_team,
    stringify_scalar,
)
from footyquery.query.params import (
    PAGINATION_KINDS,
    ParamKind,
    QueryParams,
    classify_key,
    score_field,
)


def matches_team(record: MatchRecord, key: str, value: str) -> bool:
    if record.home_team is None or record.away_team is None:
        return False
    return same_team(record.home_team, value) or same_team(record.away_team, value)


def matches_home_team(record: MatchRecord, key: str, value: str) -> bool:
    return same_team(record.home_team, value)


def matches_away_team(record: MatchRecord, key: str, value: str) -> bool:
    return same_team(record.away_team, value)


def matches_date(record: MatchRecord, key: str, value: Any) -> bool:
    """On or after the given date (inclusive lower bound)."""
    since = value if isinstance(value, pd.Timestamp) else parse_date(value)
    if record.match_date is None or since is None:
        return False
    return record.match_date >= since


def matches_score(record: MatchRecord, key: str, value: str) -> bool:
    score = record.score
    field = score_field(key)
    if not isinstance(score, Mapping) or field not in score:
        return False
    return stringify_scalar(score[field]) == value


def matches_both_teams_scored(record: MatchRecord, key: str, value: bool) -> bool:
    if not record.is_score_valid:
        return False
    return record.both_scored is value


def matches_default(record: MatchRecord, key: str, value: str) -> bool:
    field_value = stringify_scalar(record.get(key))
    return field_value is not None and field_value.lower() == value.lower()


Predicate = Callable[[MatchRecord, str, Any], bool]

PREDICATES: Dict[ParamKind, Predicate] = {
    ParamKind.TEAM: matches_team,
    ParamKind.HOME_TEAM: matches_home_team,
    ParamKind.AWAY_TEAM: matches_away_team,
    ParamKind.DATE: matches_date,
    ParamKind.SCORE: matches_score,
    ParamKind.BOTH_TEAMS_SCORED: matches_both_teams_scored,
    ParamKind.GENERIC: matches_default,
}


def filter_matches(
    records: Sequence[MatchRecord],
    params: QueryParams,
) -> List[MatchRecord]:
    """
    Select the records matching every filtering parameter.

    Parameters
    ----------
    records : Sequence[MatchRecord]
        Records to filter; never mutated.
    params : dict
        Sanitized parameters. Pagination keys are not predicates.

    Returns
    -------
    list[MatchRecord]
        Matching records, in input order.
    """
    checks = []
    for key, value in params.items():
        kind = classify_key(key)
        if kind in PAGINATION_KINDS:
            continue
        if kind is ParamKind.DATE:
            # parse once rather than per record
            value = parse_date(value)
        checks.append((PREDICATES[kind], key, value))

    if not checks:
        return list(records)

    return [
        record
        for record in records
        if all(predicate(record, key, value) for predicate, key, value in checks)
    ]
