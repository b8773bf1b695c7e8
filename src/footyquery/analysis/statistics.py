"""
Matchup statistics for FootyQuery.

Every function takes an already-filtered sequence of match records and
returns zero-valued results on empty input instead of failing.

Note the two "both teams scored" measures use different denominators:
`both_teams_scored_percentage` divides by every record (score-invalid ones
included), `both_teams_to_score_probability` only by score-valid records.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from footyquery.config import RECENT_FORM_WINDOW
from footyquery.data.schema import MatchRecord, same_team

POINTS_FOR_WIN = 3
POINTS_FOR_DRAW = 1


def _percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(count / total * 100, 2)


def goals_frame(records: Sequence[MatchRecord]) -> pd.DataFrame:
    """
    One row per record with coerced `home_goals` / `away_goals`.

    Missing or non-numeric sides are NaN.
    """
    return pd.DataFrame(
        {
            "home_goals": [r.home_goals for r in records],
            "away_goals": [r.away_goals for r in records],
        },
        dtype=float,
    )


def both_teams_scored_percentage(records: Sequence[MatchRecord]) -> float:
    """Share of all records where both sides scored, as a percentage."""
    scored = sum(1 for r in records if r.both_scored)
    return _percentage(scored, len(records))


def average_goals(records: Sequence[MatchRecord]) -> Dict[str, float]:
    """
    Average total/home/away goals per match.

    A missing side counts as zero goals but the match still counts towards
    the denominator.
    """
    if not records:
        return {
            "average_total_goals": 0.0,
            "average_home_goals": 0.0,
            "average_away_goals": 0.0,
        }

    goals = goals_frame(records).fillna(0.0)
    n_matches = len(goals)
    home_total = float(goals["home_goals"].sum())
    away_total = float(goals["away_goals"].sum())

    return {
        "average_total_goals": round((home_total + away_total) / n_matches, 2),
        "average_home_goals": round(home_total / n_matches, 2),
        "average_away_goals": round(away_total / n_matches, 2),
    }


def form_index(
    records: Sequence[MatchRecord],
    team: str,
    recent_games: int = RECENT_FORM_WINDOW,
) -> float:
    """
    Percentage of available points `team` earned in its first
    `recent_games` matches of `records`.

    Records are taken in the order given; pass them newest first. Matches
    without a usable score earn no points but still count as played.
    """
    if not team:
        return 0.0

    team_matches = [r for r in records if r.involves(team)]
    if not team_matches:
        return 0.0

    recent = team_matches[:recent_games]
    points = 0
    for record in recent:
        if not record.is_score_valid:
            continue
        if same_team(record.home_team, team):
            goals_for, goals_against = record.home_goals, record.away_goals
        else:
            goals_for, goals_against = record.away_goals, record.home_goals

        if goals_for > goals_against:
            points += POINTS_FOR_WIN
        elif goals_for == goals_against:
            points += POINTS_FOR_DRAW

    max_points = len(recent) * POINTS_FOR_WIN
    return round(points / max_points * 100, 2) if max_points > 0 else 0.0


def head_to_head_stats(records: Sequence[MatchRecord]) -> Dict[str, float]:
    """
    Home wins / away wins / draws over score-valid records.

    "Home" and "away" refer to each record's own sides; no orientation swap
    is applied.
    """
    goals = goals_frame(records).dropna()
    n_valid = len(goals)

    if n_valid == 0:
        home_wins = away_wins = draws = 0
    else:
        outcome = np.sign(goals["home_goals"] - goals["away_goals"])
        home_wins = int((outcome > 0).sum())
        away_wins = int((outcome < 0).sum())
        draws = int((outcome == 0).sum())

    return {
        "home_wins": home_wins,
        "away_wins": away_wins,
        "draws": draws,
        "home_win_percentage": _percentage(home_wins, n_valid),
        "away_win_percentage": _percentage(away_wins, n_valid),
        "draw_percentage": _percentage(draws, n_valid),
    }


def expected_goals(team: str, records: Sequence[MatchRecord]) -> float:
    """
    Average goals scored by `team` in its score-valid matches.

    A plain historical average, not a shot-quality model.
    """
    if not team or not records:
        return 0.0

    scored = [
        r.home_goals if same_team(r.home_team, team) else r.away_goals
        for r in records
        if r.involves(team) and r.is_score_valid
    ]
    if not scored:
        return 0.0

    return round(float(np.mean(scored)), 2)


def both_teams_to_score_probability(records: Sequence[MatchRecord]) -> float:
    """Share of score-valid records where both sides scored, as a percentage."""
    valid = [r for r in records if r.is_score_valid]
    scored = sum(1 for r in valid if r.both_scored)
    return _percentage(scored, len(valid))


def available_teams(records: Sequence[MatchRecord]) -> List[str]:
    """
    Every team name in `records`, de-duplicated case-insensitively.

    The first-seen spelling is kept and names are listed in first-seen order.
    Callers pass the whole dataset, not a filtered view.
    """
    teams: Dict[str, str] = {}
    for record in records:
        for name in (record.home_team, record.away_team):
            if name is None or name == "":
                continue
            name = str(name)
            teams.setdefault(name.lower(), name)

    return list(teams.values())
