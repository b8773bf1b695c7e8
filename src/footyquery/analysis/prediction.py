"""
Heuristic matchup prediction for FootyQuery.

The "prediction" is a deterministic tally of past head-to-head results plus
historical goal averages. The `modelPredictions` block presents the same
numbers under three labels (categorical pick, rounded goal pair, outcome
probabilities); they are views of one heuristic, not separate models.

Two different orientation rules are in play:

- `team_analysis_subset` matches the pair in either orientation.
- `head_to_head_subset` (used by `predict_winner`) only keeps fixtures where
  the requested home team actually played at home.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from footyquery.analysis.statistics import (
    average_goals,
    both_teams_scored_percentage,
    both_teams_to_score_probability,
    expected_goals,
    form_index,
    head_to_head_stats,
)
from footyquery.config import OUTCOME_LABELS, UNKNOWN_OUTCOME
from footyquery.data.schema import MatchRecord, same_team


@dataclass(frozen=True)
class WinnerPrediction:
    """Predicted outcome ("home", "away", "draw" or "unknown") and its share."""

    winner: str
    confidence: float


UNKNOWN_PREDICTION = WinnerPrediction(winner=UNKNOWN_OUTCOME, confidence=0.0)


def team_analysis_subset(
    records: Sequence[MatchRecord],
    home_team: str,
    away_team: str,
) -> List[MatchRecord]:
    """Matches between the two teams in either orientation."""
    return [
        r
        for r in records
        if r.home_team is not None
        and r.away_team is not None
        and (
            (same_team(r.home_team, home_team) and same_team(r.away_team, away_team))
            or (same_team(r.home_team, away_team) and same_team(r.away_team, home_team))
        )
    ]


def head_to_head_subset(
    records: Sequence[MatchRecord],
    home_team: str,
    away_team: str,
) -> List[MatchRecord]:
    """Matches where `home_team` hosted `away_team`; reverse fixtures excluded."""
    return [
        r
        for r in records
        if same_team(r.home_team, home_team) and same_team(r.away_team, away_team)
    ]


def predict_winner(
    home_team: str,
    away_team: str,
    records: Sequence[MatchRecord],
) -> WinnerPrediction:
    """
    Pick the most frequent outcome of past home-vs-away fixtures.

    Home or away must strictly beat both other tallies; every other case,
    ties included, is called a draw. Confidence is the picked outcome's
    share of the score-valid fixtures.
    """
    if not home_team or not away_team or not records:
        return UNKNOWN_PREDICTION

    fixtures = [
        r for r in head_to_head_subset(records, home_team, away_team) if r.is_score_valid
    ]
    if not fixtures:
        return UNKNOWN_PREDICTION

    home_wins = sum(1 for r in fixtures if r.home_goals > r.away_goals)
    away_wins = sum(1 for r in fixtures if r.home_goals < r.away_goals)
    draws = len(fixtures) - home_wins - away_wins
    total = len(fixtures)

    if home_wins > away_wins and home_wins > draws:
        return WinnerPrediction("home", round(home_wins / total, 2))
    if away_wins > home_wins and away_wins > draws:
        return WinnerPrediction("away", round(away_wins / total, 2))
    return WinnerPrediction("draw", round(draws / total, 2))


def win_probability(prediction: WinnerPrediction, outcome: str) -> float:
    """
    Probability assigned to `outcome` ("home", "draw" or "away").

    The predicted outcome gets the confidence; the remainder is split evenly
    between the other two. Unknown predictions give every outcome 1/3.
    """
    if prediction.winner == UNKNOWN_OUTCOME:
        return round(1 / 3, 2)
    if outcome == prediction.winner:
        return prediction.confidence
    return round((1 - prediction.confidence) / 2, 2)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def build_team_analysis(
    records: Sequence[MatchRecord],
    home_team: str,
    away_team: str,
) -> Dict[str, Any]:
    """
    Statistics for the requested pairing.

    `records` is the filtered listing, newest first; the form indices look at
    each team's most recent matches in it.
    """
    pairing = team_analysis_subset(records, home_team, away_team)
    return {
        "home_team": home_team,
        "away_team": away_team,
        "matches_count": len(pairing),
        "both_teams_scored_percentage": both_teams_scored_percentage(pairing),
        "average_goals": average_goals(pairing),
        "home_form_index": form_index(records, home_team),
        "away_form_index": form_index(records, away_team),
        "head_to_head_stats": head_to_head_stats(pairing),
    }


def run_prediction(
    records: Sequence[MatchRecord],
    home_team: str,
    away_team: str,
) -> Dict[str, Any]:
    """Assemble the prediction payload for the requested pairing."""
    home_xg = expected_goals(home_team, records)
    away_xg = expected_goals(away_team, records)
    prediction = predict_winner(home_team, away_team, records)

    if prediction.winner == UNKNOWN_OUTCOME:
        categorical = "insufficient_data"
    else:
        categorical = f"{prediction.winner}_win"

    home_label, draw_label, away_label = OUTCOME_LABELS
    return {
        "homeExpectedGoals": home_xg,
        "awayExpectedGoals": away_xg,
        "bothTeamsToScoreProb": both_teams_to_score_probability(records),
        "predictedWinner": prediction.winner,
        "confidence": prediction.confidence,
        "modelPredictions": {
            "randomForest": categorical,
            "poisson": {
                "homeGoals": round_half_away(home_xg),
                "awayGoals": round_half_away(away_xg),
            },
            "elo": {
                "homeWinProb": win_probability(prediction, home_label),
                "drawProb": win_probability(prediction, draw_label),
                "awayWinProb": win_probability(prediction, away_label),
            },
        },
    }
