import pytest

from footyquery.analysis.prediction import (
    WinnerPrediction,
    build_team_analysis,
    head_to_head_subset,
    predict_winner,
    round_half_away,
    run_prediction,
    team_analysis_subset,
    win_probability,
)
from footyquery.query.pagination import sort_by_date_desc

OUTCOMES = ("home", "draw", "away")


def test_subsets_differ_in_orientation(scenario_records):
    assert len(team_analysis_subset(scenario_records, "A", "B")) == 3
    exact = head_to_head_subset(scenario_records, "a", "b")
    assert [r.date for r in exact] == ["2024-01-01", "2024-03-01"]


def test_predict_winner_home_majority(make_record):
    records = [
        make_record("A", "B", 2, 0),
        make_record("A", "B", 1, 0),
        make_record("A", "B", 1, 1),
        make_record("B", "A", 5, 0),  # reverse fixture ignored
    ]
    assert predict_winner("A", "B", records) == WinnerPrediction("home", 0.67)


def test_predict_winner_away_majority(make_record):
    records = [make_record("A", "B", 0, 2), make_record("A", "B", 1, 3), make_record("A", "B", 2, 1)]
    assert predict_winner("A", "B", records) == WinnerPrediction("away", 0.67)


def test_predict_winner_ties_fall_back_to_draw(make_record):
    records = [make_record("A", "B", 2, 0), make_record("A", "B", 0, 2)]
    assert predict_winner("A", "B", records) == WinnerPrediction("draw", 0.0)

    records.append(make_record("A", "B", 1, 1))
    records.append(make_record("A", "B", 0, 0))
    assert predict_winner("A", "B", records) == WinnerPrediction("draw", 0.5)


def test_predict_winner_unknown_cases(make_record):
    valid = [make_record("A", "B", 1, 0)]
    assert predict_winner("", "B", valid).winner == "unknown"
    assert predict_winner("A", "", valid).winner == "unknown"
    assert predict_winner("A", "B", []).winner == "unknown"
    assert predict_winner("A", "B", [make_record("A", "B", 1, None)]) == WinnerPrediction("unknown", 0.0)
    assert predict_winner("B", "A", valid).winner == "unknown"


@pytest.mark.parametrize(
    "prediction",
    [
        WinnerPrediction("unknown", 0.0),
        WinnerPrediction("home", 0.67),
        WinnerPrediction("away", 1.0),
        WinnerPrediction("draw", 0.5),
        WinnerPrediction("home", 0.33),
    ],
)
def test_win_probabilities_sum_to_one(prediction):
    total = sum(win_probability(prediction, outcome) for outcome in OUTCOMES)
    assert abs(total - 1.0) <= 0.01 + 1e-9


def test_win_probability_values():
    prediction = WinnerPrediction("home", 0.6)
    assert win_probability(prediction, "home") == 0.6
    assert win_probability(prediction, "draw") == 0.2
    assert win_probability(prediction, "away") == 0.2
    assert win_probability(WinnerPrediction("unknown", 0.0), "draw") == 0.33


def test_round_half_away():
    assert round_half_away(2.5) == 3
    assert round_half_away(1.49) == 1
    assert round_half_away(0.5) == 1
    assert round_half_away(0.0) == 0


def test_build_team_analysis_scenario(scenario_records):
    records = sort_by_date_desc(scenario_records)
    analysis = build_team_analysis(records, "A", "B")
    assert analysis["matches_count"] == 3
    assert analysis["head_to_head_stats"]["draws"] == 2
    assert analysis["average_goals"]["average_total_goals"] == 1.67
    # newest first: A drew 1-1, drew 0-0, beat B 2-1
    assert analysis["home_form_index"] == 55.56
    assert analysis["away_form_index"] == 22.22


def test_run_prediction_payload(scenario_records):
    payload = run_prediction(scenario_records, "A", "B")
    assert payload["homeExpectedGoals"] == 1.0
    assert payload["awayExpectedGoals"] == 0.67
    assert payload["bothTeamsToScoreProb"] == 66.67
    assert payload["predictedWinner"] == "draw"
    assert payload["confidence"] == 0.5
    assert payload["modelPredictions"] == {
        "randomForest": "draw_win",
        "poisson": {"homeGoals": 1, "awayGoals": 1},
        "elo": {"homeWinProb": 0.25, "drawProb": 0.5, "awayWinProb": 0.25},
    }


def test_run_prediction_without_history(make_record):
    payload = run_prediction([make_record("C", "D", 1, 0)], "A", "B")
    assert payload["predictedWinner"] == "unknown"
    assert payload["modelPredictions"]["randomForest"] == "insufficient_data"
    assert payload["modelPredictions"]["elo"] == {
        "homeWinProb": 0.33,
        "drawProb": 0.33,
        "awayWinProb": 0.33,
    }
