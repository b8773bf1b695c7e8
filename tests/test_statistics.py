import pytest

from footyquery.analysis.statistics import (
    available_teams,
    average_goals,
    both_teams_scored_percentage,
    both_teams_to_score_probability,
    expected_goals,
    form_index,
    head_to_head_stats,
)


def test_empty_input_gives_zero_structures():
    assert both_teams_scored_percentage([]) == 0.0
    assert average_goals([]) == {
        "average_total_goals": 0.0,
        "average_home_goals": 0.0,
        "average_away_goals": 0.0,
    }
    assert head_to_head_stats([]) == {
        "home_wins": 0,
        "away_wins": 0,
        "draws": 0,
        "home_win_percentage": 0.0,
        "away_win_percentage": 0.0,
        "draw_percentage": 0.0,
    }
    assert expected_goals("A", []) == 0.0
    assert both_teams_to_score_probability([]) == 0.0
    assert available_teams([]) == []


def test_average_goals_counts_missing_sides_as_zero(make_record):
    records = [
        make_record("A", "B", 2, 1),
        make_record("A", "B", 3, None),
        make_record("A", "B"),
    ]
    assert average_goals(records) == {
        "average_total_goals": 2.0,
        "average_home_goals": 1.67,
        "average_away_goals": 0.33,
    }


def test_both_teams_scored_denominators_differ(make_record):
    records = [
        make_record("A", "B", 1, 1),
        make_record("A", "B", 2, 0),
        make_record("A", "B", 1, None),
        make_record("A", "B"),
    ]
    # every record counts towards the percentage...
    assert both_teams_scored_percentage(records) == 25.0
    # ...but only score-valid ones towards the probability
    assert both_teams_to_score_probability(records) == 50.0


def test_partial_score_excluded_from_head_to_head(make_record):
    complete = make_record("A", "B", 2, 1)
    partial = make_record("A", "B", 3, None)

    stats = head_to_head_stats([complete, partial])
    assert stats["home_wins"] == 1
    assert stats["home_win_percentage"] == 100.0

    # still part of the both-teams-scored denominator
    assert both_teams_scored_percentage([complete, partial]) == 50.0


def test_head_to_head_uses_each_record_orientation(make_record):
    records = [
        make_record("A", "B", 2, 1),
        make_record("B", "A", 3, 0),
        make_record("A", "B", 0, 1),
        make_record("B", "A", 1, 1),
    ]
    assert head_to_head_stats(records) == {
        "home_wins": 2,
        "away_wins": 1,
        "draws": 1,
        "home_win_percentage": 50.0,
        "away_win_percentage": 25.0,
        "draw_percentage": 25.0,
    }


def test_form_index_uses_first_matches_in_given_order(make_record):
    records = [
        make_record("A", "B", 2, 0),  # win
        make_record("C", "A", 1, 1),  # draw
        make_record("C", "D", 5, 0),  # not involved
        make_record("A", "E", 0, 1),  # loss
        make_record("F", "A", 0, 3),  # win, outside window of 3
    ]
    assert form_index(records, "a", recent_games=3) == pytest.approx(44.44)
    assert form_index(records, "A") == pytest.approx(58.33)


def test_form_index_counts_unscored_matches_as_played(make_record):
    records = [make_record("A", "B", 1, 0), make_record("A", "B")]
    assert form_index(records, "A") == 50.0


def test_form_index_empty_team_or_no_matches(make_record):
    records = [make_record("A", "B", 1, 0)]
    assert form_index(records, "") == 0.0
    assert form_index(records, "Z") == 0.0


def test_expected_goals_from_team_perspective(make_record):
    records = [
        make_record("A", "B", 2, 1),
        make_record("B", "A", 0, 3),
        make_record("A", "C", 1, None),
        make_record("C", "D", 4, 4),
    ]
    assert expected_goals("a", records) == 2.5
    assert expected_goals("B", records) == 0.5
    assert expected_goals("Z", records) == 0.0
    assert expected_goals("", records) == 0.0


def test_available_teams_first_seen_casing_and_order(make_record):
    records = [
        make_record("Arsenal", "chelsea"),
        make_record("Chelsea", "ARSENAL"),
        make_record("Liverpool", ""),
    ]
    assert available_teams(records) == ["Arsenal", "chelsea", "Liverpool"]
