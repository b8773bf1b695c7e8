import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from footyquery.data.schema import MatchRecord


def build_match(
    home: str,
    away: str,
    home_goals: Any = None,
    away_goals: Any = None,
    date: str | None = None,
    **extra: Any,
) -> Dict[str, Any]:
    match: Dict[str, Any] = {"home_team": home, "away_team": away}
    if home_goals is not None or away_goals is not None:
        score = {}
        if home_goals is not None:
            score["home"] = home_goals
        if away_goals is not None:
            score["away"] = away_goals
        match["score"] = score
    if date is not None:
        match["date"] = date
    match.update(extra)
    return match


@pytest.fixture
def make_record():
    """Factory building a MatchRecord from teams, goals and date."""

    def _make(*args: Any, **kwargs: Any) -> MatchRecord:
        return MatchRecord.from_dict(build_match(*args, **kwargs))

    return _make


@pytest.fixture
def scenario_matches() -> List[Dict[str, Any]]:
    return [
        build_match("A", "B", 2, 1, "2024-01-01"),
        build_match("B", "A", 0, 0, "2024-02-01"),
        build_match("A", "B", 1, 1, "2024-03-01"),
    ]


@pytest.fixture
def scenario_records(scenario_matches) -> List[MatchRecord]:
    return [MatchRecord.from_dict(m) for m in scenario_matches]


@pytest.fixture
def league_matches() -> List[Dict[str, Any]]:
    return [
        build_match("Arsenal", "Chelsea", 3, 1, "2024-04-20", season="2023-2024"),
        build_match("Chelsea", "Liverpool", 2, 2, "2024-04-13", season="2023-2024"),
        build_match("Liverpool", "Arsenal", 0, 1, "2024-04-06", season="2023-2024"),
        build_match("arsenal", "Liverpool", 1, 0, "2023-09-02", season="2023-2024"),
        build_match("Chelsea", "Arsenal", 2, 0, "2023-08-26", season="2023-2024"),
        build_match("Brighton", "Chelsea", "x", 1, "2023-08-19", season="2023-2024"),
        build_match("Brighton", "Arsenal", None, None, None, season="2022-2023"),
    ]


@pytest.fixture
def dataset_file(tmp_path: Path, league_matches) -> Path:
    path = tmp_path / "combined_matches.json"
    path.write_text(json.dumps({"matches": league_matches}), encoding="utf-8")
    return path
