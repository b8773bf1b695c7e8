"""
Request processing for FootyQuery.

Runs the whole query pipeline for one request and assembles the result
envelope:

    sanitize -> filter -> sort -> paginate
                        +-> team analysis + prediction (home & away given)

Usage (from project root, with the virtualenv activated):

    python -m footyquery.api.service home_team=Arsenal away_team=Chelsea

prints the envelope as pretty JSON, the same document `GET /matches` serves.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from footyquery.analysis.prediction import build_team_analysis, run_prediction
from footyquery.analysis.statistics import available_teams
from footyquery.data.data_loader import load_matches
from footyquery.data.schema import MatchRecord
from footyquery.errors import MatchDataError, UnhandledComputationError
from footyquery.query.filters import filter_matches
from footyquery.query.pagination import (
    paginate,
    resolve_page,
    resolve_page_size,
    sort_by_date_desc,
)
from footyquery.query.params import sanitize_params
from footyquery.utils.logging_utils import get_logger

logger = get_logger(__name__)

Loader = Callable[[], Sequence[MatchRecord]]


def process_request(
    raw_params: Mapping[str, Any],
    records: Sequence[MatchRecord],
) -> Dict[str, Any]:
    """
    Answer one query against an already-loaded dataset.

    Parameters
    ----------
    raw_params : Mapping[str, str]
        Raw request parameters.
    records : Sequence[MatchRecord]
        The full dataset.

    Returns
    -------
    dict
        The result envelope. All keys are always present; `team_analysis`
        and `prediction` are None unless both teams were requested.

    Raises
    ------
    UnhandledComputationError
        If anything fails while filtering, aggregating or predicting.
    """
    try:
        params = sanitize_params(raw_params)
        filtered = sort_by_date_desc(filter_matches(records, params))
        page = paginate(filtered, resolve_page(params), resolve_page_size(params))

        home_team = params.get("home_team", "")
        away_team = params.get("away_team", "")
        team_analysis = None
        prediction = None
        if home_team and away_team:
            team_analysis = build_team_analysis(filtered, home_team, away_team)
            prediction = run_prediction(filtered, home_team, away_team)

        return {
            "total_matches": page.total,
            "page": page.page,
            "page_size": page.page_size,
            "matches": [record.to_dict() for record in page.items],
            "team_analysis": team_analysis,
            "prediction": prediction,
            "teams": available_teams(records),
        }
    except Exception as exc:  # noqa: BLE001
        logger.exception("Query processing failed: %s", exc)
        raise UnhandledComputationError(f"Query processing failed: {exc}") from exc


def handle_request(
    raw_params: Mapping[str, Any],
    loader: Optional[Loader] = None,
) -> Dict[str, Any]:
    """
    Load the dataset and answer one query.

    Dataset errors (MatchDataError) propagate unchanged; there is no
    degraded mode without data.
    """
    load = loader if loader is not None else load_matches
    try:
        records = load()
    except MatchDataError as exc:
        logger.error("Failed to load match dataset: %s", exc)
        raise

    return process_request(raw_params, records)


def render_envelope(envelope: Mapping[str, Any]) -> str:
    """Serialize an envelope as pretty-printed JSON with unescaped Unicode."""
    return json.dumps(envelope, indent=4, ensure_ascii=False)


def _parse_cli_params(pairs: Sequence[str]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(
                f"Expected key=value, got {pair!r}")
        params[key] = value
    return params


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Query the FootyQuery match dataset.")
    parser.add_argument(
        "params",
        nargs="*",
        help="Query parameters as key=value pairs, e.g. team=Arsenal page=2.",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=None,
        help="Path to the JSON dataset. "
        "If not provided, uses FOOTYQUERY_DATA_FILE or the default from config.py.",
    )
    args = parser.parse_args()

    try:
        raw_params = _parse_cli_params(args.params)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    envelope = handle_request(raw_params, loader=lambda: load_matches(args.data))
    print(render_envelope(envelope))


if __name__ == "__main__":
    main()
