# path: src/footyquery/api/main.py
"""
FastAPI app exposing FootyQuery endpoints.

Endpoints:
- GET /health   -> simple health check
- GET /matches  -> filtered, paginated listing + matchup analysis/prediction
- GET /teams    -> every team name in the dataset

The dataset is re-read on every request; nothing is cached between calls.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from footyquery import __version__
from footyquery.analysis.statistics import available_teams
from footyquery.api.service import handle_request
from footyquery.data.data_loader import load_matches
from footyquery.errors import MatchDataError, UnhandledComputationError
from footyquery.utils.logging_utils import get_logger

logger = get_logger(__name__)

app = FastAPI(
    title="FootyQuery API",
    version=__version__,
    description="Historical football match queries and matchup predictions",
)


class HealthResponse(BaseModel):
    status: str


class TeamsResponse(BaseModel):
    teams: List[str]


class MatchesResponse(BaseModel):
    total_matches: int
    page: int
    page_size: int
    matches: List[Dict[str, Any]]
    team_analysis: Optional[Dict[str, Any]] = None
    prediction: Optional[Dict[str, Any]] = None
    teams: List[str]


@app.get("/health", response_model=HealthResponse)
def health() -> Dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/matches", response_model=MatchesResponse)
def list_matches(request: Request) -> Dict[str, Any]:
    """
    Query the match dataset.

    Every query-string parameter is passed through the sanitizer; see
    `footyquery.query.params` for the recognized keys. Any other key filters
    on the same-named match field.

    Response:
        {
          "total_matches": ...,
          "page": ...,
          "page_size": ...,
          "matches": [ {...}, ... ],
          "team_analysis": {...} | null,
          "prediction": {...} | null,
          "teams": ["...", ...]
        }
    """
    try:
        return handle_request(dict(request.query_params))
    except (MatchDataError, UnhandledComputationError) as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.get("/teams", response_model=TeamsResponse)
def list_teams() -> Dict[str, List[str]]:
    """Return the dataset-wide team roster."""
    try:
        records = load_matches()
    except MatchDataError as exc:
        logger.error("Failed to load match dataset: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"teams": available_teams(records)}
