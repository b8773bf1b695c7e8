"""
CSV ingestion for FootyQuery.

Usage (from project root, with the virtualenv activated):

    python -m footyquery.data.csv_import path/to/matches.csv [--append]

This will:
- Load the CSV (one match per row) and validate every row.
- Skip invalid rows, reporting each problem with its 1-based row number.
- Write the valid rows to the JSON match dataset (or append to it).

Expected columns: home_team, away_team, score_home, score_away,
score_home_ht, score_away_ht, date.
"""

from __future__ import annotations

import argparse
import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from footyquery.config import CSV_REQUIRED_COLUMNS
from footyquery.data.data_loader import load_matches
from footyquery.data.schema import parse_date
from footyquery.errors import CsvValidationError
from footyquery.utils.logging_utils import get_logger
from footyquery.utils.paths import get_matches_path

logger = get_logger(__name__)

# CSV column -> key under the record's "score" mapping
SCORE_COLUMNS: Dict[str, str] = {
    "score_home": "home",
    "score_away": "away",
    "score_home_ht": "home_ht",
    "score_away_ht": "away_ht",
}

_GOALS_RE = re.compile(r"^\s*\d+\s*$")


@dataclass
class RowError:
    """A single validation problem in an uploaded CSV."""

    row: int
    field: str
    value: str
    error: str


@dataclass
class ImportResult:
    """Outcome of an import run."""

    processed: int
    errors: List[RowError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.processed > 0


def read_matches_csv(path: Path | str) -> pd.DataFrame:
    """
    Read an uploaded CSV with every cell as a string.

    Raises
    ------
    CsvValidationError
        If the file cannot be read or lacks required columns entirely.
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise CsvValidationError(f"CSV file not found: {csv_path}")

    try:
        df = pd.read_csv(
            csv_path,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise CsvValidationError(f"Error parsing CSV {csv_path}: {exc}") from exc

    df.columns = [str(c).strip() for c in df.columns]
    missing = [col for col in CSV_REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise CsvValidationError(f"Missing required CSV columns: {missing}")

    return df


def validate_csv_row(row: Dict[str, Any], row_number: int) -> List[RowError]:
    """
    Check one CSV row.

    Checks:
    - All required fields are non-empty.
    - Score columns are non-negative integers.
    - Half-time scores do not exceed full-time scores.
    - The date parses.
    """
    errors: List[RowError] = []

    for col in CSV_REQUIRED_COLUMNS:
        value = str(row.get(col, "") or "")
        if not value.strip():
            errors.append(RowError(row_number, col, value, f"{col} is required"))

    for col in SCORE_COLUMNS:
        value = str(row.get(col, "") or "")
        if value.strip() and not _GOALS_RE.match(value):
            errors.append(
                RowError(row_number, col, value, f"{col} must be a valid number")
            )

    for half, full in (("score_home_ht", "score_home"), ("score_away_ht", "score_away")):
        ht, ft = str(row.get(half, "")), str(row.get(full, ""))
        if _GOALS_RE.match(ht) and _GOALS_RE.match(ft) and int(ht) > int(ft):
            errors.append(
                RowError(row_number, half, ht, f"{half} cannot exceed {full}")
            )

    date_value = str(row.get("date", "") or "")
    if date_value.strip() and parse_date(date_value) is None:
        errors.append(
            RowError(row_number, "date", date_value, "Date must be in YYYY-MM-DD format")
        )

    return errors


def validate_csv_rows(df: pd.DataFrame) -> List[RowError]:
    """Validate every row of an uploaded CSV (row numbers are 1-based)."""
    errors: List[RowError] = []
    for index, row in enumerate(df.to_dict(orient="records"), start=1):
        errors.extend(validate_csv_row(row, index))
    return errors


def csv_row_to_match(row: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a validated CSV row into a dataset match entry."""
    return {
        "home_team": str(row["home_team"]).strip(),
        "away_team": str(row["away_team"]).strip(),
        "date": str(row["date"]).strip(),
        "score": {key: int(row[col]) for col, key in SCORE_COLUMNS.items()},
    }


def import_csv(
    path: Path | str,
    output: Optional[Path | str] = None,
    append: bool = False,
) -> ImportResult:
    """
    Import the valid rows of a CSV into the JSON match dataset.

    Parameters
    ----------
    path : pathlib.Path | str
        CSV file to import.
    output : pathlib.Path | str | None
        Dataset file to write. If None, uses the configured dataset path.
    append : bool
        Keep the matches already in `output` and add the new ones after them.

    Returns
    -------
    ImportResult
        Number of matches written and the row errors that were skipped.
    """
    df = read_matches_csv(path)
    errors = validate_csv_rows(df)
    bad_rows = {error.row for error in errors}

    new_matches = [
        csv_row_to_match(row)
        for index, row in enumerate(df.to_dict(orient="records"), start=1)
        if index not in bad_rows
    ]

    if errors:
        logger.warning(
            "Found %d validation errors in %d rows of %s.",
            len(errors),
            len(bad_rows),
            path,
        )
    if not new_matches:
        logger.error("No valid data to import from %s", path)
        return ImportResult(processed=0, errors=errors)

    out_path = Path(output) if output is not None else get_matches_path()
    existing: List[Dict[str, Any]] = []
    if append and out_path.exists():
        existing = [record.to_dict() for record in load_matches(out_path)]

    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as fh:
        json.dump({"matches": existing + new_matches}, fh, indent=4, ensure_ascii=False)

    logger.info(
        "Imported %d matches into %s (%d already present).",
        len(new_matches),
        out_path,
        len(existing),
    )
    return ImportResult(processed=len(new_matches), errors=errors)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Import a CSV of matches into the FootyQuery dataset.")
    parser.add_argument("csv_path", type=Path, help="CSV file to import.")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Dataset file to write. "
        "If not provided, uses FOOTYQUERY_DATA_FILE or the default from config.py.",
    )
    parser.add_argument(
        "--append",
        action="store_true",
        help="Append to the existing dataset instead of replacing it.",
    )
    args = parser.parse_args()

    try:
        result = import_csv(args.csv_path, output=args.output, append=args.append)
    except CsvValidationError as exc:
        parser.exit(status=1, message=f"{exc}\n")

    for error in result.errors:
        print(f"row {error.row}: {error.field}={error.value!r}: {error.error}")
    print(f"Imported {result.processed} matches.")


if __name__ == "__main__":
    main()
