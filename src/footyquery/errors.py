"""
Exception hierarchy for FootyQuery.

Dataset problems abort a request before any filtering starts; anything else
that escapes the query pipeline is wrapped in UnhandledComputationError at
the request boundary.
"""


class FootyQueryError(Exception):
    """Base class for all FootyQuery errors."""


class MatchDataError(FootyQueryError):
    """The match dataset could not be obtained."""


class DataUnavailable(MatchDataError):
    """The dataset cannot be located or read."""


class DataCorrupt(MatchDataError):
    """The dataset is not well-formed structured data."""


class UnhandledComputationError(FootyQueryError):
    """Unexpected failure while filtering, aggregating or predicting."""


class CsvValidationError(FootyQueryError):
    """An uploaded CSV file cannot be imported at all."""
