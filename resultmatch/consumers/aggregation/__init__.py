"""Multi-source result aggregation."""

from resultmatch.consumers.aggregation.aggregator import (
    AggregationResult,
    ResultAggregator,
    SourceFailure,
    deduplicate,
)
from resultmatch.consumers.aggregation.window import filter_window

__all__ = [
    "AggregationResult",
    "ResultAggregator",
    "SourceFailure",
    "deduplicate",
    "filter_window",
]
