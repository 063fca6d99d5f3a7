"""Interfaces for result sources."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from resultmatch.core.types import RawResult


class ResultFetcher(ABC):
    """A single result source (league feed, scraper, file import).

    Implementations may return RawResult objects directly or loosely
    typed mappings; the aggregator coerces mappings at its boundary.
    Any exception raised from fetch() marks the whole source as failed
    for that run.

    fetch() must bound its own I/O (JsonFeedClient passes a timeout to
    httpx). The aggregator stops waiting at its deadline but cannot kill
    the worker thread, and the interpreter joins such threads at exit.
    """

    @property
    @abstractmethod
    def source_id(self) -> str:
        """Stable identifier of this source."""

    @abstractmethod
    def fetch(self) -> Sequence[RawResult | Mapping[str, Any]]:
        """Fetch the latest results from this source."""
