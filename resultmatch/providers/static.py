"""In-memory result source.

Wraps records that were obtained some other way (file import, a scraper
run elsewhere, tests) so they go through the same aggregation path.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from resultmatch.core import RawResult, ResultFetcher


class StaticFetcher(ResultFetcher):
    """Returns a fixed list of records."""

    def __init__(self, source_id: str, records: Sequence[RawResult | Mapping[str, Any]]):
        self._source_id = source_id
        self._records = list(records)

    @property
    def source_id(self) -> str:
        return self._source_id

    def fetch(self) -> list[RawResult | Mapping[str, Any]]:
        return list(self._records)
