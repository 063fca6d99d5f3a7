"""JSON feed result fetcher.

Maps one JSON feed onto RawResult-shaped records. Every feed names its
fields differently, so the mapping is configured per source rather than
coded per source.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from resultmatch.core import ResultFetcher, SourceUnavailableError
from resultmatch.providers.json_feed.client import JsonFeedClient

logger = logging.getLogger(__name__)

# RawResult field -> dotted path in a feed item
DEFAULT_FIELD_MAP: dict[str, str] = {
    "home_team_raw": "home_team",
    "away_team_raw": "away_team",
    "home_score": "home_score",
    "away_score": "away_score",
    "home_regulation_score": "home_regulation_score",
    "away_regulation_score": "away_regulation_score",
    "status": "status",
    "kickoff_time": "kickoff_time",
    "is_champions_league": "is_champions_league",
}


def get_path(item: Any, path: str) -> Any:
    """Read a dotted path ("teams.home.name") from nested dicts/lists."""
    current = item
    for part in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part)
        elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            return None
        if current is None:
            return None
    return current


class JsonFeedFetcher(ResultFetcher):
    """Fetches one JSON feed and remaps its items.

    Items are returned as plain dicts keyed by RawResult field names;
    validation happens in the aggregator like for every other source.
    """

    def __init__(
        self,
        source_id: str,
        url: str,
        client: JsonFeedClient | None = None,
        results_path: str = "",
        field_map: Mapping[str, str] | None = None,
        params: dict | None = None,
        is_champions_league: bool = False,
    ):
        """Initialize fetcher.

        Args:
            source_id: Identifier reported on every result of this feed
            url: Feed URL
            client: Shared HTTP client (one is created if omitted)
            results_path: Dotted path to the list of items ("" = body is the list)
            field_map: Overrides for DEFAULT_FIELD_MAP
            params: Query parameters
            is_champions_league: Flag for items that do not carry their own
        """
        self._source_id = source_id
        self._url = url
        self._client = client or JsonFeedClient()
        self._results_path = results_path
        self._field_map = {**DEFAULT_FIELD_MAP, **(field_map or {})}
        self._params = params
        self._is_champions_league = is_champions_league

    @property
    def source_id(self) -> str:
        return self._source_id

    def fetch(self) -> list[dict[str, Any]]:
        data = self._client.get_json(self._url, params=self._params)
        if data is None:
            raise SourceUnavailableError(self._source_id, f"no data from {self._url}")

        items = get_path(data, self._results_path) if self._results_path else data
        if not isinstance(items, list):
            raise SourceUnavailableError(
                self._source_id, f"expected a list at '{self._results_path or '<root>'}'"
            )

        records = []
        for item in items:
            if not isinstance(item, Mapping):
                logger.warning("[JSONFEED] %s: skipping non-object item %r", self._source_id, item)
                continue
            records.append(self._map_item(item))

        logger.debug("[JSONFEED] %s: %d items from %s", self._source_id, len(records), self._url)
        return records

    def _map_item(self, item: Mapping[str, Any]) -> dict[str, Any]:
        record: dict[str, Any] = {"source_id": self._source_id}
        for field_name, path in self._field_map.items():
            value = get_path(item, path)
            if value is not None:
                record[field_name] = value
        record.setdefault("is_champions_league", self._is_champions_league)
        return record


def build_fetchers(sources: Sequence[Mapping[str, Any]], client: JsonFeedClient | None = None) -> list[JsonFeedFetcher]:
    """Build fetchers from config entries ({"source_id", "url", ...}).

    All fetchers share one HTTP client.
    """
    client = client or JsonFeedClient()
    return [
        JsonFeedFetcher(
            source_id=source["source_id"],
            url=source["url"],
            client=client,
            results_path=source.get("results_path", ""),
            field_map=source.get("field_map"),
            params=source.get("params"),
            is_champions_league=source.get("is_champions_league", False),
        )
        for source in sources
    ]
