"""Result sources.

Site-specific scrapers live outside this package; these fetchers cover
the generic cases (JSON feeds, in-memory/imported lists).
"""

from resultmatch.providers.json_feed import JsonFeedClient, JsonFeedFetcher
from resultmatch.providers.static import StaticFetcher

__all__ = ["JsonFeedClient", "JsonFeedFetcher", "StaticFetcher"]
