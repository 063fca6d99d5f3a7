"""Generic JSON results feed."""

from resultmatch.providers.json_feed.client import JsonFeedClient
from resultmatch.providers.json_feed.provider import JsonFeedFetcher

__all__ = ["JsonFeedClient", "JsonFeedFetcher"]
