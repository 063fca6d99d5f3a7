"""Consumers: aggregation of sources and matching against prediction forms."""
