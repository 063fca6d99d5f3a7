"""HTTP API for the confirmation UI."""

from resultmatch.api.app import create_app

__all__ = ["create_app"]
