"""Service layer."""

from resultmatch.services.result_matching import MatchingRun, ResultMatchingService

__all__ = ["MatchingRun", "ResultMatchingService"]
