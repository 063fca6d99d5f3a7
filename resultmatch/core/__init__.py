"""Core types and interfaces."""

from resultmatch.core.exceptions import InvalidQuestionError, SourceUnavailableError
from resultmatch.core.interfaces import ResultFetcher
from resultmatch.core.types import (
    MATCHABLE_STATUSES,
    MatchCandidate,
    MatchReport,
    NearMiss,
    NearMissReason,
    Outcome,
    Question,
    RawResult,
    ResultStatus,
    SlotDiagnostic,
)

__all__ = [
    "InvalidQuestionError",
    "MATCHABLE_STATUSES",
    "MatchCandidate",
    "MatchReport",
    "NearMiss",
    "NearMissReason",
    "Outcome",
    "Question",
    "RawResult",
    "ResultFetcher",
    "ResultStatus",
    "SlotDiagnostic",
    "SourceUnavailableError",
]
