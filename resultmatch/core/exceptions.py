"""Errors raised inside the matching pipeline.

Neither is fatal: the aggregator and the engine catch them per unit
(per source, per question slot) and report them alongside the results.
"""


class SourceUnavailableError(Exception):
    """A result source could not be fetched or parsed."""

    def __init__(self, source_id: str, reason: str):
        self.source_id = source_id
        self.reason = reason
        super().__init__(f"{source_id}: {reason}")


class InvalidQuestionError(ValueError):
    """A question slot holds malformed form data."""

    def __init__(self, match_number: int, reason: str):
        self.match_number = match_number
        self.reason = reason
        super().__init__(f"question {match_number}: {reason}")
