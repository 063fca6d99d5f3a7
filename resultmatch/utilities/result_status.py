"""Result status utilities.

Single source of truth for mapping provider status strings to ResultStatus.
"""

from resultmatch.core.types import ResultStatus

# Provider spellings, lowercased
_STATUS_ALIASES: dict[str, ResultStatus] = {
    # Finished in regulation
    "finished": ResultStatus.FINISHED,
    "final": ResultStatus.FINISHED,
    "ft": ResultStatus.FINISHED,
    "full time": ResultStatus.FINISHED,
    "fulltime": ResultStatus.FINISHED,
    "post": ResultStatus.FINISHED,
    "completed": ResultStatus.FINISHED,
    "complete": ResultStatus.FINISHED,
    "ended": ResultStatus.FINISHED,
    # Extra time
    "aet": ResultStatus.AET,
    "after extra time": ResultStatus.AET,
    "final ot": ResultStatus.AET,
    "ot": ResultStatus.AET,
    # Shootout
    "shootout": ResultStatus.SHOOTOUT,
    "pen": ResultStatus.SHOOTOUT,
    "pens": ResultStatus.SHOOTOUT,
    "penalties": ResultStatus.SHOOTOUT,
    "ap": ResultStatus.SHOOTOUT,
    "final so": ResultStatus.SHOOTOUT,
    "so": ResultStatus.SHOOTOUT,
    # Not played yet
    "scheduled": ResultStatus.SCHEDULED,
    "pre": ResultStatus.SCHEDULED,
    "ns": ResultStatus.SCHEDULED,
    "not started": ResultStatus.SCHEDULED,
    "postponed": ResultStatus.SCHEDULED,
    "in progress": ResultStatus.SCHEDULED,
    "live": ResultStatus.SCHEDULED,
}


def parse_status(value: str | ResultStatus | None) -> ResultStatus:
    """Map a provider status string to a ResultStatus.

    Unknown or missing values map to SCHEDULED, so a result is never
    matched unless its source says it is over.

    Examples:
        >>> parse_status("FT")
        <ResultStatus.FINISHED: 'finished'>
        >>> parse_status("Final SO")
        <ResultStatus.SHOOTOUT: 'shootout'>
    """
    if isinstance(value, ResultStatus):
        return value
    if not value:
        return ResultStatus.SCHEDULED

    key = " ".join(value.lower().replace(".", "").replace("_", " ").split())
    return _STATUS_ALIASES.get(key, ResultStatus.SCHEDULED)
