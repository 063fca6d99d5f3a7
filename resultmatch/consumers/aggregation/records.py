"""Coercion of loosely typed source records into RawResult.

Scrapers hand back whatever shape their source has. Everything is pushed
through RawResultRecord at the aggregator boundary so that the matching
code only ever sees RawResult.
"""

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from resultmatch.core.types import RawResult, ResultStatus
from resultmatch.utilities.result_status import parse_status
from resultmatch.utilities.tz import to_utc

logger = logging.getLogger(__name__)


class RawResultRecord(BaseModel):
    """Validated source record. Accepts snake_case or camelCase keys."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    source_id: str | None = Field(default=None, validation_alias=AliasChoices("source_id", "sourceId"))
    home_team_raw: str = Field(
        min_length=1,
        validation_alias=AliasChoices("home_team_raw", "homeTeamRaw", "home_team", "homeTeam"),
    )
    away_team_raw: str = Field(
        min_length=1,
        validation_alias=AliasChoices("away_team_raw", "awayTeamRaw", "away_team", "awayTeam"),
    )
    home_score: int = Field(ge=0, validation_alias=AliasChoices("home_score", "homeScore"))
    away_score: int = Field(ge=0, validation_alias=AliasChoices("away_score", "awayScore"))
    home_regulation_score: int | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("home_regulation_score", "homeRegulationScore"),
    )
    away_regulation_score: int | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("away_regulation_score", "awayRegulationScore"),
    )
    status: ResultStatus = ResultStatus.FINISHED
    kickoff_time: datetime = Field(validation_alias=AliasChoices("kickoff_time", "kickoffTime", "kickoff"))
    is_champions_league: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_champions_league", "isChampionsLeague"),
    )

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> ResultStatus:
        return parse_status(value)

    @field_validator("home_team_raw", "away_team_raw")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("team name is blank")
        return value

    @model_validator(mode="after")
    def _regulation_only_for_shootouts(self) -> "RawResultRecord":
        # A half-filled regulation score is noise, drop both halves
        if (self.home_regulation_score is None) != (self.away_regulation_score is None):
            self.home_regulation_score = None
            self.away_regulation_score = None
        return self

    def to_raw_result(self, default_source_id: str) -> RawResult:
        return RawResult(
            source_id=self.source_id or default_source_id,
            home_team_raw=self.home_team_raw,
            away_team_raw=self.away_team_raw,
            home_score=self.home_score,
            away_score=self.away_score,
            status=self.status,
            kickoff_time=to_utc(self.kickoff_time),
            is_champions_league=self.is_champions_league,
            home_regulation_score=self.home_regulation_score,
            away_regulation_score=self.away_regulation_score,
        )


def coerce_raw_result(record: RawResult | Mapping[str, Any], source_id: str) -> RawResult:
    """Turn a source record into a RawResult.

    Args:
        record: RawResult (passed through) or a mapping from a scraper
        source_id: Source to attribute the record to when it names none

    Raises:
        pydantic.ValidationError: If the mapping is not a usable result
        TypeError: If the record is neither a RawResult nor a mapping
    """
    if isinstance(record, RawResult):
        return record
    if not isinstance(record, Mapping):
        raise TypeError(f"unsupported record type {type(record).__name__}")
    return RawResultRecord.model_validate(dict(record)).to_raw_result(source_id)


def coerce_records(source_id: str, records: Sequence[Any]) -> tuple[list[RawResult], int]:
    """Coerce a source's records, dropping the malformed ones.

    Returns:
        (valid results, number of rejected records)
    """
    coerced: list[RawResult] = []
    rejected = 0
    for record in records:
        try:
            coerced.append(coerce_raw_result(record, source_id))
        except (ValidationError, TypeError) as e:
            rejected += 1
            logger.warning(
                "[AGGREGATE] Dropping malformed record from %s: %s",
                source_id,
                str(e).splitlines()[0],
            )
    return coerced, rejected
