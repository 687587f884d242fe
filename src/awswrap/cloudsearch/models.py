"""Pydantic models for CloudSearch domains and search results."""

from datetime import timedelta
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class CloudSearchRegion(StrEnum):
    US_EAST_1 = "us-east-1"
    US_WEST_1 = "us-west-1"
    US_WEST_2 = "us-west-2"
    EU_WEST_1 = "eu-west-1"
    AP_SOUTHEAST_1 = "ap-southeast-1"
    AP_NORTHEAST_1 = "ap-northeast-1"
    SA_EAST_1 = "sa-east-1"


class Domain(BaseModel):
    """A search domain, addressed by its name and generated id."""

    model_config = ConfigDict(frozen=True)

    name: StrictStr = Field(..., min_length=1)
    id: StrictStr = Field(..., min_length=1)


class CloudSearchMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    request_id: StrictStr = Field("", description="Value of the `rid` info field")
    time: timedelta = Field(timedelta(0), description="Total processing time")
    cpu_time: timedelta = Field(timedelta(0), description="CPU time spent on the query")

    @classmethod
    def from_info(cls, info: dict[str, Any]) -> "CloudSearchMetadata":
        return cls(
            request_id=str(info.get("rid", "")),
            time=timedelta(milliseconds=info.get("time-ms", 0)),
            cpu_time=timedelta(milliseconds=info.get("cpu-time-ms", 0)),
        )


class Facet(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: StrictStr
    constraints: list[tuple[str, int]] = Field(default_factory=list)
    min: int | None = None
    max: int | None = None


class Hit(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: StrictStr
    data: dict[str, list[Any]] = Field(default_factory=dict)


class SearchResult(BaseModel):
    """Parsed body of a successful search response."""

    metadata: CloudSearchMetadata
    found: StrictInt = 0
    start: StrictInt = 0
    hits: list[Hit] = Field(default_factory=list)
    facets: list[Facet] = Field(default_factory=list)
    rank: StrictStr | None = None
    match_expr: StrictStr | None = None
