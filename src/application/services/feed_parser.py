"""
Application service: raw spot-rate feed → Feed entity.

Wire keys (SpotListRate, CCY, UPDATETIME, ASKLISTRATE, BIDLISTRATE) are the
upstream bank feed's names and are confined to the payload models below.
The HTTP entry point validates request bodies against the same models.

Policy: the first malformed record rejects the whole feed with ParseError.
Timestamps must use the 24-hour clock.
"""

from datetime import datetime
from typing import Annotated, Any, Optional, Sequence

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    FiniteFloat,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from src.domain.entities.quote import DateBucket, Feed, QuoteRecord
from src.domain.errors import ParseError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

CurrencyCode = Annotated[str, StringConstraints(strip_whitespace=True, to_upper=True, min_length=1)]


def parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"UPDATETIME must be a string, got {value!r}")
    try:
        return datetime.strptime(value.strip(), TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise ValueError(f"UPDATETIME {value!r} does not match {TIMESTAMP_FORMAT!r}") from exc


class SpotRatePayload(BaseModel):
    """One quote as the bank publishes it; unknown keys are ignored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ccy: CurrencyCode = Field(alias="CCY")
    update_time: datetime = Field(alias="UPDATETIME")
    ask: FiniteFloat = Field(alias="ASKLISTRATE")
    bid: FiniteFloat = Field(alias="BIDLISTRATE")

    @field_validator("update_time", mode="before")
    @classmethod
    def _check_update_time(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    @field_validator("ask", "bid", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError(f"rate must be a number, got {value!r}")
        return value


class DateBucketPayload(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: Optional[str] = Field(default=None, validation_alias=AliasChoices("date", "DATE"))
    spot_list_rate: list[SpotRatePayload] = Field(alias="SpotListRate")


FEED_ADAPTER = TypeAdapter(list[DateBucketPayload])


def to_feed(buckets: Sequence[DateBucketPayload]) -> Feed:
    """Map validated payload models onto domain entities."""
    return Feed(
        buckets=tuple(
            DateBucket(
                date=bucket.date,
                spot_list_rates=tuple(
                    QuoteRecord(
                        currency_code=rate.ccy,
                        timestamp=rate.update_time,
                        ask_rate=rate.ask,
                        bid_rate=rate.bid,
                    )
                    for rate in bucket.spot_list_rate
                ),
            )
            for bucket in buckets
        )
    )


def _as_parse_error(exc: ValidationError) -> ParseError:
    # loc is (bucket, "SpotListRate", record, field) for a bad quote
    err = exc.errors()[0]
    loc = err["loc"]
    bucket_index = loc[0] if loc and isinstance(loc[0], int) else None
    record_index = loc[2] if len(loc) > 2 and isinstance(loc[2], int) else None
    field = ".".join(str(part) for part in loc if isinstance(part, str)) or "feed"
    return ParseError(
        f"{field}: {err['msg']} (got {err.get('input')!r})", bucket_index, record_index
    )


def parse_feed(raw_buckets: Any) -> Feed:
    """Parse the JSON-decoded feed (a list of date-buckets).

    Raises:
        ParseError: on the first malformed bucket or quote; the error carries
                    the bucket and record indexes.
    """
    try:
        buckets = FEED_ADAPTER.validate_python(raw_buckets)
    except ValidationError as exc:
        raise _as_parse_error(exc) from exc
    return to_feed(buckets)
