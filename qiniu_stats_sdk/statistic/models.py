"""Request and response types for Statistics API.

Requests are plain value objects whose attributes are interpolated into the
endpoint's query string. Responses are decoded from the JSON body and never
mutated afterwards.
"""

from dataclasses import dataclass, fields
from typing import Any, Self

from qiniu_stats_sdk.endpoints import Granularity
from qiniu_stats_sdk.exceptions import DecodeError
from qiniu_stats_sdk.types import DateLike


def _expect_object(data: Any, what: str) -> dict[str, Any]:
    # null decodes to the zero value, like a missing key
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DecodeError(f"Expected JSON object for {what}, got {type(data).__name__}")
    return data


def _uint(value: Any, key: str) -> int:
    if value is None:
        return 0
    # bool is an int subclass but never a valid counter
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DecodeError(f"Expected unsigned integer for '{key}', got {value!r}")
    return value


def _uint_tuple(data: dict[str, Any], key: str) -> tuple[int, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise DecodeError(f"Expected array for '{key}', got {type(value).__name__}")
    return tuple(_uint(item, key) for item in value)


# Requests


@dataclass(frozen=True, kw_only=True)
class RangeRequest:
    """Fields shared by every statistics query.

    Attributes:
        begin: Start of the range, formatted as 20060102150405.
        end: End of the range, formatted as 20060102150405.
        granularity: Bucket size - 5min, hour or day.
    """

    begin: DateLike
    end: DateLike
    granularity: Granularity | str


@dataclass(frozen=True, kw_only=True)
class BucketRangeRequest(RangeRequest):
    bucket: str
    region: str = ""


class SpaceRequest(BucketRangeRequest):
    """Standard storage usage query. Region is sent only when set."""


class CountRequest(BucketRangeRequest):
    """Standard storage file count query. Region is sent only when set."""


@dataclass(frozen=True, kw_only=True)
class SpaceLineRequest(BucketRangeRequest):
    """Infrequent access storage usage query.

    Attributes:
        no_predel: Exclude storage billed for early deletion.
        only_predel: Report only storage billed for early deletion.
    """

    no_predel: bool = False
    only_predel: bool = False


class CountLineRequest(BucketRangeRequest):
    """Infrequent access storage file count query."""


@dataclass(frozen=True, kw_only=True)
class BlobTransferRequest(RangeRequest):
    """Cross-region replication traffic query.

    Attributes:
        select: "size" for transferred bytes.
        is_oversea: 0 for domestic, 1 for overseas replication.
        task_id: Replication task id.
    """

    select: str = "size"
    is_oversea: int | str = ""
    task_id: str = ""


@dataclass(frozen=True, kw_only=True)
class RSChTypeRequest(RangeRequest):
    """Storage class conversion request count query."""

    select: str = "hits"
    bucket: str = ""
    region: str = ""


@dataclass(frozen=True, kw_only=True)
class BlobIORequest(RangeRequest):
    """Outbound traffic and GET request count query.

    Attributes:
        select: "flow" for outbound bytes, "hits" for GET requests.
        bucket: Bucket name.
        ftype: Storage class - 0 standard, 1 infrequent access.
        domain: Bucket access domain.
        region: Storage region.
        src: Request source - origin, inner, ex or atlab.
    """

    select: str = "flow"
    bucket: str = ""
    ftype: int | str = ""
    domain: str = ""
    region: str = ""
    src: str = ""


@dataclass(frozen=True, kw_only=True)
class RsPutRequest(RangeRequest):
    """PUT request count query."""

    select: str = "hits"
    bucket: str = ""
    ftype: int | str = ""
    region: str = ""


# Responses


@dataclass(frozen=True)
class TimeSeries:
    """Paired timestamps (unix seconds) and values."""

    times: tuple[int, ...] = ()
    datas: tuple[int, ...] = ()

    def points(self) -> list[tuple[int, int]]:
        return list(zip(self.times, self.datas))

    @classmethod
    def from_json(cls, data: Any) -> Self:
        obj = _expect_object(data, cls.__name__)
        return cls(times=_uint_tuple(obj, "times"), datas=_uint_tuple(obj, "datas"))


class SpaceResponse(TimeSeries):
    """Standard storage usage in bytes."""


class CountResponse(TimeSeries):
    """Standard storage file count."""


class CountLineResponse(TimeSeries):
    """Infrequent access storage file count."""


@dataclass(frozen=True)
class SpaceLineResponse(TimeSeries):
    """Infrequent access storage usage in bytes, with the API status fields."""

    code: int = 0
    error: str = ""

    @classmethod
    def from_json(cls, data: Any) -> Self:
        obj = _expect_object(data, cls.__name__)
        code = obj.get("code")
        error = obj.get("error")
        if code is None:
            code = 0
        if error is None:
            error = ""
        if isinstance(code, bool) or not isinstance(code, int):
            raise DecodeError(f"Expected integer for 'code', got {code!r}")
        if not isinstance(error, str):
            raise DecodeError(f"Expected string for 'error', got {error!r}")
        return cls(
            times=_uint_tuple(obj, "times"),
            datas=_uint_tuple(obj, "datas"),
            code=code,
            error=error,
        )


@dataclass(frozen=True)
class StatRecord:
    """A timestamped value record: {"time": ..., "values": {...}}.

    Subclasses declare the value fields they read; missing values are 0.
    """

    time: str = ""

    @classmethod
    def from_json(cls, data: Any) -> Self:
        obj = _expect_object(data, cls.__name__)
        time = obj.get("time")
        if time is None:
            time = ""
        if not isinstance(time, str):
            raise DecodeError(f"Expected string for 'time', got {time!r}")
        values = _expect_object(obj.get("values"), "values")
        kwargs = {
            f.name: _uint(values.get(f.name, 0), f.name)
            for f in fields(cls)
            if f.name != "time"
        }
        return cls(time=time, **kwargs)


@dataclass(frozen=True)
class SizeRecord(StatRecord):
    size: int = 0


@dataclass(frozen=True)
class HitsRecord(StatRecord):
    hits: int = 0


@dataclass(frozen=True)
class BlobIORecord(StatRecord):
    hits: int = 0
    flow: int = 0
