"""Templated queries for Statistics API.

Each endpoint is described once: its path, the ordered query parameters and
the request attribute each one is read from, and the schema of the response.
"""

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any
from urllib.parse import quote

from qiniu_stats_sdk.endpoints import StatisticsEndpoints
from qiniu_stats_sdk.exceptions import DecodeError

from .models import (
    BlobIORecord,
    CountLineResponse,
    CountResponse,
    HitsRecord,
    SizeRecord,
    SpaceLineResponse,
    SpaceResponse,
    StatRecord,
    TimeSeries,
)

logger = logging.getLogger(__name__)


def format_value(value: Any) -> str:
    """Format a request attribute for the query string."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (date, datetime)):
        # date.strftime renders the time fields as zeros
        return value.strftime("%Y%m%d%H%M%S")
    return str(value)


@dataclass(frozen=True)
class Param:
    """A query parameter.

    Attributes:
        name: Parameter name as sent, e.g. "g" or "$bucket".
        attr: Request attribute holding the value.
        optional: Omit the parameter when the attribute is None, False or "".
    """

    name: str
    attr: str
    optional: bool = False


@dataclass(frozen=True)
class Query:
    """One statistics endpoint.

    Attributes:
        path: Endpoint path without query string.
        params: Query parameters in wire order.
        schema: Response type; StatRecord subclasses mean the body is a
            JSON array of records.
    """

    path: str
    params: tuple[Param, ...]
    schema: type[TimeSeries] | type[StatRecord]

    @property
    def is_records(self) -> bool:
        return issubclass(self.schema, StatRecord)

    def build_path(self, request: Any, escape: bool = False) -> str:
        """Interpolate request attributes into the path template.

        Values are used verbatim unless escape is set, in which case each
        value is percent-encoded.
        """
        parts = []
        for param in self.params:
            raw = getattr(request, param.attr)
            if param.optional and (raw is None or raw is False or raw == ""):
                continue
            value = format_value(raw)
            if escape:
                value = quote(value, safe="")
            parts.append(f"{param.name}={value}")
        return f"{self.path}?{'&'.join(parts)}"

    def decode_item(self, data: Any) -> Any:
        return self.schema.from_json(data)

    def decode_data(self, data: Any) -> Any:
        if not self.is_records:
            return self.schema.from_json(data)
        if data is None:
            return []
        if not isinstance(data, list):
            raise DecodeError(
                f"Expected JSON array for {self.path}, got {type(data).__name__}"
            )
        return [self.schema.from_json(item) for item in data]

    def decode(self, body: bytes) -> Any:
        """Parse a response body into this endpoint's schema.

        Raises:
            DecodeError: If the body is not JSON or does not match the schema.
        """
        try:
            data = json.loads(body)
        except ValueError as e:
            logger.warning("Malformed JSON from %s: %s", self.path, e)
            raise DecodeError(f"Invalid JSON: {e}", body=body) from e
        try:
            return self.decode_data(data)
        except DecodeError as e:
            logger.warning("Unexpected response shape from %s: %s", self.path, e)
            e.body = body
            raise


_BUCKET_RANGE = (
    Param("bucket", "bucket"),
    Param("begin", "begin"),
    Param("end", "end"),
    Param("g", "granularity"),
)

_BUCKET_REGION_RANGE = (
    Param("bucket", "bucket"),
    Param("region", "region"),
    Param("begin", "begin"),
    Param("end", "end"),
    Param("g", "granularity"),
)

_SELECT_RANGE = (
    Param("begin", "begin"),
    Param("end", "end"),
    Param("g", "granularity"),
    Param("select", "select"),
)

SPACE = Query(
    StatisticsEndpoints.SPACE,
    _BUCKET_RANGE + (Param("region", "region", optional=True),),
    SpaceResponse,
)

COUNT = Query(
    StatisticsEndpoints.COUNT,
    _BUCKET_RANGE + (Param("region", "region", optional=True),),
    CountResponse,
)

SPACE_LINE = Query(
    StatisticsEndpoints.SPACE_LINE,
    _BUCKET_REGION_RANGE
    + (
        Param("no_predel", "no_predel", optional=True),
        Param("only_predel", "only_predel", optional=True),
    ),
    SpaceLineResponse,
)

COUNT_LINE = Query(
    StatisticsEndpoints.COUNT_LINE,
    _BUCKET_REGION_RANGE,
    CountLineResponse,
)

BLOB_TRANSFER = Query(
    StatisticsEndpoints.BLOB_TRANSFER,
    _SELECT_RANGE
    + (
        Param("$is_oversea", "is_oversea"),
        Param("$taskid", "task_id"),
    ),
    SizeRecord,
)

RS_CHTYPE = Query(
    StatisticsEndpoints.RS_CHTYPE,
    _SELECT_RANGE
    + (
        Param("$bucket", "bucket"),
        Param("$region", "region"),
    ),
    HitsRecord,
)

BLOB_IO = Query(
    StatisticsEndpoints.BLOB_IO,
    _SELECT_RANGE
    + (
        Param("$bucket", "bucket"),
        Param("$domain", "domain"),
        Param("$region", "region"),
        Param("$src", "src"),
        Param("$ftype", "ftype", optional=True),
    ),
    BlobIORecord,
)

RS_PUT = Query(
    StatisticsEndpoints.RS_PUT,
    _SELECT_RANGE
    + (
        Param("$bucket", "bucket"),
        Param("$region", "region"),
        Param("$ftype", "ftype", optional=True),
    ),
    HitsRecord,
)
