"""Base URLs and endpoint constants for Qiniu Statistics API.

All statistics endpoints live on a single API host.
"""

from enum import StrEnum


class BaseURLs(StrEnum):
    """Base URLs for Qiniu API services.

    Usage:
        client = StatisticsClient(credentials=creds, base_url=BaseURLs.API)

    Each URL can be used directly as a string since StrEnum inherits from str.
    """

    API = "https://api.qiniu.com"


class Granularity(StrEnum):
    """Time-bucket size for a statistics series."""

    FIVE_MINUTES = "5min"
    HOUR = "hour"
    DAY = "day"


class Headers:
    """Header values sent with every statistics request."""

    AUTH_SCHEME = "QBox"
    CONTENT_TYPE_JSON = "application/json"
    CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"


class StatisticsEndpoints:
    """Endpoint paths for Statistics API."""

    SPACE = "/v6/space"
    COUNT = "/v6/count"
    SPACE_LINE = "/v6/space_line"
    COUNT_LINE = "/v6/count_line"
    BLOB_TRANSFER = "/v6/blob_transfer"
    RS_CHTYPE = "/v6/rs_chtype"
    BLOB_IO = "/v6/blob_io"
    RS_PUT = "/v6/rs_put"
