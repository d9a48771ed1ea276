"""Statistics API client and types."""

from .client import AsyncStatisticsClient, StatisticsClient
from .models import (
    BlobIORecord,
    BlobIORequest,
    BlobTransferRequest,
    CountLineRequest,
    CountLineResponse,
    CountRequest,
    CountResponse,
    HitsRecord,
    RsPutRequest,
    RSChTypeRequest,
    SizeRecord,
    SpaceLineRequest,
    SpaceLineResponse,
    SpaceRequest,
    SpaceResponse,
    StatRecord,
    TimeSeries,
)

__all__ = [
    "StatisticsClient",
    "AsyncStatisticsClient",
    # Requests
    "SpaceRequest",
    "CountRequest",
    "SpaceLineRequest",
    "CountLineRequest",
    "BlobTransferRequest",
    "RSChTypeRequest",
    "BlobIORequest",
    "RsPutRequest",
    # Responses
    "TimeSeries",
    "SpaceResponse",
    "CountResponse",
    "SpaceLineResponse",
    "CountLineResponse",
    "StatRecord",
    "SizeRecord",
    "HitsRecord",
    "BlobIORecord",
]
