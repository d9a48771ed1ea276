"""Qiniu Statistics SDK - Python client for the Qiniu storage statistics API."""

from .auth import Credentials, Signer
from .base import AsyncBaseAPIClient, BaseAPIClient
from .endpoints import BaseURLs, Granularity, StatisticsEndpoints
from .exceptions import (
    APIStatusError,
    DecodeError,
    QiniuAPIError,
    SigningError,
    TransportError,
)
from .statistic import (
    AsyncStatisticsClient,
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
    StatisticsClient,
)
from .types import APIItem, APIItemsList, APIResult, DateLike

__all__ = [
    # Clients
    "BaseAPIClient",
    "AsyncBaseAPIClient",
    "StatisticsClient",
    "AsyncStatisticsClient",
    # Auth
    "Credentials",
    "Signer",
    # Endpoints
    "BaseURLs",
    "Granularity",
    "StatisticsEndpoints",
    # Exceptions
    "QiniuAPIError",
    "SigningError",
    "TransportError",
    "DecodeError",
    "APIStatusError",
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
    "SpaceResponse",
    "CountResponse",
    "SpaceLineResponse",
    "CountLineResponse",
    "SizeRecord",
    "HitsRecord",
    "BlobIORecord",
    # Types
    "APIItem",
    "APIItemsList",
    "APIResult",
    "DateLike",
]

__version__ = "0.1.0"
