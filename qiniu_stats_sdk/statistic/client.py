"""Statistics API client."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from qiniu_stats_sdk.base import AsyncBaseAPIClient, BaseAPIClient

from . import queries
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
)
from .queries import Query


@dataclass
class StatisticsClient(BaseAPIClient):
    """Client for Qiniu Statistics API.

    Usage:
        creds = Credentials("access-key", "secret-key")
        with StatisticsClient(credentials=creds) as client:
            space = client.get_space(
                SpaceRequest(
                    bucket="photos",
                    begin="20240101000000",
                    end="20240131000000",
                    granularity=Granularity.DAY,
                )
            )

    Attributes:
        escape_params: Percent-encode query values. Off by default, values
            are sent exactly as given.
    """

    escape_params: bool = False

    def _query(self, query: Query, request: Any) -> Any:
        body = self.signed_post(query.build_path(request, escape=self.escape_params))
        return query.decode(body)

    def _stream(self, query: Query, request: Any) -> Iterator[Any]:
        path = query.build_path(request, escape=self.escape_params)
        for item in self.stream_post_items(path):
            yield query.decode_item(item)

    def get_space(self, request: SpaceRequest) -> SpaceResponse:
        """Get standard storage usage in bytes."""
        return self._query(queries.SPACE, request)

    def get_count(self, request: CountRequest) -> CountResponse:
        """Get standard storage file count."""
        return self._query(queries.COUNT, request)

    def get_space_line(self, request: SpaceLineRequest) -> SpaceLineResponse:
        """Get infrequent access storage usage in bytes."""
        return self._query(queries.SPACE_LINE, request)

    def get_count_line(self, request: CountLineRequest) -> CountLineResponse:
        """Get infrequent access storage file count."""
        return self._query(queries.COUNT_LINE, request)

    def get_blob_transfer(self, request: BlobTransferRequest) -> list[SizeRecord]:
        """Get cross-region replication traffic."""
        return self._query(queries.BLOB_TRANSFER, request)

    def get_rs_chtype(self, request: RSChTypeRequest) -> list[HitsRecord]:
        """Get storage class conversion request counts."""
        return self._query(queries.RS_CHTYPE, request)

    def get_blob_io(self, request: BlobIORequest) -> list[BlobIORecord]:
        """Get outbound traffic and GET request counts."""
        return self._query(queries.BLOB_IO, request)

    def get_rs_put(self, request: RsPutRequest) -> list[HitsRecord]:
        """Get PUT request counts."""
        return self._query(queries.RS_PUT, request)

    def stream_blob_transfer(self, request: BlobTransferRequest) -> Iterator[SizeRecord]:
        """Stream cross-region replication traffic records one by one.

        Memory-efficient streaming version of get_blob_transfer().
        """
        return self._stream(queries.BLOB_TRANSFER, request)

    def stream_rs_chtype(self, request: RSChTypeRequest) -> Iterator[HitsRecord]:
        return self._stream(queries.RS_CHTYPE, request)

    def stream_blob_io(self, request: BlobIORequest) -> Iterator[BlobIORecord]:
        """Stream outbound traffic records one by one.

        Memory-efficient streaming version of get_blob_io(). Useful for
        long ranges at 5min granularity.
        """
        return self._stream(queries.BLOB_IO, request)

    def stream_rs_put(self, request: RsPutRequest) -> Iterator[HitsRecord]:
        return self._stream(queries.RS_PUT, request)


@dataclass
class AsyncStatisticsClient(AsyncBaseAPIClient):
    """Async client for Qiniu Statistics API.

    Usage:
        async with AsyncStatisticsClient(credentials=creds) as client:
            io = await client.get_blob_io(
                BlobIORequest(begin=..., end=..., granularity="hour", bucket="photos")
            )
    """

    escape_params: bool = False

    async def _query(self, query: Query, request: Any) -> Any:
        body = await self.signed_post(
            query.build_path(request, escape=self.escape_params)
        )
        return query.decode(body)

    async def get_space(self, request: SpaceRequest) -> SpaceResponse:
        return await self._query(queries.SPACE, request)

    async def get_count(self, request: CountRequest) -> CountResponse:
        return await self._query(queries.COUNT, request)

    async def get_space_line(self, request: SpaceLineRequest) -> SpaceLineResponse:
        return await self._query(queries.SPACE_LINE, request)

    async def get_count_line(self, request: CountLineRequest) -> CountLineResponse:
        return await self._query(queries.COUNT_LINE, request)

    async def get_blob_transfer(
        self, request: BlobTransferRequest
    ) -> list[SizeRecord]:
        return await self._query(queries.BLOB_TRANSFER, request)

    async def get_rs_chtype(self, request: RSChTypeRequest) -> list[HitsRecord]:
        return await self._query(queries.RS_CHTYPE, request)

    async def get_blob_io(self, request: BlobIORequest) -> list[BlobIORecord]:
        return await self._query(queries.BLOB_IO, request)

    async def get_rs_put(self, request: RsPutRequest) -> list[HitsRecord]:
        return await self._query(queries.RS_PUT, request)
