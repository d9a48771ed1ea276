"""Base clients and the signed request helper for Qiniu Statistics SDK."""

import itertools
import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Self

import httpx
import ijson  # type: ignore[import-not-found]
import requests
import urllib3

from .auth import Signer
from .endpoints import BaseURLs, Headers
from .exceptions import APIStatusError, DecodeError, TransportError
from .types import APIItem, APIResult

logger = logging.getLogger(__name__)


def _safe_json(body: bytes) -> APIResult:
    """Safely parse an error body, return empty dict on failure."""
    try:
        data = json.loads(body)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _raise_for_status(status: int, body: bytes) -> None:
    """Raise APIStatusError for non-2xx status codes."""
    if 200 <= status < 300:
        return

    response_data = _safe_json(body)
    message = response_data.get("error", f"HTTP {status}")
    raise APIStatusError(message, status_code=status, response_data=response_data)


def _authorize(request: httpx.Request, signer: Signer) -> None:
    """Sign the request and set the QBox authorization headers.

    The signature covers the path and query as they will be sent, so it is
    computed from the built request rather than the caller's path string.
    """
    token = signer.sign(
        request.url.raw_path.decode("ascii"),
        request.content,
        request.headers.get("Content-Type"),
    )
    request.headers["Authorization"] = f"{Headers.AUTH_SCHEME} {token}"
    request.headers["Content-Type"] = Headers.CONTENT_TYPE_JSON


def _array_items(raw: Any, json_path: str) -> Iterator[APIItem]:
    """Yield items of a root JSON array read from a file-like stream.

    A root null yields nothing. Any other root value raises DecodeError,
    so an error object is never mistaken for an empty result.
    """
    events = ijson.parse(raw)
    first = next(events, None)
    if first is None:
        raise DecodeError("Invalid JSON: empty body")
    _, event, value = first
    if event == "null":
        return
    if event != "start_array":
        raise DecodeError(f"Expected JSON array, got {event} {value!r}".rstrip())
    yield from ijson.items(itertools.chain([first], events), json_path)


@dataclass
class BaseAPIClient:
    """Base sync client for Qiniu API.

    Every request is a POST with an empty body, signed with the QBox scheme.
    The body of the response is returned as raw bytes; decoding is left to
    the caller.

    The owned httpx.Client is created on the first request, so a client that
    is never used holds no connections. Use it as a context manager (or call
    close()) to release the pool afterwards.

    Attributes:
        credentials: Signing capability (see auth.Credentials).
        base_url: Base URL for the API service.
        timeout: Request timeout in seconds, used when the client owns
            its transport.
        transport: Optional httpx.Client to send requests with. When omitted
            a client is created and closed by this object.
        check_status: If True, raise APIStatusError on non-2xx responses
            instead of handing the body to the decoder.
    """

    credentials: Signer
    base_url: str = BaseURLs.API
    timeout: float = 30.0
    transport: httpx.Client | None = None
    check_status: bool = False

    _client: httpx.Client | None = field(init=False, repr=False, default=None)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying transport if this client created it."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _http(self) -> httpx.Client:
        if self.transport is not None:
            return self.transport
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def _build_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def signed_post(self, path: str) -> bytes:
        """Send a signed, bodyless POST and return the raw response body.

        Args:
            path: Endpoint path including its query string.

        Returns:
            Response body bytes, whatever the status code.

        Raises:
            SigningError: If the credentials cannot sign the request.
                No network call is made in that case.
            TransportError: If the HTTP round trip fails.
            APIStatusError: On non-2xx status when check_status is set.
        """
        client = self._http()
        request = client.build_request("POST", self._build_url(path))
        _authorize(request, self.credentials)

        logger.debug("POST %s", path)
        try:
            response = client.send(request, stream=True)
            try:
                body = response.read()
            finally:
                response.close()
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", path, e)
            raise TransportError(f"Network error: {e}") from e

        logger.debug("POST %s -> %d (%d bytes)", path, response.status_code, len(body))
        if self.check_status:
            _raise_for_status(response.status_code, body)
        return body

    def stream_post_items(
        self,
        path: str,
        json_path: str = "item",
    ) -> Iterator[APIItem]:
        """Send a signed POST and parse the JSON body incrementally.

        Memory-efficient variant of signed_post() using requests + ijson.
        Items are yielded as soon as they are parsed. The body must be a
        root JSON array.

        Args:
            path: Endpoint path including its query string.
            json_path: JSON path for ijson iteration.
                - "item" for root array [{...}, {...}]

        Yields:
            Individual items from the JSON response.

        Raises:
            SigningError: If the credentials cannot sign the request.
            TransportError: If the HTTP round trip fails, including a
                connection dropped while the body is being read.
            DecodeError: If the body is not valid JSON or not an array.
            APIStatusError: On non-2xx status when check_status is set.

        Note:
            Connection stays open during iteration - avoid slow processing.
        """
        url = self._build_url(path)
        prepared = requests.Request("POST", url).prepare()
        token = self.credentials.sign(prepared.path_url)
        headers = {
            "Authorization": f"{Headers.AUTH_SCHEME} {token}",
            "Content-Type": Headers.CONTENT_TYPE_JSON,
            # ijson reads the raw socket stream, which is not decompressed
            "Accept-Encoding": "identity",
        }

        logger.debug("POST %s (streaming)", path)
        try:
            with requests.post(
                url, headers=headers, stream=True, timeout=self.timeout
            ) as resp:
                if self.check_status and not 200 <= resp.status_code < 300:
                    _raise_for_status(resp.status_code, resp.content)

                yield from _array_items(resp.raw, json_path)
        # resp.raw is urllib3's stream; read errors are not wrapped by requests
        except (requests.RequestException, urllib3.exceptions.HTTPError) as e:
            logger.warning("Request to %s failed: %s", path, e)
            raise TransportError(f"Network error: {e}") from e
        except ijson.JSONError as e:
            logger.warning("Malformed JSON from %s: %s", path, e)
            raise DecodeError(f"Invalid JSON: {e}") from e
        except DecodeError as e:
            logger.warning("Unexpected response shape from %s: %s", path, e)
            raise


@dataclass
class AsyncBaseAPIClient:
    """Base async client for Qiniu API.

    Same request contract as BaseAPIClient over httpx.AsyncClient. The owned
    client is created on the first request.

    Attributes:
        credentials: Signing capability (see auth.Credentials).
        base_url: Base URL for the API service.
        timeout: Request timeout in seconds, used when the client owns
            its transport.
        transport: Optional httpx.AsyncClient to send requests with.
        check_status: If True, raise APIStatusError on non-2xx responses.
    """

    credentials: Signer
    base_url: str = BaseURLs.API
    timeout: float = 30.0
    transport: httpx.AsyncClient | None = None
    check_status: bool = False

    _client: httpx.AsyncClient | None = field(init=False, repr=False, default=None)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying transport if this client created it."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self.transport is not None:
            return self.transport
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def _build_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def signed_post(self, path: str) -> bytes:
        """Send a signed, bodyless POST and return the raw response body."""
        client = self._http()
        request = client.build_request("POST", self._build_url(path))
        _authorize(request, self.credentials)

        logger.debug("POST %s", path)
        try:
            response = await client.send(request, stream=True)
            try:
                body = await response.aread()
            finally:
                await response.aclose()
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", path, e)
            raise TransportError(f"Network error: {e}") from e

        logger.debug("POST %s -> %d (%d bytes)", path, response.status_code, len(body))
        if self.check_status:
            _raise_for_status(response.status_code, body)
        return body
