"""Request signing for Qiniu API (QBox scheme)."""

import base64
import hashlib
import hmac
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from .endpoints import Headers
from .exceptions import SigningError


class Signer(Protocol):
    """Anything that can compute an authorization token for a request.

    Implementations must be safe to call from several threads at once and
    should raise SigningError when the token cannot be computed.
    """

    def sign(
        self,
        path: str,
        body: bytes = b"",
        content_type: str | None = None,
    ) -> str: ...


@dataclass(frozen=True)
class Credentials:
    """Access key / secret key pair that signs requests.

    The token is ``<access_key>:<urlsafe_b64(hmac_sha1(secret_key, data))>``
    where data is the request path with its query string, a newline, and the
    body when the body is form-encoded.

    Attributes:
        access_key: Public access key.
        secret_key: Secret key, never sent over the wire.
    """

    access_key: str
    secret_key: str = field(repr=False)

    def sign(
        self,
        path: str,
        body: bytes = b"",
        content_type: str | None = None,
    ) -> str:
        """Compute the QBox token for a request path (query included)."""
        if not isinstance(self.access_key, str) or not self.access_key:
            raise SigningError("Access key must be a non-empty string")
        if not isinstance(self.secret_key, str) or not self.secret_key:
            raise SigningError("Secret key must be a non-empty string")

        data = path.encode("utf-8") + b"\n"
        if body and content_type == Headers.CONTENT_TYPE_FORM:
            data += body

        digest = hmac.new(
            self.secret_key.encode("utf-8"), data, hashlib.sha1
        ).digest()
        encoded = base64.urlsafe_b64encode(digest).decode("ascii")
        return f"{self.access_key}:{encoded}"

    def sign_request(self, request: httpx.Request) -> str:
        """Compute the token for an outgoing httpx request."""
        return self.sign(
            request.url.raw_path.decode("ascii"),
            request.content,
            request.headers.get("Content-Type"),
        )
