"""Exceptions for Qiniu Statistics SDK."""

from typing import Any


class QiniuAPIError(Exception):
    """Base exception for Qiniu API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}

    def __str__(self) -> str:
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class SigningError(QiniuAPIError):
    """Request signing failed.

    Raised when:
    - Access key or secret key is empty
    - Key material is not a string
    """

    pass


class TransportError(QiniuAPIError):
    """HTTP round trip failed (DNS, connection, timeout, body read)."""

    pass


class DecodeError(QiniuAPIError):
    """Response body is not valid JSON for the expected schema."""

    def __init__(
        self,
        message: str,
        body: bytes = b"",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.body = body


class APIStatusError(QiniuAPIError):
    """Non-2xx response (only raised when status checking is enabled)."""

    pass
