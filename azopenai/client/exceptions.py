"""
Exceptions raised by the azopenai client.

Date: 2026-10-18
"""

import json
import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Mapping


class AzOpenAIError(Exception):
    """Base exception for all azopenai errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(AzOpenAIError):
    """Raised when the client is misconfigured."""
    pass


class InsecureTransportError(ConfigurationError):
    """Raised when a credential would be sent over plain HTTP."""
    pass


class TransportError(AzOpenAIError):
    """Raised when transport/communication fails."""
    pass


class TimeoutError(TransportError):
    """Raised when connecting or reading times out."""
    pass


class DecodeError(AzOpenAIError):
    """Raised when a response body does not match the expected shape."""
    pass


class StreamDecodeError(DecodeError):
    """Raised when an event stream frame cannot be decoded."""
    pass


class ResponseError(AzOpenAIError):
    """Raised when the service answers with a non-success status code."""

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: str | None = None,
        retry_after: float | None = None,
        details: dict | None = None
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.error_code = error_code
        self.retry_after = retry_after

    def __str__(self) -> str:
        code = f" ({self.error_code})" if self.error_code else ""
        return f"HTTP {self.status_code}{code}: {self.message}"


class ContentFilterResponseError(ResponseError):
    """Raised when the prompt was refused by the service's content filter."""

    def __init__(
        self,
        message: str,
        status_code: int,
        content_filter_results: dict[str, Any] | None = None,
        **kwargs: Any
    ):
        super().__init__(message, status_code, error_code="content_filter", **kwargs)
        self.content_filter_results = content_filter_results or {}


def new_response_error(
    status_code: int,
    body: bytes,
    headers: Mapping[str, str] | None = None
) -> ResponseError:
    """
    Build a structured error from a non-success response.

    The service reports failures as ``{"error": {"code", "message", ...}}``.
    Bodies that are not JSON keep their raw text as the message.

    Args:
        status_code: HTTP status code
        body: Raw response body
        headers: Response headers

    Returns:
        ResponseError, or ContentFilterResponseError for content filter refusals
    """
    headers = headers or {}
    retry_after = parse_retry_after(headers)
    text = body.decode("utf-8", errors="replace").strip()

    try:
        payload = json.loads(text) if text else {}
    except json.JSONDecodeError:
        payload = None

    if not isinstance(payload, dict):
        return ResponseError(
            text or f"Service returned status {status_code}",
            status_code=status_code,
            retry_after=retry_after,
            details={"body": text}
        )

    error = payload.get("error")
    if not isinstance(error, dict):
        error = payload

    message = error.get("message") or f"Service returned status {status_code}"
    code = error.get("code")

    if code == "content_filter":
        inner = error.get("innererror")
        if not isinstance(inner, dict):
            inner = {}
        filter_results = inner.get("content_filter_result")
        return ContentFilterResponseError(
            message,
            status_code=status_code,
            content_filter_results=filter_results if isinstance(filter_results, dict) else None,
            retry_after=retry_after,
            details=payload
        )

    return ResponseError(
        message,
        status_code=status_code,
        error_code=str(code) if code is not None else None,
        retry_after=retry_after,
        details=payload
    )


def parse_retry_after(headers: Mapping[str, str]) -> float | None:
    """Return the server-requested retry delay in seconds, if any."""
    headers = {k.lower(): v for k, v in headers.items()}
    for name in ("retry-after-ms", "x-ms-retry-after-ms"):
        value = headers.get(name)
        seconds = _parse_seconds(value)
        if seconds is not None:
            return seconds / 1000.0

    value = headers.get("retry-after")
    if not value:
        return None

    seconds = _parse_seconds(value)
    if seconds is not None:
        return seconds

    # HTTP-date form
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)


def _parse_seconds(value: str | None) -> float | None:
    """Parse a non-negative finite number; None for anything else."""
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return max(number, 0.0)
