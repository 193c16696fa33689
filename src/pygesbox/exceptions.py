"""Custom exception hierarchy for pygesbox."""

from __future__ import annotations


class GesboxError(Exception):
    """Base exception for all pygesbox errors."""


class GesboxConfigError(GesboxError):
    """Invalid or missing configuration."""


class GesboxNetworkError(GesboxError):
    """Fetch failure (transport error, timeout, non-2xx status)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class GesboxMalformedDataError(GesboxError):
    """Payload is not valid JSON or lacks the expected sample fields.

    An empty payload, or a payload with no samples for one of the
    sources, is *not* malformed: it is rendered as "no data".
    """

    def __init__(self, message: str, *, index: int | None = None) -> None:
        self.index = index
        super().__init__(message)
