"""Error taxonomy for the tailoring pipeline."""

from __future__ import annotations


class AtsTailorError(Exception):
    """Base class for all errors raised by ats_tailor."""


class InputError(AtsTailorError):
    """Job description or résumé text is empty or missing."""


class ExtractionEmptyError(AtsTailorError):
    """Keyword extraction produced no terms from non-empty input."""


class RemoteRequestError(InputError):
    """The remote keyword service rejected the request as malformed."""


class UpstreamError(AtsTailorError):
    """The remote keyword service failed."""

    retryable = False

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class UpstreamRateLimitError(UpstreamError):
    """The remote keyword service is rate limiting requests."""

    retryable = True


class UpstreamServiceError(UpstreamError):
    """The remote keyword service returned an unusable response."""


class RenderTargetMissing(AtsTailorError):
    """A presentation callback could not find where to render."""
