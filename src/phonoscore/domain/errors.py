"""Domain-specific errors.

Extraction and scoring report failures as ``ExtractionFailure`` values (see
``domain.models``). The exceptions below belong to the I/O collaborators and
are mapped to an exit status by the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import ExtractionFailure


class PhonoscoreError(Exception):
    """Base class for all domain errors."""


@dataclass(frozen=True)
class DomainErrorInfo:
    code: str
    message: str
    detail: Optional[str] = None


class InvalidURLError(PhonoscoreError):
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="INVALID_URL", message=message, detail=detail)


class NetworkTimeoutError(PhonoscoreError):
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="NETWORK_TIMEOUT", message=message, detail=detail)


class FetchError(PhonoscoreError):
    """Raised when the device page cannot be downloaded."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="FETCH_ERROR", message=message, detail=detail)


class ConfigurationError(PhonoscoreError):
    """Raised when settings or the aspect registry file are invalid."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="CONFIGURATION_ERROR", message=message, detail=detail)


class ScoringFailedError(PhonoscoreError):
    """Raised by callers that want exception semantics for an extraction failure."""

    def __init__(self, failure: "ExtractionFailure"):
        super().__init__(failure.describe())
        self.failure = failure
        self.info = DomainErrorInfo(code=failure.code.value, message=failure.message, detail=failure.detail)
