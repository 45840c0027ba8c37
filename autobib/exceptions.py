"""Custom exception hierarchy for autobib."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from autobib.core.models import BackendKind


class AutobibError(Exception):
    """Base exception for autobib errors."""


class ConfigError(AutobibError):
    """Raised when configuration is invalid or incomplete."""


class SourceUnavailable(AutobibError):
    """Raised when a bibliographic backend cannot be reached or answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        backend: Optional["BackendKind"] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.backend = backend
        self.status = status


class PayloadMalformed(AutobibError):
    """Raised when a structured payload cannot be parsed."""
