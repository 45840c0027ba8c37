"""HTTP clients used by the search pipeline."""

from .base import (
    BaseHttpClient,
    ClientError,
    NotFoundError,
    RateLimitedError,
    RequestRejectedError,
    UpstreamError,
)
from .source import DblpClient, ScholarClient, SourceClient

__all__ = [
    "BaseHttpClient",
    "ClientError",
    "DblpClient",
    "NotFoundError",
    "RateLimitedError",
    "RequestRejectedError",
    "ScholarClient",
    "SourceClient",
    "UpstreamError",
]
