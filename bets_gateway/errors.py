from typing import Optional

from .models import AggregateError


class GatewayError(Exception):
    """Base exception for the bets gateway."""


class UpstreamError(GatewayError):
    def __init__(self, service: str, url: str, reason: str, status: int = 0):
        self.service = service
        self.url = url
        self.status = status
        self.reason = reason
        super().__init__(f"{service}: {reason}")


class UpstreamTransportError(UpstreamError):
    """The call never produced an HTTP status (refused, timeout, DNS, bad URL)."""


class UpstreamStatusError(UpstreamError):
    """The upstream answered with a non-2xx status."""


class UpstreamDecodeError(UpstreamError):
    """The upstream answered 2xx but the body is not a JSON object."""


class AggregationFailed(GatewayError):
    def __init__(self, error: AggregateError, causes: Optional[dict] = None):
        self.error = error
        self.causes = causes or {}
        failed = sorted(name for name in self.causes)
        super().__init__(f"Aggregation failed for: {', '.join(failed) or 'unknown'}")
