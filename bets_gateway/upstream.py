import logging
from dataclasses import dataclass
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Dict, Optional, Tuple

import requests
from requests.cookies import RequestsCookieJar

from .errors import (
    UpstreamDecodeError,
    UpstreamError,
    UpstreamStatusError,
    UpstreamTransportError,
)

logger = logging.getLogger(__name__)


@dataclass
class UpstreamResult:
    payload: Optional[Dict[str, Any]] = None
    status: int = 0
    error: Optional[UpstreamError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def is_2xx(status: int) -> bool:
    return 200 <= status < 300


class NoCookiesPolicy(DefaultCookiePolicy):
    """Refuses to store or send any cookie; the session is shared by every inbound request."""

    def set_ok(self, cookie, request):
        return False

    def return_ok(self, cookie, request):
        return False


def _log_response(response: requests.Response, *args, **kwargs):
    req = response.request
    logger.debug(
        f"call {req.method} {req.url} answered {response.status_code} {response.reason or ''}"
        f" headers={dict(response.headers)}"
    )


class UpstreamClient:
    """
    Long-lived HTTP client shared by every request handler.

    Wraps a single requests.Session for connection pooling and turns every
    outcome of a GET into an UpstreamResult instead of raising.
    """

    def __init__(self, connect_timeout: float = 3.05, read_timeout: float = 10.0,
                 session: requests.Session = None):
        self.timeout: Tuple[float, float] = (connect_timeout, read_timeout)
        self.session = session or requests.Session()
        self.session.cookies = RequestsCookieJar(policy=NoCookiesPolicy())
        self.session.hooks['response'].append(_log_response)

    def fetch(self, service: str, url: str, headers: Dict[str, str] = None) -> UpstreamResult:
        """GET ``url`` and decode a JSON object from the body."""
        headers = dict(headers or {})

        if not url:
            error = UpstreamTransportError(service, url, 'no endpoint configured')
            logger.error(f"failed to call {service}: {error.reason}")
            return UpstreamResult(status=0, error=error)

        logger.debug(f"calling GET {url} headers={headers}")

        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            error = UpstreamTransportError(service, url, str(e))
            logger.error(f"failed to call {service}: GET {url}: {e}")
            return UpstreamResult(status=0, error=error)

        with response:
            status = response.status_code
            if not is_2xx(status):
                reason = f"{status} {response.reason or ''}".strip()
                error = UpstreamStatusError(service, url, reason, status=status)
                logger.error(f"{service} answered GET {url} with {reason}")
                return UpstreamResult(status=status, error=error)

            try:
                payload = response.json()
            except ValueError as e:
                error = UpstreamDecodeError(service, url, f"invalid JSON body: {e}")
                logger.error(f"failed to read {service} response body: GET {url} ({status}): {e}")
                return UpstreamResult(status=0, error=error)

            if not isinstance(payload, dict):
                error = UpstreamDecodeError(
                    service, url, f"expected a JSON object, got {type(payload).__name__}"
                )
                logger.error(f"failed to read {service} response body: GET {url} ({status}): {error.reason}")
                return UpstreamResult(status=0, error=error)

        return UpstreamResult(payload=payload, status=status)

    def close(self):
        self.session.close()
