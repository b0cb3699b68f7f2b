from typing import Mapping, MutableMapping, List

# Auth, client version and distributed tracing context
FORWARDED_HEADERS: List[str] = [
    'Authorization',
    'x-version',

    # open tracing
    'x-request-id',
    'x-b3-traceid',
    'x-b3-spanid',
    'x-b3-parentspanid',
    'x-b3-sampled',
    'x-b3-flags',
    'x-ot-span-context',
]


def forward_headers(inbound: Mapping[str, str], outbound: MutableMapping[str, str]) -> None:
    """Copy allowlisted, non-empty inbound headers onto an outbound request."""
    for name in FORWARDED_HEADERS:
        value = inbound.get(name)
        if value:
            outbound[name] = value


def forwarded_headers(inbound: Mapping[str, str]) -> dict:
    headers = {}
    forward_headers(inbound, headers)
    return headers
