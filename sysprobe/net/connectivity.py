"""
Two-stage connectivity check: a TCP dial followed by a bounded HTTP GET.

Every outcome is reported as a descriptive string; "could not connect" is a
result, not an exception.
"""

from __future__ import annotations

import logging
import socket
from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_PORT = "80"
DEFAULT_TIMEOUT_SECONDS = 5
TCP_SUCCESS = "success"
HTTP_SKIPPED = "skipped (TCP failed)"

Connector = Callable[..., socket.socket]
ClientFactory = Callable[..., httpx.Client]


@dataclass(slots=True, frozen=True)
class ConnectivityReport:
    """Result of the TCP and HTTP checks against ``domain:port``."""

    domain: str
    port: str
    timeout_seconds: int
    tcp: str
    http: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _describe(exc: BaseException) -> str:
    message = str(exc)
    return message if message else exc.__class__.__name__


def _host_literal(domain: str) -> str:
    if ":" in domain and not domain.startswith("["):
        return f"[{domain}]"
    return domain


def _check_tcp(domain: str, port: str, timeout: int, connect: Connector) -> str:
    try:
        conn = connect((domain, int(port)), timeout=timeout)
    except (OSError, ValueError) as exc:
        return _describe(exc)
    conn.close()
    return TCP_SUCCESS


def _check_http(url: str, timeout: int, client_factory: ClientFactory) -> str:
    try:
        with client_factory(timeout=timeout, follow_redirects=True) as client:
            response = client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return _describe(exc)
    return f"{response.status_code} {response.reason_phrase}".strip()


def check_connectivity(
    domain: str,
    port: str = "",
    timeout_seconds: int = 0,
    *,
    connect: Connector = socket.create_connection,
    client_factory: ClientFactory = httpx.Client,
) -> ConnectivityReport:
    """
    Check whether ``domain`` is reachable over TCP and then HTTP.

    Args:
        domain: Host name or IP address to probe.
        port: Port to probe; ``"80"`` when empty.
        timeout_seconds: Bound for each stage; 5 when not positive.
        connect: TCP dial function (``socket.create_connection`` signature).
        client_factory: HTTP client factory (``httpx.Client`` signature).
    """
    if timeout_seconds <= 0:
        timeout_seconds = DEFAULT_TIMEOUT_SECONDS
    if not port:
        port = DEFAULT_PORT

    tcp = _check_tcp(domain, port, timeout_seconds, connect)
    if tcp == TCP_SUCCESS:
        url = f"http://{_host_literal(domain)}:{port}/"
        http = _check_http(url, timeout_seconds, client_factory)
    else:
        http = HTTP_SKIPPED

    logger.debug(f"Connectivity {domain}:{port} tcp={tcp!r} http={http!r}")
    return ConnectivityReport(
        domain=domain,
        port=port,
        timeout_seconds=timeout_seconds,
        tcp=tcp,
        http=http,
    )
