"""
HTTP transport.

The session never talks to the network directly; adapters post their JSON
body through a Transport and interpret the status code themselves.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Protocol

import requests

from ..core.errors import TransportFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Raw HTTP outcome returned by a transport."""
    status_code: int
    body: str


class Transport(Protocol):
    """Anything that can POST a JSON body and return status + raw body."""

    def post(self, url: str, body: str, headers: Dict[str, str]) -> TransportResponse:
        ...


class RequestsTransport:
    """Transport backed by ``requests``.

    Each call is attempted once; timeouts and connection errors are raised
    as TransportFailure.
    """

    def __init__(self, timeout: float = 120):
        self.timeout = timeout

    def post(self, url: str, body: str, headers: Dict[str, str]) -> TransportResponse:
        logger.debug("POST %s (%d bytes)", url, len(body))
        try:
            response = requests.post(
                url,
                data=body.encode("utf-8"),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportFailure(f"Request to {url} failed: {e}") from e

        response.encoding = "utf-8"
        return TransportResponse(status_code=response.status_code, body=response.text)
