"""
HTTP transport layer
Sends a fully prepared RequestEnv over the network with requests
"""

import logging
from dataclasses import dataclass, field
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Mapping, Optional, Protocol, Union

import requests
from requests.structures import CaseInsensitiveDict

from elastic_http.client.request import RequestEnv


logger = logging.getLogger(__name__)


@dataclass
class TransportResponse:
    """An HTTP response as received from the server"""
    status: int
    body: Any
    headers: Mapping[str, str] = field(default_factory=dict)

    def get_header(self, name: str) -> Optional[str]:
        lower_name = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lower_name:
                return value
        return None


@dataclass
class TransportFailure:
    """No response was obtained; ``reason`` is the transport's diagnostic"""
    reason: Any


RawResult = Union[TransportResponse, TransportFailure]


class Transport(Protocol):
    """Anything able to send a RequestEnv and report the raw result"""

    def send(self, env: RequestEnv) -> RawResult:
        ...

    def close(self) -> None:
        ...


def encode_body(body: Any) -> Optional[bytes]:
    """Body bytes as they go on the wire"""
    if body is None or isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    raise TypeError(
        f"Request body must be str or bytes once encoded, got {type(body).__name__}"
    )


class RejectCookiesPolicy(DefaultCookiePolicy):
    """Cookie policy that refuses to store any cookie"""

    def set_ok(self, cookie, request):
        return False


class RequestsTransport:
    """
    Transport backed by a ``requests.Session``

    Connection errors, timeouts and TLS failures are reported as a
    TransportFailure carrying the requests exception unchanged. Redirects
    are returned to the caller rather than followed, and the session keeps
    no cookies between calls.
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._session = session or requests.Session()
        self._session.cookies.set_policy(RejectCookiesPolicy())

    def send(self, env: RequestEnv) -> RawResult:
        request = requests.Request(
            method=env.method.value,
            url=env.url,
            headers=dict(env.headers),
            params=list(env.query),
            data=encode_body(env.body),
        )
        prepared = self._session.prepare_request(request)

        try:
            response = self._session.send(
                prepared, timeout=env.timeout, allow_redirects=False
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"{env.method.value} {env.url} failed: {e}")
            return TransportFailure(reason=e)

        return TransportResponse(
            status=response.status_code,
            body=response.text,
            headers=CaseInsensitiveDict(response.headers),
        )

    def close(self) -> None:
        """Close the underlying session"""
        self._session.close()
