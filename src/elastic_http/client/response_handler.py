"""
Response classification
Turns a raw transport result into the (outcome, status, body) triple
"""

from enum import Enum
from typing import Any, NamedTuple

from elastic_http.client.transport import RawResult, TransportFailure


# Status reported when no HTTP response was received
NO_RESPONSE_STATUS = 0


class Outcome(str, Enum):
    OK = "ok"
    ERROR = "error"


class NormalizedResult(NamedTuple):
    """Result of every public call"""
    outcome: Outcome
    status: int
    body: Any

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK


def is_error_status(status: int) -> bool:
    return 400 <= status <= 599


def process(raw: RawResult) -> NormalizedResult:
    """
    Classify a raw transport result

    Args:
        raw: TransportResponse or TransportFailure

    Returns:
        ``(error, status, body)`` for 4xx/5xx statuses, ``(ok, status, body)``
        for every other status and ``(error, 0, reason)`` when the transport
        failed before a status was received
    """
    if isinstance(raw, TransportFailure):
        return NormalizedResult(Outcome.ERROR, NO_RESPONSE_STATUS, raw.reason)

    if is_error_status(raw.status):
        return NormalizedResult(Outcome.ERROR, raw.status, raw.body)

    return NormalizedResult(Outcome.OK, raw.status, raw.body)
