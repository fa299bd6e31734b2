"""Client module initialization"""

from elastic_http.client.http_client import (
    BULK_PATH,
    HttpAuditEntry,
    HttpClient,
)
from elastic_http.client.middleware import (
    STAGE_ORDER,
    Middleware,
    Pipeline,
    PipelineBuilder,
)
from elastic_http.client.request import HttpMethod, RequestEnv, RequestKind
from elastic_http.client.response_handler import (
    NO_RESPONSE_STATUS,
    NormalizedResult,
    Outcome,
    process,
)
from elastic_http.client.transport import (
    RequestsTransport,
    Transport,
    TransportFailure,
    TransportResponse,
)

__all__ = [
    "BULK_PATH",
    "HttpAuditEntry",
    "HttpClient",
    "HttpMethod",
    "Middleware",
    "NO_RESPONSE_STATUS",
    "NormalizedResult",
    "Outcome",
    "Pipeline",
    "PipelineBuilder",
    "RequestEnv",
    "RequestKind",
    "RequestsTransport",
    "STAGE_ORDER",
    "Transport",
    "TransportFailure",
    "TransportResponse",
    "process",
]
