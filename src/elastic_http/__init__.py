"""
Elasticsearch HTTP client

Thin request layer for Elasticsearch: base URL, timeouts, JSON codec, Basic
auth and AWS SigV4 signing, with every call returning an
(outcome, status, body) result.
"""

from elastic_http.exceptions import (
    ElasticError,
    ElasticErrorCategory,
    ValidationError,
    ConfigError,
    SigningError,
)

# HTTP Client
from elastic_http.client import (
    BULK_PATH,
    HttpAuditEntry,
    HttpClient,
    HttpMethod,
    NormalizedResult,
    Outcome,
    PipelineBuilder,
    RequestKind,
    RequestsTransport,
    TransportFailure,
    TransportResponse,
)

# Configuration
from elastic_http.config import (
    ElasticConfig,
    ConfigLoader,
    ConfigValidator,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)

# Signing
from elastic_http.signing import AwsSigner

__version__ = "0.1.0"

__all__ = [
    # HTTP Client
    "BULK_PATH",
    "HttpAuditEntry",
    "HttpClient",
    "HttpMethod",
    "NormalizedResult",
    "Outcome",
    "PipelineBuilder",
    "RequestKind",
    "RequestsTransport",
    "TransportFailure",
    "TransportResponse",
    # Exceptions
    "ElasticError",
    "ElasticErrorCategory",
    "ValidationError",
    "ConfigError",
    "SigningError",
    # Configuration
    "ElasticConfig",
    "ConfigLoader",
    "ConfigValidator",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    # Signing
    "AwsSigner",
]
