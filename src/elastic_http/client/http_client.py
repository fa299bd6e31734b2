"""
HTTP client for Elasticsearch
Builds a middleware pipeline per call and normalizes every outcome into an
(outcome, status, body) result. Nothing is raised for HTTP errors or
transport failures; callers inspect the result and decide what to do.
"""

import time
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

from elastic_http.client.middleware import PipelineBuilder
from elastic_http.client.request import HttpMethod, RequestEnv, RequestKind
from elastic_http.client.response_handler import NormalizedResult, process
from elastic_http.client.transport import RequestsTransport, Transport
from elastic_http.config.elastic_config import ElasticConfig
from elastic_http.signing.aws_signer import AwsSigner


# Logger for this module
logger = logging.getLogger(__name__)

BULK_PATH = "/_bulk"

Credentials = Tuple[str, str]
Query = Sequence[Tuple[str, Any]]


@dataclass
class HttpAuditEntry:
    """Audit log entry for HTTP requests"""
    timestamp: str
    method: str
    url: str
    headers: Dict[str, str]
    status: int
    duration: int  # milliseconds
    success: bool
    error: Optional[str] = None


# Sensitive fields that should be redacted in logs
SENSITIVE_FIELDS = [
    "authorization",
    "x-amz-security-token",
    "password",
    "secret",
]


def redact_headers(headers: Sequence[Tuple[str, str]]) -> Dict[str, str]:
    """Return headers with sensitive values redacted for logging"""
    redacted = {}
    for key, value in headers:
        lower_key = key.lower()
        if any(field in lower_key for field in SENSITIVE_FIELDS):
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


class HttpClient:
    """
    HTTP Client for Elasticsearch

    Every call returns a NormalizedResult:
    - ``("ok", status, body)`` for any status outside 400-599
    - ``("error", status, body)`` for 4xx and 5xx responses
    - ``("error", 0, reason)`` when no response was received

    Example:
        >>> client = HttpClient(ElasticConfig())
        >>> outcome, status, body = client.get("/answer/_search")
        >>> outcome, status, body = client.put(
        ...     "/answers/_doc/1", body={"text": "I like using Elasticsearch"}
        ... )
    """

    def __init__(
        self,
        config: Optional[ElasticConfig] = None,
        transport: Optional[Transport] = None,
        signer: Optional[AwsSigner] = None,
    ) -> None:
        """
        Create a new HTTP client instance

        Args:
            config: Resolved client configuration (defaults apply when omitted)
            transport: Transport used to send requests (requests session by default)
            signer: AWS signer (built from config when omitted)
        """
        self.config = config or ElasticConfig()
        self.transport = transport or RequestsTransport()
        self.signer = signer or AwsSigner(self.config)

        self._audit_log_callback: Optional[Callable[[HttpAuditEntry], None]] = None

    def set_audit_log_callback(
        self, callback: Callable[[HttpAuditEntry], None]
    ) -> None:
        """Set audit log callback"""
        self._audit_log_callback = callback

    def get(
        self,
        path: str,
        body: Any = None,
        query: Optional[Query] = None,
        basic_auth: Optional[Credentials] = None,
    ) -> NormalizedResult:
        """
        Perform GET request

        Args:
            path: Request path (relative to base URL)
            body: Request body, JSON-encoded unless already a string
            query: Ordered query parameters
            basic_auth: ``(username, password)`` overriding the configuration

        Returns:
            Normalized result
        """
        return self.request(HttpMethod.GET, path, body, query, basic_auth)

    def post(
        self,
        path: str,
        body: Any = None,
        query: Optional[Query] = None,
        basic_auth: Optional[Credentials] = None,
    ) -> NormalizedResult:
        """Perform POST request"""
        return self.request(HttpMethod.POST, path, body, query, basic_auth)

    def put(
        self,
        path: str,
        body: Any = None,
        query: Optional[Query] = None,
        basic_auth: Optional[Credentials] = None,
    ) -> NormalizedResult:
        """Perform PUT request"""
        return self.request(HttpMethod.PUT, path, body, query, basic_auth)

    def delete(
        self,
        path: str,
        body: Any = None,
        query: Optional[Query] = None,
        basic_auth: Optional[Credentials] = None,
    ) -> NormalizedResult:
        """Perform DELETE request"""
        return self.request(HttpMethod.DELETE, path, body, query, basic_auth)

    def head(
        self,
        path: str,
        body: Any = None,
        query: Optional[Query] = None,
        basic_auth: Optional[Credentials] = None,
    ) -> NormalizedResult:
        """Perform HEAD request"""
        return self.request(HttpMethod.HEAD, path, body, query, basic_auth)

    def bulk(
        self,
        body: str = "",
        basic_auth: Optional[Credentials] = None,
    ) -> NormalizedResult:
        """
        Send newline-delimited operations to the bulk endpoint

        A single newline is appended to ``body`` as the bulk API requires.
        The body is sent as given, without JSON encoding.

        Args:
            body: NDJSON payload
            basic_auth: ``(username, password)`` overriding the configuration

        Returns:
            Normalized result with the decoded bulk response
        """
        return self.request(
            HttpMethod.POST,
            BULK_PATH,
            body + "\n",
            basic_auth=basic_auth,
            kind=RequestKind.BULK,
        )

    def request(
        self,
        method: Union[HttpMethod, str],
        path: str,
        body: Any = None,
        query: Optional[Query] = None,
        basic_auth: Optional[Credentials] = None,
        kind: RequestKind = RequestKind.STANDARD,
    ) -> NormalizedResult:
        """
        Dispatch a request through the middleware pipeline

        Args:
            method: HTTP method
            path: Request path (relative to base URL) or absolute URL
            body: Request body, ``{}`` when omitted
            query: Ordered query parameters
            basic_auth: ``(username, password)`` overriding the configuration
            kind: Selects the body codec

        Returns:
            Normalized result
        """
        env = RequestEnv(
            method=method if isinstance(method, HttpMethod) else HttpMethod(method.upper()),
            url=path,
            headers=[],
            body={} if body is None else body,
            query=list(query or []),
            kind=kind,
        )

        credentials = basic_auth if basic_auth is not None else self.config.basic_auth
        pipeline = (
            PipelineBuilder(self.config, self.signer)
            .with_basic_auth(credentials)
            .with_codec(kind)
            .build(self.transport)
        )

        logger.debug(f"{env.method.value} {path} via {', '.join(pipeline.stage_names)}")
        start_time = time.time()

        result = process(pipeline.run(env))

        self._log_audit(env, result, start_time)
        return result

    def _log_audit(
        self,
        env: RequestEnv,
        result: NormalizedResult,
        start_time: float,
    ) -> None:
        """Log audit entry"""
        if not (self.config.enable_audit_log and self._audit_log_callback):
            return

        entry = HttpAuditEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            method=env.method.value,
            url=env.url,
            headers=redact_headers(env.headers),
            status=result.status,
            duration=int((time.time() - start_time) * 1000),
            success=result.ok,
            error=str(result.body) if result.status == 0 else None,
        )
        self._audit_log_callback(entry)

    @property
    def base_url(self) -> str:
        """Get base URL"""
        return self.config.base_url

    def close(self) -> None:
        """Close the transport"""
        self.transport.close()

    def __enter__(self) -> "HttpClient":
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit"""
        self.close()
