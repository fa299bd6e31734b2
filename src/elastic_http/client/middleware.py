"""
Middleware pipeline
Named request/response stages run in a fixed order around the transport

Stages run first to last on the way out and unwind in reverse on the way
back. AWS signing is last before the transport so that the signature covers
the final headers, the resolved URL and the encoded body.
"""

import base64
import json
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from elastic_http.client.request import RequestEnv, RequestKind
from elastic_http.client.transport import (
    RawResult,
    Transport,
    TransportFailure,
    TransportResponse,
)
from elastic_http.config.elastic_config import ElasticConfig
from elastic_http.signing.aws_signer import AwsSigner


logger = logging.getLogger(__name__)

Next = Callable[[RequestEnv], RawResult]

JSON_CONTENT_TYPE = "application/json"
NDJSON_CONTENT_TYPE = "application/x-ndjson"

# Request-side execution order
STAGE_ORDER = (
    "json",
    "content_type",
    "basic_auth",
    "base_url",
    "timeout",
    "aws_signing",
)


class Middleware:
    """Base class for pipeline stages"""

    name = "middleware"

    def call(self, env: RequestEnv, next_: Next) -> RawResult:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"


def _is_json_content_type(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    mime = content_type.split(";")[0].strip().lower()
    return mime == JSON_CONTENT_TYPE or mime.endswith("+json")


class JsonCodec(Middleware):
    """
    Encode outgoing bodies and/or decode JSON responses

    Strings and bytes are sent as they are. Responses are decoded only when
    the server labels them as JSON and the body is non-empty. A body that
    fails to encode stops the call before it reaches the transport; either
    way the call ends as a transport failure.
    """

    name = "json"

    def __init__(self, encode: bool = True, decode: bool = True) -> None:
        self.encode = encode
        self.decode = decode

    def call(self, env: RequestEnv, next_: Next) -> RawResult:
        if self.encode:
            try:
                self._encode(env)
            except (TypeError, ValueError) as e:
                logger.warning(f"Could not encode JSON request body: {e}")
                return TransportFailure(reason=e)

        result = next_(env)

        if self.decode:
            return self._decode(result)
        return result

    def _encode(self, env: RequestEnv) -> None:
        if env.body is None or isinstance(env.body, (str, bytes)):
            return
        env.body = json.dumps(env.body).encode("utf-8")
        if env.get_header("content-type") is None:
            env.put_header("content-type", JSON_CONTENT_TYPE)

    def _decode(self, result: RawResult) -> RawResult:
        if not isinstance(result, TransportResponse):
            return result
        if not isinstance(result.body, (str, bytes)) or not result.body:
            return result
        if not _is_json_content_type(result.get_header("content-type")):
            return result

        try:
            body = json.loads(result.body)
        except ValueError as e:
            logger.warning(f"Could not decode JSON response (HTTP {result.status}): {e}")
            return TransportFailure(reason=e)

        return TransportResponse(status=result.status, body=body, headers=result.headers)


class ContentType(Middleware):
    """Force the request content-type"""

    name = "content_type"

    def __init__(self, content_type: str) -> None:
        self.content_type = content_type

    def call(self, env: RequestEnv, next_: Next) -> RawResult:
        env.put_header("content-type", self.content_type)
        return next_(env)


class BasicAuth(Middleware):
    """Add an HTTP Basic authorization header"""

    name = "basic_auth"

    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    def call(self, env: RequestEnv, next_: Next) -> RawResult:
        token = base64.b64encode(
            f"{self.username}:{self.password}".encode("utf-8")
        ).decode("ascii")
        env.put_header("authorization", f"Basic {token}")
        return next_(env)


class BaseUrl(Middleware):
    """Prefix relative request paths with the configured base URL"""

    name = "base_url"

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url

    def call(self, env: RequestEnv, next_: Next) -> RawResult:
        env.url = self.resolve(env.url)
        return next_(env)

    def resolve(self, url: str) -> str:
        if url.lower().startswith(("http://", "https://")):
            return url
        if not url:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"


class Timeout(Middleware):
    """Set the per-request timeout enforced by the transport"""

    name = "timeout"

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout  # seconds

    def call(self, env: RequestEnv, next_: Next) -> RawResult:
        env.timeout = self.timeout
        return next_(env)


class AwsSigning(Middleware):
    """Sign the final request when AWS signing is enabled"""

    name = "aws_signing"

    def __init__(self, signer: AwsSigner) -> None:
        self.signer = signer

    def call(self, env: RequestEnv, next_: Next) -> RawResult:
        if self.signer.enabled:
            signature_headers = self.signer.authorization_headers(
                env.method.value,
                env.url,
                env.headers,
                env.body,
                env.query,
            )
            for name, value in signature_headers.items():
                env.put_header(name, value)
        return next_(env)


class Pipeline:
    """An ordered list of stages ending in a transport"""

    def __init__(self, stages: Sequence[Middleware], transport: Transport) -> None:
        self.stages = list(stages)
        self.transport = transport

    @property
    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]

    def run(self, env: RequestEnv) -> RawResult:
        return self._dispatch(0, env)

    def _dispatch(self, index: int, env: RequestEnv) -> RawResult:
        if index == len(self.stages):
            return self.transport.send(env)
        return self.stages[index].call(
            env, lambda next_env: self._dispatch(index + 1, next_env)
        )


class PipelineBuilder:
    """
    Assembles the stages for one call

    Stages may be added in any order; ``build`` always arranges them by
    STAGE_ORDER.

    Example:
        >>> pipeline = (
        ...     PipelineBuilder(config, signer)
        ...     .with_codec(RequestKind.BULK)
        ...     .with_basic_auth(("elastic", "secret"))
        ...     .build(transport)
        ... )
        >>> pipeline.stage_names
        ['json', 'content_type', 'basic_auth', 'base_url', 'timeout', 'aws_signing']
    """

    def __init__(self, config: ElasticConfig, signer: AwsSigner) -> None:
        self._stages: Dict[str, Middleware] = {
            "base_url": BaseUrl(config.base_url),
            "timeout": Timeout(config.timeout_seconds),
            "aws_signing": AwsSigning(signer),
        }

    def with_basic_auth(
        self, credentials: Optional[Tuple[str, str]]
    ) -> "PipelineBuilder":
        """Add Basic auth when a ``(username, password)`` pair is given"""
        if credentials is not None:
            username, password = credentials
            self._stages["basic_auth"] = BasicAuth(username, password)
        return self

    def with_codec(self, kind: RequestKind) -> "PipelineBuilder":
        """Select the body codec for the request kind"""
        if kind is RequestKind.BULK:
            self._stages["content_type"] = ContentType(NDJSON_CONTENT_TYPE)
            self._stages["json"] = JsonCodec(encode=False, decode=True)
        elif kind is RequestKind.STANDARD:
            self._stages.pop("content_type", None)
            self._stages["json"] = JsonCodec(encode=True, decode=True)
        else:
            raise ValueError(f"Unknown request kind: {kind!r}")
        return self

    def stages(self) -> List[Middleware]:
        return [self._stages[name] for name in STAGE_ORDER if name in self._stages]

    def build(self, transport: Transport) -> Pipeline:
        return Pipeline(self.stages(), transport)
