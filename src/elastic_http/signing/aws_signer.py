"""
AWS Request Signing
Computes SigV4 authorization headers for Amazon-hosted Elasticsearch

The signature covers the method, the full URL including the query string,
the host/content-type/x-amz-* headers and a hash of the body. Callers must
pass exactly what will be sent.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

import requests
from requests_aws4auth import AWS4Auth

from elastic_http.config.elastic_config import ElasticConfig
from elastic_http.exceptions import SigningError


logger = logging.getLogger(__name__)


class AwsSigner:
    """
    SigV4 signer driven by the client configuration

    Example:
        >>> signer = AwsSigner(config)
        >>> if signer.enabled:
        ...     headers = signer.authorization_headers(
        ...         "GET", "https://search.example.com/_search", [], b"{}"
        ...     )
    """

    def __init__(self, config: ElasticConfig) -> None:
        self.config = config

    @property
    def enabled(self) -> bool:
        """Whether requests should be signed"""
        return self.config.aws_enabled

    def _auth(self) -> AWS4Auth:
        config = self.config
        missing = [
            name for name in ("aws_access_key_id", "aws_secret_access_key", "aws_region")
            if not getattr(config, name)
        ]
        if missing:
            raise SigningError(
                f"AWS signing is enabled but {', '.join(missing)} not configured",
                code="SIGN_MISSING_CREDENTIALS",
            )

        return AWS4Auth(
            config.aws_access_key_id,
            config.aws_secret_access_key,
            config.aws_region,
            config.aws_service,
            session_token=config.aws_session_token,
        )

    def authorization_headers(
        self,
        method: str,
        url: str,
        headers: Iterable[Tuple[str, str]],
        body: Any,
        query: Optional[Sequence[Tuple[str, Any]]] = None,
    ) -> Dict[str, str]:
        """
        Sign a request and return the headers the signature adds

        Args:
            method: HTTP method
            url: Resolved absolute URL
            headers: Headers that will be sent
            body: Encoded body (str or bytes)
            query: Query parameters appended to the URL

        Returns:
            ``Authorization`` and ``x-amz-*`` headers
        """
        auth = self._auth()
        prepared = requests.Request(
            method=method,
            url=url,
            headers=dict(headers),
            params=list(query or []),
            data=body.encode("utf-8") if isinstance(body, str) else body,
        ).prepare()

        signed = auth(prepared)
        signature_headers = {
            name: value for name, value in signed.headers.items()
            if name.lower() == "authorization" or name.lower().startswith("x-amz-")
        }
        logger.debug(f"Signed {method} {prepared.url} for {self.config.aws_region}")
        return signature_headers
