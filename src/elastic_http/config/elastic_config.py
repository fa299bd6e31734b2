"""
Elasticsearch Client Configuration Types and Schema
Type-safe configuration object injected into the HTTP client
"""

from typing import Optional, Tuple
from pydantic import BaseModel, Field, field_validator, model_validator


class ConfigDefaults:
    """Default configuration values"""
    BASE_URL = "http://localhost:9200"
    TIMEOUT = 30000
    AWS_ENABLED = False
    AWS_SERVICE = "es"
    ENABLE_AUDIT_LOG = False


# Environment variable mapping
ENV_VAR_MAPPING = {
    "ELASTIC_BASE_URL": "base_url",
    "ELASTIC_TIMEOUT": "timeout",
    "ELASTIC_USERNAME": "username",
    "ELASTIC_PASSWORD": "password",
    "ELASTIC_AWS_ENABLED": "aws_enabled",
    "ELASTIC_AWS_ACCESS_KEY_ID": "aws_access_key_id",
    "ELASTIC_AWS_SECRET_ACCESS_KEY": "aws_secret_access_key",
    "ELASTIC_AWS_SESSION_TOKEN": "aws_session_token",
    "ELASTIC_AWS_REGION": "aws_region",
    "ELASTIC_AWS_SERVICE": "aws_service",
    "ELASTIC_ENABLE_AUDIT_LOG": "enable_audit_log",
}


class ElasticConfig(BaseModel):
    """
    Client configuration

    Built once at startup and passed to ``HttpClient``. Every request reads
    it afresh, so nothing derived from it is cached between calls.
    """

    base_url: str = Field(
        default=ConfigDefaults.BASE_URL,
        description="Root URL prepended to every request path",
    )
    timeout: int = Field(
        default=ConfigDefaults.TIMEOUT,
        description="Per-request timeout in milliseconds",
        ge=1,
    )

    # Optional - Basic authentication
    username: Optional[str] = Field(
        default=None,
        description="Basic auth username",
    )
    password: Optional[str] = Field(
        default=None,
        description="Basic auth password",
    )

    # Optional - AWS request signing
    aws_enabled: bool = Field(
        default=ConfigDefaults.AWS_ENABLED,
        description="Sign every request with AWS SigV4",
    )
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_session_token: Optional[str] = None
    aws_region: Optional[str] = None
    aws_service: str = Field(
        default=ConfigDefaults.AWS_SERVICE,
        description="AWS service name used in the credential scope",
    )

    # Optional - Audit logging
    enable_audit_log: bool = Field(
        default=ConfigDefaults.ENABLE_AUDIT_LOG,
        description="Emit an audit entry per request",
    )

    model_config = {
        "str_strip_whitespace": True,
        "validate_assignment": True,
    }

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base_url is a valid URL"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be a valid HTTP/HTTPS URL")
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_credentials(self) -> "ElasticConfig":
        """Basic auth needs both halves of the credential pair"""
        if (self.username is None) != (self.password is None):
            raise ValueError("username and password must be set together")
        return self

    @property
    def basic_auth(self) -> Optional[Tuple[str, str]]:
        """Configured ``(username, password)`` pair, if any"""
        if self.username is None or self.password is None:
            return None
        return (self.username, self.password)

    @property
    def timeout_seconds(self) -> float:
        """Timeout converted for the transport"""
        return self.timeout / 1000.0
