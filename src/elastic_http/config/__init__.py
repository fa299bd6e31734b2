"""
Configuration module
"""

from elastic_http.config.elastic_config import (
    ElasticConfig,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)
from elastic_http.config.config_loader import ConfigLoader
from elastic_http.config.config_validator import (
    ConfigValidator,
    ValidationResult,
    ValidationErrorDetail,
)

__all__ = [
    "ElasticConfig",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    "ConfigLoader",
    "ConfigValidator",
    "ValidationResult",
    "ValidationErrorDetail",
]
