"""Exception classes for the Elasticsearch HTTP client

HTTP error responses and transport failures are returned as values and never
raised. These exceptions cover misconfiguration and signing faults only.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ElasticErrorCategory(str, Enum):
    """Error category codes"""
    VALIDATION = "VAL"
    CONFIG = "CONFIG"
    SIGNING = "SIGN"
    UNKNOWN = "UNKNOWN"


class ElasticError(Exception):
    """
    Base exception for client errors

    All errors raised by the package extend from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details
        self.category = self._determine_category(code)

    def _determine_category(self, code: Optional[str]) -> ElasticErrorCategory:
        """Determine error category from code"""
        if not code:
            return ElasticErrorCategory.UNKNOWN

        if code.startswith("VAL"):
            return ElasticErrorCategory.VALIDATION
        if code.startswith("CONFIG"):
            return ElasticErrorCategory.CONFIG
        if code.startswith("SIGN"):
            return ElasticErrorCategory.SIGNING

        return ElasticErrorCategory.UNKNOWN


class ValidationError(ElasticError):
    """Validation error"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details=details)
        self.field = field


class ConfigError(ElasticError):
    """Configuration error"""

    def __init__(self, message: str, code: str = "CONFIG01") -> None:
        super().__init__(message, code=code)


class SigningError(ElasticError):
    """AWS request signing error"""

    def __init__(self, message: str, code: str = "SIGN01") -> None:
        super().__init__(message, code=code)
