"""
Configuration Validator
Validates client configuration with clear error messages
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ValidationErrorDetail:
    """Validation error detail"""
    field: str
    message: str
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Validation result"""
    valid: bool
    errors: List[ValidationErrorDetail] = field(default_factory=list)


class ConfigValidator:
    """
    ConfigValidator class
    Checks a raw configuration dictionary before it becomes an ElasticConfig
    """

    MAX_TIMEOUT = 600000

    def __init__(self) -> None:
        self._errors: List[ValidationErrorDetail] = []

    def validate(self, config: Dict[str, Any]) -> ValidationResult:
        """
        Validate the entire configuration dictionary

        Args:
            config: Configuration dictionary to validate

        Returns:
            ValidationResult with any errors
        """
        self._errors = []

        self._validate_base_url(config)
        self._validate_timeout(config)
        self._validate_basic_auth(config)
        self._validate_aws(config)

        return ValidationResult(
            valid=len(self._errors) == 0,
            errors=self._errors.copy()
        )

    def validate_or_raise(self, config: Dict[str, Any]) -> None:
        """
        Validate and raise if invalid

        Raises:
            ValidationError: If configuration is invalid
        """
        from elastic_http.exceptions import ValidationError

        result = self.validate(config)
        if not result.valid:
            error_messages = "; ".join(
                f"{e.field}: {e.message}" for e in result.errors
            )
            raise ValidationError(
                f"Configuration validation failed: {error_messages}",
                field=result.errors[0].field,
                details={
                    "errors": [
                        {"field": e.field, "message": e.message}
                        for e in result.errors
                    ]
                },
            )

    def _validate_base_url(self, config: Dict[str, Any]) -> None:
        base_url = config.get("base_url")
        if base_url is None:
            return
        if not isinstance(base_url, str) or not base_url.startswith(("http://", "https://")):
            self._errors.append(ValidationErrorDetail(
                field="base_url",
                message="base_url must be a valid HTTP/HTTPS URL",
                value=base_url
            ))

    def _validate_timeout(self, config: Dict[str, Any]) -> None:
        timeout = config.get("timeout")
        if timeout is None:
            return
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            self._errors.append(ValidationErrorDetail(
                field="timeout",
                message="timeout must be a positive integer (milliseconds)",
                value=timeout
            ))
        elif timeout > self.MAX_TIMEOUT:
            self._errors.append(ValidationErrorDetail(
                field="timeout",
                message=f"timeout should not exceed {self.MAX_TIMEOUT}ms",
                value=timeout
            ))

    def _validate_basic_auth(self, config: Dict[str, Any]) -> None:
        has_username = config.get("username") is not None
        has_password = config.get("password") is not None
        if has_username and not has_password:
            self._errors.append(ValidationErrorDetail(
                field="password",
                message="password is required when username is set"
            ))
        elif has_password and not has_username:
            self._errors.append(ValidationErrorDetail(
                field="username",
                message="username is required when password is set"
            ))

    def _validate_aws(self, config: Dict[str, Any]) -> None:
        if not config.get("aws_enabled"):
            return

        for field_name in ("aws_access_key_id", "aws_secret_access_key", "aws_region"):
            value = config.get(field_name)
            if value is None:
                self._errors.append(ValidationErrorDetail(
                    field=field_name,
                    message=f"{field_name} is required when aws_enabled is true"
                ))
            elif isinstance(value, str) and value.strip() == "":
                self._errors.append(ValidationErrorDetail(
                    field=field_name,
                    message=f"{field_name} cannot be empty",
                    value="[REDACTED]" if "secret" in field_name else value
                ))
