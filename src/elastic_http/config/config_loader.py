"""
Builds an ElasticConfig from a JSON file, ELASTIC_* environment variables
and keyword overrides, in increasing order of precedence.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from elastic_http.config.elastic_config import (
    ElasticConfig,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)
from elastic_http.config.config_validator import ConfigValidator
from elastic_http.exceptions import ConfigError


PathLike = Union[str, Path]
RawConfig = Dict[str, Any]

_BOOLEAN_FIELDS = ("aws_enabled", "enable_audit_log")
_INTEGER_FIELDS = ("timeout",)
_TRUTHY = ("true", "1", "yes")


def _coerce(key: str, value: str) -> Any:
    # Unparseable integers are kept as strings so the validator can report them
    if key in _BOOLEAN_FIELDS:
        return value.lower() in _TRUTHY
    if key in _INTEGER_FIELDS and value.lstrip("-").isdigit():
        return int(value)
    return value


class ConfigLoader:
    """
    Example:
        >>> config = ConfigLoader().load(file="elastic.json", config={"timeout": 5000})
        >>> client = HttpClient(config)
    """

    def __init__(self) -> None:
        self._validator = ConfigValidator()

    def from_file(self, path: PathLike) -> RawConfig:
        """Read a JSON object of config keys; raises ConfigError otherwise"""
        file_path = Path(path).resolve()
        if not file_path.exists():
            raise ConfigError(
                f"Configuration file not found: {file_path}",
                code="CONFIG_FILE_NOT_FOUND",
            )

        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file: {file_path}",
                code="CONFIG_PARSE_ERROR",
            ) from e

        if not isinstance(raw, dict):
            raise ConfigError(
                f"Configuration file must contain a JSON object: {file_path}",
                code="CONFIG_PARSE_ERROR",
            )
        return raw

    def from_environment(self) -> RawConfig:
        """Collect every non-empty ELASTIC_* variable, typed per field"""
        return {
            key: _coerce(key, os.environ[name])
            for name, key in ENV_VAR_MAPPING.items()
            if os.environ.get(name)
        }

    def from_dict(self, config: Mapping[str, Any]) -> RawConfig:
        return dict(config)

    def merge(self, *sources: Mapping[str, Any]) -> RawConfig:
        """Later sources win; ``None`` never overrides a value"""
        merged: RawConfig = {}
        for source in sources:
            merged.update((k, v) for k, v in source.items() if v is not None)
        return merged

    def resolve(self, config: Mapping[str, Any]) -> ElasticConfig:
        self._validator.validate_or_raise(dict(config))
        return ElasticConfig(**config)

    def load(
        self,
        file: Optional[PathLike] = None,
        env: bool = True,
        config: Optional[Mapping[str, Any]] = None,
    ) -> ElasticConfig:
        """
        Merge file, environment and ``config`` (highest precedence), then
        validate. Raises ValidationError or ConfigError.
        """
        sources = [
            self.from_file(file) if file is not None else {},
            self.from_environment() if env else {},
            config or {},
        ]
        return self.resolve(self.merge(*sources))

    def create_template(self, path: PathLike) -> None:
        """Write every recognised key with its default (``null`` when unset)"""
        template = {key: None for key in ENV_VAR_MAPPING.values()}
        template.update(
            base_url=ConfigDefaults.BASE_URL,
            timeout=ConfigDefaults.TIMEOUT,
            aws_enabled=ConfigDefaults.AWS_ENABLED,
            aws_service=ConfigDefaults.AWS_SERVICE,
            enable_audit_log=ConfigDefaults.ENABLE_AUDIT_LOG,
        )

        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(json.dumps(template, indent=2), encoding="utf-8")
