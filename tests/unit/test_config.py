"""
Configuration Module Unit Tests
"""

import os
import json
import tempfile
from pathlib import Path
import pytest

from elastic_http.config import (
    ElasticConfig,
    ConfigLoader,
    ConfigValidator,
    ConfigDefaults,
)
from elastic_http.exceptions import ConfigError, ValidationError


class TestConfigValidator:
    """Tests for ConfigValidator"""

    @pytest.fixture
    def validator(self) -> ConfigValidator:
        return ConfigValidator()

    @pytest.fixture
    def aws_config(self) -> dict:
        return {
            "base_url": "https://search-answers.us-east-1.es.amazonaws.com",
            "aws_enabled": True,
            "aws_access_key_id": "AKIDEXAMPLE",
            "aws_secret_access_key": "secret",
            "aws_region": "us-east-1",
        }

    def test_validate_empty_config(self, validator: ConfigValidator):
        """Should pass with nothing set since every field has a default"""
        result = validator.validate({})
        assert result.valid is True
        assert len(result.errors) == 0

    def test_validate_aws_config(self, validator: ConfigValidator, aws_config: dict):
        assert validator.validate(aws_config).valid is True

    def test_validate_invalid_base_url(self, validator: ConfigValidator):
        """Should fail with invalid base_url"""
        result = validator.validate({"base_url": "localhost:9200"})
        assert result.valid is False
        assert any(e.field == "base_url" for e in result.errors)

    def test_validate_negative_timeout(self, validator: ConfigValidator):
        result = validator.validate({"timeout": -1000})
        assert result.valid is False
        assert any(e.field == "timeout" for e in result.errors)

    def test_validate_timeout_too_high(self, validator: ConfigValidator):
        result = validator.validate({"timeout": 600001})
        assert result.valid is False
        assert any(
            e.field == "timeout" and "600000ms" in e.message
            for e in result.errors
        )

    def test_validate_non_integer_timeout(self, validator: ConfigValidator):
        """Should reject timeouts that could not be parsed from the environment"""
        result = validator.validate({"timeout": "soon"})
        assert result.valid is False

    def test_validate_username_without_password(self, validator: ConfigValidator):
        result = validator.validate({"username": "elastic"})
        assert result.valid is False
        assert any(e.field == "password" for e in result.errors)

    def test_validate_password_without_username(self, validator: ConfigValidator):
        result = validator.validate({"password": "changeme"})
        assert result.valid is False
        assert any(e.field == "username" for e in result.errors)

    @pytest.mark.parametrize(
        "missing", ["aws_access_key_id", "aws_secret_access_key", "aws_region"]
    )
    def test_validate_aws_missing_field(self, validator: ConfigValidator, aws_config: dict, missing: str):
        """Should require AWS credentials and region when signing is enabled"""
        del aws_config[missing]
        result = validator.validate(aws_config)
        assert result.valid is False
        assert any(e.field == missing for e in result.errors)

    def test_validate_aws_empty_secret_is_redacted(self, validator: ConfigValidator, aws_config: dict):
        aws_config["aws_secret_access_key"] = "  "
        result = validator.validate(aws_config)
        assert result.errors[0].value == "[REDACTED]"

    def test_validate_aws_disabled_ignores_credentials(self, validator: ConfigValidator):
        assert validator.validate({"aws_enabled": False}).valid is True

    def test_validate_or_raise_invalid(self, validator: ConfigValidator):
        """Should raise ValidationError with invalid configuration"""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_or_raise({"base_url": "ftp://example.com"})
        assert exc_info.value.field == "base_url"

    def test_validate_or_raise_lists_every_error(self, validator: ConfigValidator):
        """Should carry each failing field in the error details"""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_or_raise({"base_url": "ftp://example.com", "timeout": 0})

        fields = [e["field"] for e in exc_info.value.details["errors"]]
        assert fields == ["base_url", "timeout"]


class TestConfigLoader:
    """Tests for ConfigLoader"""

    @pytest.fixture
    def loader(self) -> ConfigLoader:
        return ConfigLoader()

    @pytest.fixture
    def clean_env(self, monkeypatch):
        for name in list(os.environ):
            if name.startswith("ELASTIC_"):
                monkeypatch.delenv(name)

    def test_from_dict(self, loader: ConfigLoader):
        """Should return a copy of the configuration"""
        config = {"base_url": "http://es:9200"}
        result = loader.from_dict(config)
        assert result == config
        assert result is not config

    def test_from_environment(self, loader: ConfigLoader, clean_env, monkeypatch):
        """Should load configuration from environment variables"""
        monkeypatch.setenv("ELASTIC_BASE_URL", "https://es.example.com")
        monkeypatch.setenv("ELASTIC_TIMEOUT", "60000")
        monkeypatch.setenv("ELASTIC_USERNAME", "elastic")
        monkeypatch.setenv("ELASTIC_PASSWORD", "changeme")
        monkeypatch.setenv("ELASTIC_AWS_REGION", "eu-west-1")

        result = loader.from_environment()

        assert result == {
            "base_url": "https://es.example.com",
            "timeout": 60000,
            "username": "elastic",
            "password": "changeme",
            "aws_region": "eu-west-1",
        }

    def test_from_environment_boolean_parsing(self, loader: ConfigLoader, clean_env, monkeypatch):
        """Should parse boolean values correctly"""
        monkeypatch.setenv("ELASTIC_AWS_ENABLED", "true")
        assert loader.from_environment()["aws_enabled"] is True

        monkeypatch.setenv("ELASTIC_AWS_ENABLED", "1")
        assert loader.from_environment()["aws_enabled"] is True

        monkeypatch.setenv("ELASTIC_AWS_ENABLED", "false")
        assert loader.from_environment()["aws_enabled"] is False

    def test_from_environment_ignores_empty(self, loader: ConfigLoader, clean_env, monkeypatch):
        monkeypatch.setenv("ELASTIC_BASE_URL", "")
        assert loader.from_environment() == {}

    def test_merge(self, loader: ConfigLoader):
        """Should merge multiple configurations with priority"""
        base = {"base_url": "http://a:9200", "timeout": 1000}
        override = {"base_url": "http://b:9200", "username": "elastic"}

        result = loader.merge(base, override)

        assert result == {
            "base_url": "http://b:9200",
            "timeout": 1000,
            "username": "elastic",
        }

    def test_merge_filters_none(self, loader: ConfigLoader):
        """Should not include None values from overrides"""
        result = loader.merge({"timeout": 30000}, {"timeout": None})
        assert result["timeout"] == 30000

    def test_resolve_applies_defaults(self, loader: ConfigLoader):
        """Should apply default values"""
        result = loader.resolve({})

        assert result.base_url == ConfigDefaults.BASE_URL
        assert result.timeout == ConfigDefaults.TIMEOUT
        assert result.aws_enabled is ConfigDefaults.AWS_ENABLED
        assert result.aws_service == ConfigDefaults.AWS_SERVICE
        assert result.basic_auth is None

    def test_resolve_invalid(self, loader: ConfigLoader):
        with pytest.raises(ValidationError):
            loader.resolve({"aws_enabled": True})

    def test_from_file(self, loader: ConfigLoader):
        """Should load configuration from JSON file"""
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".json", delete=False
        ) as f:
            json.dump({"base_url": "http://es:9200", "timeout": 5000}, f)
            f.flush()

        try:
            result = loader.from_file(f.name)
            assert result == {"base_url": "http://es:9200", "timeout": 5000}
        finally:
            os.unlink(f.name)

    def test_from_file_not_found(self, loader: ConfigLoader):
        """Should raise error for missing file"""
        with pytest.raises(ConfigError) as exc_info:
            loader.from_file("/nonexistent/path.json")

        assert exc_info.value.code == "CONFIG_FILE_NOT_FOUND"

    def test_from_file_invalid_json(self, loader: ConfigLoader, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            loader.from_file(path)

        assert exc_info.value.code == "CONFIG_PARSE_ERROR"

    def test_from_file_not_an_object(self, loader: ConfigLoader, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigError):
            loader.from_file(path)

    def test_load_priority(self, loader: ConfigLoader, clean_env, monkeypatch, tmp_path: Path):
        """Should let environment override file and programmatic config override both"""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"base_url": "http://file:9200", "timeout": 1000}), encoding="utf-8")
        monkeypatch.setenv("ELASTIC_BASE_URL", "http://env:9200")
        monkeypatch.setenv("ELASTIC_TIMEOUT", "2000")

        result = loader.load(file=path, config={"timeout": 3000})

        assert result.base_url == "http://env:9200"
        assert result.timeout == 3000

    def test_load_without_env(self, loader: ConfigLoader, monkeypatch):
        monkeypatch.setenv("ELASTIC_BASE_URL", "http://env:9200")
        result = loader.load(config={"username": "elastic", "password": "changeme"}, env=False)

        assert result.base_url == ConfigDefaults.BASE_URL
        assert result.basic_auth == ("elastic", "changeme")

    def test_create_template(self, loader: ConfigLoader):
        """Should create template configuration file"""
        with tempfile.TemporaryDirectory() as tmpdir:
            template_path = Path(tmpdir) / "config" / "template.json"
            loader.create_template(template_path)

            assert template_path.exists()

            with open(template_path) as f:
                template = json.load(f)

            assert template["base_url"] == ConfigDefaults.BASE_URL
            assert "aws_enabled" in template
            assert loader.resolve(loader.merge(template)).timeout == ConfigDefaults.TIMEOUT


class TestElasticConfig:
    """Tests for ElasticConfig Pydantic model"""

    def test_defaults(self):
        config = ElasticConfig()
        assert config.base_url == "http://localhost:9200"
        assert config.timeout == 30000
        assert config.timeout_seconds == 30.0
        assert config.aws_enabled is False

    def test_trailing_slash_removed(self):
        assert ElasticConfig(base_url="http://es:9200/").base_url == "http://es:9200"

    def test_basic_auth_pair(self):
        config = ElasticConfig(username="elastic", password="changeme")
        assert config.basic_auth == ("elastic", "changeme")

    def test_invalid_base_url(self):
        """Should reject invalid base_url"""
        with pytest.raises(ValueError):
            ElasticConfig(base_url="not-a-url")

    def test_invalid_timeout(self):
        with pytest.raises(ValueError):
            ElasticConfig(timeout=0)

    def test_unpaired_credentials(self):
        with pytest.raises(ValueError):
            ElasticConfig(username="elastic")
