"""Tests for the configuration system."""

import json

import pytest

from mini_dom_parser.shared.config import CommentMode, ParserConfig
from mini_dom_parser.shared.errors import ConfigError, ConfigValidationError


class TestParserConfig:
    """Test suite for ParserConfig."""

    def test_default_configuration(self):
        """Test default configuration values."""
        config = ParserConfig()

        assert config.comment_mode is CommentMode.TERMINATOR
        assert config.synthetic_root_tag == "html"
        assert config.max_depth == 256
        assert config.max_input_size is None
        assert config.correlation_id is None
        assert config.enable_diagnostics is True
        assert config.logging_level == "INFO"

    def test_config_is_frozen(self):
        """Test configuration objects are immutable."""
        config = ParserConfig()
        with pytest.raises(AttributeError):
            config.max_depth = 10

    @pytest.mark.parametrize("kwargs, field_name", [
        ({"max_depth": 0}, "max_depth"),
        ({"max_input_size": 0}, "max_input_size"),
        ({"synthetic_root_tag": ""}, "synthetic_root_tag"),
        ({"synthetic_root_tag": "my-root"}, "synthetic_root_tag"),
        ({"logging_level": "LOUD"}, "logging_level"),
        ({"comment_mode": "TERMINATOR"}, "comment_mode"),
    ])
    def test_validation_failures(self, kwargs, field_name):
        """Test invalid values raise ConfigValidationError."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ParserConfig(**kwargs)
        assert exc_info.value.field_name == field_name
        assert isinstance(exc_info.value, ConfigError)

    def test_override(self):
        """Test overrides produce a new configuration."""
        config = ParserConfig()
        new_config = config.override(comment_mode=CommentMode.FIRST_HYPHEN, max_depth=10)

        assert new_config.comment_mode is CommentMode.FIRST_HYPHEN
        assert new_config.max_depth == 10
        assert config.comment_mode is CommentMode.TERMINATOR

    def test_override_unknown_field(self):
        """Test unknown override fields are rejected with suggestions."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration fields") as exc_info:
            ParserConfig().override(max_dept=10)
        assert "max_depth" in exc_info.value.suggestions

    def test_override_is_validated(self):
        """Test overridden values are validated."""
        with pytest.raises(ConfigValidationError):
            ParserConfig().override(max_depth=-1)


class TestSerialization:
    """Test configuration round-tripping."""

    def test_to_dict(self):
        """Test enums serialize by name."""
        data = ParserConfig.compatible().to_dict()
        assert data["comment_mode"] == "FIRST_HYPHEN"
        assert data["name"] == "compatible"

    def test_json_round_trip(self):
        """Test configurations survive JSON."""
        config = ParserConfig(max_depth=12, max_input_size=100, correlation_id="abc")
        restored = ParserConfig.from_json(config.to_json())
        assert restored == config

    def test_from_dict_lowercase_comment_mode(self):
        """Test comment modes are looked up case-insensitively."""
        config = ParserConfig.from_dict({"comment_mode": "first_hyphen"})
        assert config.comment_mode is CommentMode.FIRST_HYPHEN

    def test_from_dict_unknown_comment_mode(self):
        """Test unknown comment modes are rejected."""
        with pytest.raises(ConfigValidationError, match="Unknown comment_mode"):
            ParserConfig.from_dict({"comment_mode": "sometimes"})

    def test_from_dict_unknown_key(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ParserConfig.from_dict({"colour": "blue"})
        assert exc_info.value.field_name == "colour"

    def test_from_json_invalid(self):
        """Test malformed and non-object JSON."""
        with pytest.raises(ConfigValidationError, match="Invalid configuration JSON"):
            ParserConfig.from_json("{not json")
        with pytest.raises(ConfigValidationError, match="must be an object"):
            ParserConfig.from_json("[1, 2]")

    def test_from_file(self, tmp_path):
        """Test loading from a JSON file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_depth": 5, "comment_mode": "FIRST_HYPHEN"}))

        config = ParserConfig.from_file(path)
        assert config.max_depth == 5
        assert config.comment_mode is CommentMode.FIRST_HYPHEN

    def test_from_missing_file(self, tmp_path):
        """Test a missing file raises a configuration error."""
        with pytest.raises(ConfigValidationError, match="Cannot read configuration file"):
            ParserConfig.from_file(tmp_path / "missing.json")


class TestPresets:
    """Test preset factory methods."""

    def test_presets(self):
        """Test each preset's distinguishing settings."""
        assert ParserConfig.default().name == "default"
        assert ParserConfig.compatible().comment_mode is CommentMode.FIRST_HYPHEN
        strict = ParserConfig.strict()
        assert strict.max_depth == 64
        assert strict.max_input_size == 1_000_000

    def test_preset_lookup(self):
        """Test looking presets up by name."""
        assert ParserConfig.preset("strict") == ParserConfig.strict()
        with pytest.raises(ConfigValidationError, match="Unknown preset"):
            ParserConfig.preset("fastest")
