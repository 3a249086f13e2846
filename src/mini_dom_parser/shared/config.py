"""Configuration for markup parsing.

This module provides an immutable configuration object controlling comment
scanning, the synthetic root element, resource limits and logging, together
with JSON round-tripping and named presets.
"""

import json
from dataclasses import dataclass, fields, replace
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import ConfigValidationError

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CommentMode(Enum):
    """How the body of a ``<!-- ... -->`` comment is scanned."""

    TERMINATOR = auto()     # Body runs up to the first "-->"
    FIRST_HYPHEN = auto()   # Body stops at the first "-", which must start "-->"


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for the markup parser and its API layer.

    Thread-safe due to frozen dataclass implementation.
    """

    comment_mode: CommentMode = CommentMode.TERMINATOR
    synthetic_root_tag: str = "html"
    max_depth: int = 256
    max_input_size: Optional[int] = None

    correlation_id: Optional[str] = None
    enable_diagnostics: bool = True
    logging_level: str = "INFO"

    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if not isinstance(self.comment_mode, CommentMode):
            raise ConfigValidationError(
                f"comment_mode must be a CommentMode, got {self.comment_mode!r}",
                field_name="comment_mode",
                suggestions=[mode.name for mode in CommentMode],
            )
        if not self.synthetic_root_tag or not (
            self.synthetic_root_tag.isascii() and self.synthetic_root_tag.isalnum()
        ):
            raise ConfigValidationError(
                "synthetic_root_tag must be a non-empty ASCII alphanumeric name",
                field_name="synthetic_root_tag",
            )
        if self.max_depth <= 0:
            raise ConfigValidationError(
                "max_depth must be > 0", field_name="max_depth"
            )
        if self.max_input_size is not None and self.max_input_size <= 0:
            raise ConfigValidationError(
                "max_input_size must be > 0 or None", field_name="max_input_size"
            )
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {VALID_LOGGING_LEVELS}",
                field_name="logging_level",
                suggestions=VALID_LOGGING_LEVELS,
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig()
            >>> config.override(comment_mode=CommentMode.FIRST_HYPHEN).comment_mode
            <CommentMode.FIRST_HYPHEN: 2>
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.name if isinstance(value, Enum) else value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected; ``comment_mode`` may be given by name.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )

        values = dict(data)
        mode = values.get("comment_mode")
        if isinstance(mode, str):
            try:
                values["comment_mode"] = CommentMode[mode.upper()]
            except KeyError as e:
                raise ConfigValidationError(
                    f"Unknown comment_mode: {mode}",
                    field_name="comment_mode",
                    suggestions=[m.name for m in CommentMode],
                ) from e
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ParserConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigValidationError(f"Cannot read configuration file {path}: {e}") from e
        return cls.from_json(text)

    # Preset factory methods
    @classmethod
    def default(cls) -> "ParserConfig":
        """Create the default configuration."""
        return cls(name="default")

    @classmethod
    def compatible(cls) -> "ParserConfig":
        """Create configuration that ends comment bodies at the first hyphen."""
        return cls(comment_mode=CommentMode.FIRST_HYPHEN, name="compatible")

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Create configuration with tight resource limits for untrusted input."""
        return cls(max_depth=64, max_input_size=1_000_000, name="strict")

    @classmethod
    def preset(cls, name: str) -> "ParserConfig":
        """Look up a preset configuration by name."""
        presets = {
            "default": cls.default,
            "compatible": cls.compatible,
            "strict": cls.strict,
        }
        if name not in presets:
            raise ConfigValidationError(
                f"Unknown preset: {name}",
                field_name="name",
                suggestions=sorted(presets),
            )
        return presets[name]()
