"""Configuration for strict markup parsing.

This module provides an immutable configuration object that controls the
synthesized root element, file decoding, logging and metrics collection.
"""

import json
import string
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Optional

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_NAME_CHARACTERS = frozenset(string.ascii_letters + string.digits)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Configuration shared by the parser, API and CLI layers.

    Thread-safe due to frozen dataclass implementation.
    """

    # Tag of the element synthesized around zero or several top-level nodes
    root_tag: str = "html"

    # Decoding used for bytes and file input
    encoding: str = "utf-8"

    # Logging and metrics
    logging_level: str = "INFO"
    preview_length: int = 100
    track_memory: bool = True

    # Metadata
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the configuration."""
        if not self.root_tag or not set(self.root_tag) <= _NAME_CHARACTERS:
            raise ConfigValidationError(
                f"root_tag must be a non-empty ASCII alphanumeric name, "
                f"got {self.root_tag!r}",
                field_name="root_tag",
            )
        if not self.encoding:
            raise ConfigValidationError(
                "encoding cannot be empty", field_name="encoding"
            )
        try:
            "".encode(self.encoding)
        except LookupError as e:
            raise ConfigValidationError(
                f"Unknown encoding: {self.encoding}",
                field_name="encoding",
                suggestions=["utf-8", "latin-1"],
            ) from e
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {VALID_LOGGING_LEVELS}",
                field_name="logging_level",
            )
        if self.preview_length <= 0:
            raise ConfigValidationError(
                "preview_length must be > 0", field_name="preview_length"
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig()
            >>> config.override(root_tag="body").root_tag
            'body'
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        data = json.loads(json_str)
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "ParserConfig":
        """Create the default configuration."""
        return cls(name="default")

    @classmethod
    def quiet(cls) -> "ParserConfig":
        """Create a configuration that only logs errors and skips memory sampling."""
        return cls(
            logging_level="ERROR",
            track_memory=False,
            name="quiet",
            description="Errors only, no process memory sampling",
        )
