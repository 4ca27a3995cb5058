"""Configuration classes for the DOM analyzer.

This module provides configuration objects for the parser collaborator, the
tree renderer, the web front end and process-wide settings, enabling fine-tuned
control over analysis behavior.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

# Background ramp cycled by nesting depth
DEFAULT_PALETTE: Tuple[str, ...] = (
    "bg-blue-50", "bg-blue-100", "bg-blue-200",
    "bg-green-50", "bg-green-100", "bg-green-200",
    "bg-purple-50", "bg-purple-100", "bg-purple-200",
)

KNOWN_BACKENDS = ("html.parser", "lxml", "lxml-native")
VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_COMPONENTS = ["parsing", "render", "web", "global_"]


@dataclass(frozen=True)
class ParsingConfig:
    """Configuration for the parser collaborator."""

    backend: str = "html.parser"
    max_input_size_bytes: Optional[int] = None
    max_nesting_depth: Optional[int] = 200
    reject_empty_input: bool = True

    def __post_init__(self) -> None:
        """Validate parsing configuration."""
        if not self.backend:
            raise ValueError("backend cannot be empty")
        if self.max_input_size_bytes is not None and self.max_input_size_bytes <= 0:
            raise ValueError("max_input_size_bytes must be > 0 or None")
        if self.max_nesting_depth is not None and self.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be > 0 or None")


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for the tree renderer and its formatters."""

    palette: Tuple[str, ...] = DEFAULT_PALETTE
    attribute_style: str = "attr-chip"
    indent_step: int = 4
    text_label: str = "Text"

    def __post_init__(self) -> None:
        """Validate render configuration."""
        # JSON round trips hand us lists
        object.__setattr__(self, "palette", tuple(self.palette))
        if not self.palette:
            raise ValueError("palette must contain at least one style")
        if any(not isinstance(style, str) or not style for style in self.palette):
            raise ValueError("palette styles must be non-empty strings")
        if self.indent_step < 0:
            raise ValueError("indent_step must be >= 0")


@dataclass(frozen=True)
class WebConfig:
    """Configuration for the Flask front end."""

    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False
    title: str = "HTML/DOM Analyzer"
    max_content_length: int = 1024 * 1024

    def __post_init__(self) -> None:
        """Validate web configuration."""
        if not (0 < self.port < 65536):
            raise ValueError("port must be between 1 and 65535")
        if self.max_content_length <= 0:
            raise ValueError("max_content_length must be > 0")


@dataclass(frozen=True)
class GlobalConfig:
    """Global configuration settings that apply across all components."""

    logging_level: str = "INFO"
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {VALID_LOGGING_LEVELS}")


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
class AnalyzerConfig:
    """Complete configuration for parsing, rendering and the front ends.

    Instances are immutable; use :meth:`override` to derive a modified copy.
    """

    parsing: ParsingConfig = field(default_factory=ParsingConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    web: WebConfig = field(default_factory=WebConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete analyzer configuration."""
        try:
            for component in _COMPONENTS:
                value = getattr(self, component)
                if not isinstance(value, _COMPONENT_TYPES[component]):
                    raise ValueError(
                        f"{component} must be a {_COMPONENT_TYPES[component].__name__}"
                    )
                value.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        if (
            self.parsing.backend not in KNOWN_BACKENDS
            and not self.parsing.backend.startswith("custom:")
        ):
            raise ConfigValidationError(
                f"Unknown parsing backend {self.parsing.backend!r}",
                field_name="parsing.backend",
                suggestions=[f"Use one of {', '.join(KNOWN_BACKENDS)}",
                             "Prefix custom adapters with 'custom:'"],
            )

    def override(self, **kwargs: Any) -> "AnalyzerConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override, nested with ``component__field``

        Returns:
            New AnalyzerConfig instance with overrides applied

        Example:
            >>> config = AnalyzerConfig()
            >>> config.override(parsing__backend="lxml").parsing.backend
            'lxml'
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                # Match known prefixes first so "global___x" resolves to global_
                component = next(
                    (name for name in _COMPONENTS if key.startswith(name + "__")),
                    key.split("__", 1)[0],
                )
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component {component!r}",
                        field_name=key,
                    )
                field_name = key[len(component) + 2:]
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for component in _COMPONENTS:
                current = getattr(self, component)
                if isinstance(nested_overrides.get(component), dict):
                    new_fields[component] = replace(
                        current, **nested_overrides.pop(component)
                    )
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

        new_fields.update(nested_overrides)
        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            if isinstance(obj, (list, tuple)):
                return [_dataclass_to_dict(item) for item in obj]
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyzerConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so typos in configuration files surface early.
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be a mapping")

        field_values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in _COMPONENT_TYPES:
                component_type = _COMPONENT_TYPES[key]
                if not isinstance(value, dict):
                    raise ConfigValidationError(
                        f"{key} must be a mapping", field_name=key
                    )
                unknown = set(value) - set(component_type.__dataclass_fields__)
                if unknown:
                    raise ConfigValidationError(
                        f"Unknown {key} settings: {', '.join(sorted(unknown))}",
                        field_name=key,
                    )
                try:
                    field_values[key] = component_type(**value)
                except ValueError as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            elif key in ("name", "description"):
                field_values[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration key {key!r}", field_name=key
                )

        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "AnalyzerConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "AnalyzerConfig":
        """Load configuration from a JSON file."""
        config_path = Path(path)
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {config_path}: {e}") from e
        return cls.from_json(text)

    # Preset factory methods
    @classmethod
    def default(cls) -> "AnalyzerConfig":
        """Standard-library tree builder and the blue/green/purple palette."""
        return cls(name="default")

    @classmethod
    def lxml_backend(cls) -> "AnalyzerConfig":
        """Full-document parsing through lxml, like a browser would build it."""
        return cls(
            parsing=ParsingConfig(backend="lxml-native"),
            name="lxml_backend",
            description="Parse complete documents with lxml.html",
        )

    @classmethod
    def monochrome(cls) -> "AnalyzerConfig":
        """Two-tone palette for terminals and print output."""
        return cls(
            render=RenderConfig(palette=("bg-gray-50", "bg-gray-100")),
            name="monochrome",
            description="Alternate two grey backgrounds by depth",
        )


_COMPONENT_TYPES = {
    "parsing": ParsingConfig,
    "render": RenderConfig,
    "web": WebConfig,
    "global_": GlobalConfig,
}
