"""
Configuration for the accessor generator pipeline.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass
class FormatterConfig:
    """Configuration for post-processing generated Python modules."""

    # Whether formatting is enabled
    enabled: bool = False

    # Line length for the formatter
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"


@dataclass
class GeneratorConfig:
    """Configuration options for accessor generation."""

    # Expression for the injected store handle (None = backend default,
    # `UserDefaults.standard` for Swift, `self.store` for Python)
    store_expression: str | None = None

    # Attribute that marks declarations for generation
    attribute_name: str = "ObservableUserDefault"

    # Add generation comment at top of module output
    add_generation_comment: bool = True

    # Use from __future__ import annotations (Python module output)
    use_future_annotations: bool = True

    # Indentation unit for accessors nested in a module
    indent: str = "    "

    # Post-processing for Python module output
    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return asdict(self)
