"""
Base class for accessor generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ..analyzer.ir_nodes import ClassificationResult, GeneratedAccessorPair
from ..config import GeneratorConfig


class AccessorBackend(ABC):
    """Abstract base class for accessor generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Store handle used when the config does not name one
    DEFAULT_STORE_EXPRESSION: str = ""

    def __init__(self, config: GeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            undefined=jinja2.StrictUndefined,
        )

        ext = self.FILE_EXTENSION
        self.direct_templates = (
            self.jinja_env.get_template(f"get_direct.{ext}.jinja2"),
            self.jinja_env.get_template(f"set_direct.{ext}.jinja2"),
        )
        self.encoded_templates = (
            self.jinja_env.get_template(f"get_encoded.{ext}.jinja2"),
            self.jinja_env.get_template(f"set_encoded.{ext}.jinja2"),
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{ext}.jinja2")

    @property
    def store_expression(self) -> str:
        return self.config.store_expression or self.DEFAULT_STORE_EXPRESSION

    def generate_accessors(self, result: ClassificationResult) -> GeneratedAccessorPair:
        """
        Render the getter/setter pair for a classified property.

        Args:
            result: The classification of the property

        Returns:
            The generated accessor pair
        """
        context = self._prepare_context(result)
        getter, setter = self.direct_templates if result.strategy.is_direct else self.encoded_templates
        return GeneratedAccessorPair(getter=getter.render(context), setter=setter.render(context))

    def _prepare_context(self, result: ClassificationResult) -> dict[str, Any]:
        """
        Prepare the template context for a property.

        These are the only values the accessor templates interpolate.
        """
        return {
            "name": result.property_name,
            "key": result.store_key,
            "base_type": self.translate_base_type(result.base_type),
            "annotation": self.translate_type(result),
            "default": self.format_default_value(result.default_value_expression, result),
            "store": self.store_expression,
        }

    def _get_comment_prefix(self) -> str:
        """Get the comment prefix for the language."""
        return "#" if self.TEMPLATE_LANG == "python" else "//"

    def translate_base_type(self, base_type: str) -> str:
        """Spell a declared base type the way generated code refers to it."""
        return base_type

    @abstractmethod
    def translate_type(self, result: ClassificationResult) -> str:
        """
        Translate the property type to a language-specific type annotation.

        Args:
            result: The classification of the property

        Returns:
            Language-specific type string
        """

    @abstractmethod
    def format_default_value(self, expression: str, result: ClassificationResult) -> str:
        """
        Format the default value expression for the target language.

        Args:
            expression: The default value expression from the classifier
            result: The classification of the property

        Returns:
            Formatted default value string
        """

    @abstractmethod
    def generate_module(self, entries: list[tuple[str, GeneratedAccessorPair]], name: str, **kwargs) -> str:
        """
        Assemble a full source module.

        Args:
            entries: (declaration source text, accessor pair) for each property
            name: Module/class name

        Returns:
            Generated source code
        """
