"""
Swift accessor generation backend.

Generates `get`/`set` accessor blocks that back a property of an
`@Observable` class with `UserDefaults`.
"""

from __future__ import annotations

import textwrap

from ..analyzer.ir_nodes import ClassificationResult, GeneratedAccessorPair
from .base import AccessorBackend


class SwiftBackend(AccessorBackend):
    """Swift accessor generation backend."""

    TEMPLATE_LANG = "swift"
    FILE_EXTENSION = "swift"
    DEFAULT_STORE_EXPRESSION = "UserDefaults.standard"

    def __init__(self, config):
        super().__init__(config)
        self.property_template = self.jinja_env.get_template("property.swift.jinja2")

    def translate_type(self, result: ClassificationResult) -> str:
        return f"{result.base_type}?" if result.is_optional else result.base_type

    def format_default_value(self, expression: str, result: ClassificationResult) -> str:
        # Initializers are already Swift expressions
        return expression

    def generate_module(
        self,
        entries: list[tuple[str, GeneratedAccessorPair]],
        name: str,
        generation_comment: str = "",
        imports: list[str] | tuple[str, ...] = (),
        **kwargs,
    ) -> str:
        """Splice each accessor pair into its declaration as an accessor block."""
        prefix = self.prefix_template.render(
            generation_comment=generation_comment,
            required_imports=sorted({line.strip() for line in imports}),
        )
        parts = [prefix.strip()]
        for declaration, pair in entries:
            accessors = textwrap.indent(f"{pair.getter}\n{pair.setter}", self.config.indent)
            parts.append(self.property_template.render(declaration=declaration.strip(), accessors=accessors))
        return "\n\n".join(part for part in parts if part) + "\n"
