"""
Syntax node definitions for property declarations.

These nodes represent the parsed shape of a declaration before any
validation or classification. The set of variants is closed: every
declaration is either a VariableDecl or an OtherDecl, every pattern is an
IdentifierPattern or an OtherPattern, and every type annotation is a
PlainType or an OptionalType.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SyntaxNode:
    """Base class for all syntax nodes."""

    # Source text the node was parsed from (for messages and output)
    source_text: str = ""


@dataclass
class Attribute(SyntaxNode):
    """An attribute such as `@ObservableUserDefault` or `@ObservationIgnored`."""

    name: str = ""

    # None when written without parentheses, otherwise the raw argument texts
    arguments: list[str] | None = None


# Type annotations


@dataclass
class TypeNode(SyntaxNode):
    """Base class for type annotations."""

    def description(self) -> str:
        """Textual form of the type, trimmed."""
        return self.source_text.strip()


@dataclass
class PlainType(TypeNode):
    """Any type that is not wrapped as Optional (e.g. `Int`, `[String]`)."""

    name: str = ""

    def description(self) -> str:
        return self.name.strip()


@dataclass
class OptionalType(TypeNode):
    """An Optional-wrapped type, written `T?`."""

    wrapped: TypeNode | None = None


# Patterns


@dataclass
class PatternNode(SyntaxNode):
    """Base class for binding patterns."""


@dataclass
class IdentifierPattern(PatternNode):
    """A simple identifier pattern, e.g. `count`."""

    identifier: str = ""


@dataclass
class OtherPattern(PatternNode):
    """Any destructuring pattern (tuples, wildcards...)."""


# Bindings and declarations


@dataclass
class PatternBinding(SyntaxNode):
    """One `pattern: Type = initializer { accessors }` entry of a declaration."""

    pattern: PatternNode | None = None
    type_annotation: TypeNode | None = None
    initializer: str | None = None
    accessor_block: str | None = None


@dataclass
class DeclNode(SyntaxNode):
    """Base class for declarations."""

    attributes: list[Attribute] = field(default_factory=list)

    def attribute(self, name: str) -> Attribute | None:
        """Return the first attribute with the given name, if any."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None


@dataclass
class VariableDecl(DeclNode):
    """A `var` or `let` declaration."""

    binding_specifier: str = "var"
    bindings: list[PatternBinding] = field(default_factory=list)


@dataclass
class OtherDecl(DeclNode):
    """Any declaration that is not a variable declaration (func, struct...)."""

    keyword: str = ""


@dataclass
class PropertyDeclaration:
    """Structured description of a single stored property.

    Used by callers that already know the shape of the declaration and do
    not want to go through source text. Lowered to a VariableDecl with
    `to_node()`; `binding_count` copies of the binding are produced so the
    validator sees the same shape it would have parsed.
    """

    name: str
    declared_type: TypeNode | None = None
    initializer: str | None = None
    has_accessor_block: bool = False
    binding_count: int = 1
    is_variable: bool = True

    def to_node(self) -> VariableDecl:
        binding = PatternBinding(
            pattern=IdentifierPattern(source_text=self.name, identifier=self.name),
            type_annotation=self.declared_type,
            initializer=self.initializer,
            accessor_block="{ get }" if self.has_accessor_block else None,
        )
        return VariableDecl(
            binding_specifier="var" if self.is_variable else "let",
            bindings=[binding] * self.binding_count,
        )
