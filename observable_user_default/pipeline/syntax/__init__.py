"""
Syntax module.

Contains the syntax node definitions and the parser for property declarations.
"""

from __future__ import annotations

from .nodes import (
    Attribute,
    DeclNode,
    IdentifierPattern,
    OptionalType,
    OtherDecl,
    OtherPattern,
    PatternBinding,
    PatternNode,
    PlainType,
    PropertyDeclaration,
    SyntaxNode,
    TypeNode,
    VariableDecl,
)
from .parser import DeclarationParser

__all__ = [
    "SyntaxNode",
    "Attribute",
    "TypeNode",
    "PlainType",
    "OptionalType",
    "PatternNode",
    "IdentifierPattern",
    "OtherPattern",
    "PatternBinding",
    "DeclNode",
    "VariableDecl",
    "OtherDecl",
    "PropertyDeclaration",
    "DeclarationParser",
]
