"""
Declaration parser that builds syntax nodes.

Phase 1 of the pipeline: turn the source text of a single declaration
(`@ObservableUserDefault var count: Int = 0`) into syntax nodes without
judging whether accessors can be generated for it.
"""

from __future__ import annotations

import logging
import re

from ...errors import DeclarationSyntaxError
from .nodes import (
    Attribute,
    DeclNode,
    IdentifierPattern,
    OptionalType,
    OtherDecl,
    OtherPattern,
    PatternBinding,
    PlainType,
    TypeNode,
    VariableDecl,
)

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^(?:[A-Za-z_][A-Za-z0-9_]*|`[^`]+`)$")
_ATTRIBUTE = re.compile(r"@([A-Za-z_][A-Za-z0-9_.]*)")
_WORD = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}


class DeclarationParser:
    """Parses declaration source text into syntax nodes."""

    # Declaration modifiers that may precede the binding specifier
    MODIFIERS = {
        "public",
        "private",
        "fileprivate",
        "internal",
        "open",
        "package",
        "static",
        "final",
        "lazy",
        "weak",
        "unowned",
        "override",
        "nonisolated",
        "dynamic",
        "required",
        "convenience",
        "mutating",
    }

    # Keywords that start an accessor block rather than a trailing closure
    ACCESSOR_KEYWORDS = ("get", "set", "willSet", "didSet", "_read", "_modify", "init")

    def parse(self, source: str) -> DeclNode:
        """
        Parse a single declaration.

        Args:
            source: Declaration source text, possibly spanning several lines

        Returns:
            VariableDecl for `var`/`let` declarations, OtherDecl otherwise
        """
        text = source.strip()
        if not text:
            raise DeclarationSyntaxError("Empty declaration")

        attributes, pos = self._parse_attributes(text)
        keyword, pos = self._parse_keyword(text, pos)

        if keyword not in ("var", "let"):
            logger.debug("Parsed non-variable declaration %r", keyword)
            return OtherDecl(source_text=text, attributes=attributes, keyword=keyword)

        bindings = [self._parse_binding(segment) for segment in self._split_bindings(text[pos:])]
        if not bindings:
            raise DeclarationSyntaxError("Variable declaration has no bindings", text)

        logger.debug("Parsed %s declaration with %d binding(s)", keyword, len(bindings))
        return VariableDecl(
            source_text=text,
            attributes=attributes,
            binding_specifier=keyword,
            bindings=bindings,
        )

    def parse_type(self, text: str) -> TypeNode:
        """Parse a type annotation.

        Only the `T?` sugar makes an optional type. `Optional<T>` is kept as a
        plain generic type and classified like any other non-optional type.
        """
        text = text.strip()
        if not text:
            raise DeclarationSyntaxError("Empty type annotation")

        if text.endswith("?"):
            return OptionalType(source_text=text, wrapped=self.parse_type(text[:-1]))

        return PlainType(source_text=text, name=text)

    # Declaration head

    def _parse_attributes(self, text: str) -> tuple[list[Attribute], int]:
        attributes = []
        pos = _skip_space(text, 0)
        while pos < len(text) and text[pos] == "@":
            match = _ATTRIBUTE.match(text, pos)
            if not match:
                raise DeclarationSyntaxError("Malformed attribute", text)
            end = match.end()
            arguments = None
            if end < len(text) and text[end] == "(":
                close = _matching(text, end)
                inner = text[end + 1 : close]
                arguments = [arg.strip() for arg in _split_top_level(inner, ",") if arg.strip()]
                end = close + 1
            attributes.append(Attribute(source_text=text[pos:end], name=match.group(1), arguments=arguments))
            pos = _skip_space(text, end)
        return attributes, pos

    def _parse_keyword(self, text: str, pos: int) -> tuple[str, int]:
        while True:
            match = _WORD.match(text, pos)
            if not match:
                raise DeclarationSyntaxError("Expected a declaration keyword", text)
            word = match.group(0)
            pos = match.end()
            # Access modifiers may carry a detail, e.g. `private(set)`
            if pos < len(text) and text[pos] == "(" and word in self.MODIFIERS:
                pos = _matching(text, pos) + 1
            pos = _skip_space(text, pos)
            if word not in self.MODIFIERS:
                return word, pos

    # Bindings

    def _split_bindings(self, text: str) -> list[str]:
        """Split `a: Int = 1, b: String` into one segment per binding."""
        segments = []
        depth = 0
        angle = 0
        in_initializer = False
        start = 0
        for i, char in _scan(text):
            if char in _OPENERS:
                depth += 1
            elif char in _CLOSERS:
                depth -= 1
            elif depth == 0 and not in_initializer:
                if char == "<":
                    angle += 1
                elif char == ">" and text[i - 1] != "-":
                    angle -= 1
                elif char == "=" and angle == 0:
                    in_initializer = True
            if char == "," and depth == 0 and angle == 0:
                segments.append(text[start:i])
                start = i + 1
                in_initializer = False
            if depth < 0:
                break
        if depth != 0:
            raise DeclarationSyntaxError("Unbalanced brackets", text)
        segments.append(text[start:])
        return [segment.strip() for segment in segments if segment.strip()]

    def _parse_binding(self, segment: str) -> PatternBinding:
        accessor_block = None
        body = segment
        if body.endswith("}"):
            open_index = _matching_open(body, len(body) - 1)
            head = body[:open_index].rstrip()
            inner = body[open_index + 1 : -1].strip()
            if self._is_accessor_block(head, inner):
                accessor_block = body[open_index:]
                body = head

        pattern_text, type_text, initializer = self._split_binding_parts(body)
        if not pattern_text:
            raise DeclarationSyntaxError("Missing binding pattern", segment)

        pattern = (
            IdentifierPattern(source_text=pattern_text, identifier=pattern_text.strip("`"))
            if _IDENTIFIER.match(pattern_text)
            else OtherPattern(source_text=pattern_text)
        )

        if initializer is not None and not initializer:
            raise DeclarationSyntaxError("Missing initializer expression", segment)

        return PatternBinding(
            source_text=segment,
            pattern=pattern,
            type_annotation=self.parse_type(type_text) if type_text is not None else None,
            initializer=initializer,
            accessor_block=accessor_block,
        )

    def _is_accessor_block(self, head: str, inner: str) -> bool:
        # `var x: Int = makeValue { ... }` is a trailing closure, not accessors,
        # unless the block opens with an accessor keyword.
        if len(_split_top_level(head, "=", limit=1)) == 1:
            return True
        match = _WORD.match(inner)
        return bool(match) and match.group(0) in self.ACCESSOR_KEYWORDS

    def _split_binding_parts(self, body: str) -> tuple[str, str | None, str | None]:
        """Return (pattern, type annotation, initializer) texts of one binding."""
        parts = _split_top_level(body, "=", limit=1)
        declaration = parts[0]
        initializer = parts[1].strip() if len(parts) > 1 else None

        typed = _split_top_level(declaration, ":", limit=1)
        pattern_text = typed[0].strip()
        type_text = typed[1].strip() if len(typed) > 1 else None
        return pattern_text, type_text, initializer


# Scanning helpers


def _scan(text: str):
    """Yield (index, char) outside of string literals."""
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char == '"':
            i = _skip_string(text, i)
            continue
        yield i, char
        i += 1


def _skip_string(text: str, start: int) -> int:
    """Return the index just past the string literal starting at `start`."""
    if text.startswith('"""', start):
        end = text.find('"""', start + 3)
        if end == -1:
            raise DeclarationSyntaxError("Unterminated string literal", text)
        return end + 3
    i = start + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == '"':
            return i + 1
        i += 1
    raise DeclarationSyntaxError("Unterminated string literal", text)


def _split_top_level(text: str, separator: str, limit: int = -1) -> list[str]:
    """Split on `separator` outside brackets and string literals.

    `=` is not treated as a separator when it is part of `==`, `!=`, `<=`,
    `>=` or `->`-like operators.
    """
    parts = []
    depth = 0
    start = 0
    for i, char in _scan(text):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
        elif char == separator and depth == 0 and limit != 0:
            if separator == "=" and _is_operator_equals(text, i):
                continue
            parts.append(text[start:i])
            start = i + 1
            limit -= 1
    parts.append(text[start:])
    return parts


def _is_operator_equals(text: str, i: int) -> bool:
    before = text[i - 1] if i > 0 else ""
    after = text[i + 1] if i + 1 < len(text) else ""
    return after == "=" or before in "=!<>"


def _matching(text: str, open_index: int) -> int:
    """Index of the bracket closing the one at `open_index`."""
    closer = _OPENERS[text[open_index]]
    depth = 0
    for i, char in _scan(text[open_index:]):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if depth == 0:
                if char != closer:
                    break
                return open_index + i
    raise DeclarationSyntaxError("Unbalanced brackets", text)


def _matching_open(text: str, close_index: int) -> int:
    """Index of the `{` opening the block that ends at `close_index`."""
    depth = 0
    opener = -1
    for i, char in _scan(text[: close_index + 1]):
        if char == "{":
            if depth == 0:
                opener = i
            depth += 1
        elif char == "}":
            depth -= 1
    if depth != 0 or opener == -1:
        raise DeclarationSyntaxError("Unbalanced braces", text)
    return opener


def _skip_space(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos
