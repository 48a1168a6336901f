"""
Structural validation of annotated declarations.

Phase 2 of the pipeline: reject declarations whose shape accessors cannot be
generated for. Checks run in a fixed order and the first failure wins.
"""

from __future__ import annotations

import logging
import re

from ...errors import ArgumentError, ArgumentErrorKind, DeclarationError, DeclarationErrorKind
from ..syntax.nodes import Attribute, DeclNode, IdentifierPattern, VariableDecl
from .ir_nodes import ValidatedBinding

logger = logging.getLogger(__name__)

# `"key"` or `key: "key"`, a single-line string literal without escapes
_KEY_ARGUMENT = re.compile(r'^(?:key\s*:\s*)?"([^"\\\n]+)"$')


class DeclarationValidator:
    """Validates the shape of a declaration and extracts its single binding."""

    def __init__(self, attribute_name: str = "ObservableUserDefault"):
        self.attribute_name = attribute_name

    def validate(self, decl: DeclNode) -> ValidatedBinding:
        """
        Validate a declaration.

        Args:
            decl: Parsed declaration

        Returns:
            The single validated binding

        Raises:
            DeclarationError: if the declaration shape is not supported
            ArgumentError: if the attribute carries an unusable argument list
        """
        match decl:
            case VariableDecl(binding_specifier="var"):
                pass
            case _:
                raise DeclarationError(DeclarationErrorKind.NOT_VARIABLE_PROPERTY)

        if len(decl.bindings) != 1:
            raise DeclarationError(DeclarationErrorKind.PROPERTY_MUST_CONTAIN_ONLY_ONE_BINDING)
        binding = decl.bindings[0]

        if binding.accessor_block is not None:
            raise DeclarationError(DeclarationErrorKind.PROPERTY_MUST_HAVE_NO_ACCESSOR_BLOCK)

        match binding.pattern:
            case IdentifierPattern(identifier=identifier) if identifier:
                name = identifier
            case _:
                raise DeclarationError(DeclarationErrorKind.PROPERTY_MUST_USE_SIMPLE_PATTERN_SYNTAX)

        store_key = self._store_key(decl.attribute(self.attribute_name), name)
        logger.debug("Validated property %r (store key %r)", name, store_key)

        return ValidatedBinding(
            property_name=name,
            store_key=store_key,
            type_annotation=binding.type_annotation,
            initializer=binding.initializer,
        )

    def _store_key(self, attribute: Attribute | None, name: str) -> str:
        """Resolve the store key from the attribute argument, if any.

        `@ObservableUserDefault` keys the store by the property name and
        `@ObservableUserDefault("key")` by the given string literal.
        """
        if attribute is None or attribute.arguments is None:
            return name

        if len(attribute.arguments) != 1:
            raise ArgumentError(ArgumentErrorKind.MACRO_SHOULD_ONLY_CONTAIN_ONE_ARGUMENT)

        match = _KEY_ARGUMENT.match(attribute.arguments[0])
        if not match:
            raise ArgumentError(ArgumentErrorKind.UNABLE_TO_EXTRACT_REQUIRED_VALUES_FROM_ARGUMENT)
        return match.group(1)
