"""
Type classification.

Phase 3 of the pipeline: decide the storage strategy for a validated binding
and extract the base type and the default value expression.
"""

from __future__ import annotations

import logging

from ...errors import ArgumentError, ArgumentErrorKind
from ..syntax.nodes import OptionalType, PlainType, TypeNode
from .ir_nodes import (
    DIRECT_TYPE_NAMES,
    OPTIONAL_DEFAULT,
    ClassificationResult,
    StorageStrategy,
    ValidatedBinding,
)

logger = logging.getLogger(__name__)


def is_direct_type(type_name: str) -> bool:
    """Check whether a type name has a direct retrieval path from the store."""
    return type_name.strip() in DIRECT_TYPE_NAMES


class TypeClassifier:
    """Classifies a binding into one of the storage strategies."""

    def classify(self, binding: ValidatedBinding) -> ClassificationResult:
        """
        Classify a validated binding.

        Args:
            binding: Output of the declaration validator

        Returns:
            ClassificationResult for the accessor backends

        Raises:
            ArgumentError: if the type and initializer do not fit together
        """
        match binding.type_annotation:
            case OptionalType(wrapped=TypeNode() as wrapped):
                if binding.initializer is not None:
                    raise ArgumentError(ArgumentErrorKind.OPTIONAL_TYPE_SHOULD_HAVE_NO_DEFAULT_VALUE)
                base_type = wrapped.description()
                default_value = OPTIONAL_DEFAULT
                strategy = (
                    StorageStrategy.DIRECT_OPTIONAL
                    if is_direct_type(base_type)
                    else StorageStrategy.ENCODED_WITH_DEFAULT
                )
                is_optional = True

            case PlainType() as plain:
                if binding.initializer is None:
                    raise ArgumentError(ArgumentErrorKind.NON_OPTIONAL_TYPE_MUST_HAVE_DEFAULT_VALUE)
                base_type = plain.description()
                default_value = binding.initializer
                strategy = (
                    StorageStrategy.DIRECT_WITH_DEFAULT
                    if is_direct_type(base_type)
                    else StorageStrategy.ENCODED_WITH_DEFAULT
                )
                is_optional = False

            case _:
                raise ArgumentError(ArgumentErrorKind.UNABLE_TO_EXTRACT_REQUIRED_VALUES_FROM_ARGUMENT)

        logger.debug("Classified %r as %s (base type %r)", binding.property_name, strategy.value, base_type)

        return ClassificationResult(
            property_name=binding.property_name,
            store_key=binding.store_key,
            base_type=base_type,
            default_value_expression=default_value,
            strategy=strategy,
            is_optional=is_optional,
        )
