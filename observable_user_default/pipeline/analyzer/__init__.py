"""
Analyzer module.

Contains declaration validation, type classification, and the IR nodes
they produce.
"""

from __future__ import annotations

from .classifier import TypeClassifier, is_direct_type
from .ir_nodes import (
    DIRECT_TYPE_NAMES,
    ClassificationResult,
    GeneratedAccessorPair,
    StorageStrategy,
    ValidatedBinding,
)
from .validator import DeclarationValidator

__all__ = [
    "DIRECT_TYPE_NAMES",
    "ClassificationResult",
    "GeneratedAccessorPair",
    "StorageStrategy",
    "ValidatedBinding",
    "DeclarationValidator",
    "TypeClassifier",
    "is_direct_type",
]
