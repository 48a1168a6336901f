"""
Pipeline - store-backed accessor generator.

This module provides a multi-phase architecture for generating property
accessors backed by a key-value store:

1. Phase 1 (Parser): Parse declaration source into syntax nodes
2. Phase 2 (Validator): Reject unsupported declaration shapes
3. Phase 3 (Classifier): Pick the storage strategy and default value
4. Phase 4 (Backend): Render the accessor pair from Jinja2 templates
"""

from __future__ import annotations

from .analyzer import ClassificationResult, GeneratedAccessorPair, StorageStrategy
from .config import GeneratorConfig
from .generator import PipelineGenerator, generate_accessors, split_declarations
from .syntax import OptionalType, PlainType, PropertyDeclaration

__all__ = [
    "PipelineGenerator",
    "GeneratorConfig",
    "ClassificationResult",
    "GeneratedAccessorPair",
    "StorageStrategy",
    "PropertyDeclaration",
    "OptionalType",
    "PlainType",
    "generate_accessors",
    "split_declarations",
]
