"""Observable User Default Generator

A Python package for generating property accessors that back an observable
property with a persistent key-value store. Supports Swift and Python
output with a template-based pipeline.
"""

__version__ = "1.0.0"

from .errors import (
    ArgumentError,
    ArgumentErrorKind,
    DeclarationError,
    DeclarationErrorKind,
    DeclarationSyntaxError,
    ObservableUserDefaultError,
)
from .pipeline import (
    ClassificationResult,
    GeneratedAccessorPair,
    GeneratorConfig,
    OptionalType,
    PipelineGenerator,
    PlainType,
    PropertyDeclaration,
    StorageStrategy,
    generate_accessors,
)

__all__ = [
    "PipelineGenerator",
    "GeneratorConfig",
    "GeneratedAccessorPair",
    "ClassificationResult",
    "StorageStrategy",
    "PropertyDeclaration",
    "OptionalType",
    "PlainType",
    "generate_accessors",
    "ObservableUserDefaultError",
    "DeclarationError",
    "DeclarationErrorKind",
    "ArgumentError",
    "ArgumentErrorKind",
    "DeclarationSyntaxError",
]
