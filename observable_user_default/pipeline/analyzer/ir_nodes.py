"""
IR (Intermediate Representation) node definitions.

These nodes represent a validated and classified declaration, ready for
accessor generation. The backend only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..syntax.nodes import TypeNode

# Types that the key-value store can hand back directly with a narrowing cast.
# Matched case-sensitively against the trimmed textual base type.
DIRECT_TYPE_NAMES = ("String", "Int", "Bool", "NSDate", "Data", "NSNumber")

OPTIONAL_DEFAULT = "nil"


class StorageStrategy(Enum):
    """How the accessors move the value in and out of the store."""

    DIRECT_OPTIONAL = "direct_optional"  # T? with T allow-listed, defaults to nil
    DIRECT_WITH_DEFAULT = "direct_with_default"  # T allow-listed, defaults to the initializer
    ENCODED_WITH_DEFAULT = "encoded_with_default"  # raw value or JSON blob

    @property
    def is_direct(self) -> bool:
        return self is not StorageStrategy.ENCODED_WITH_DEFAULT


@dataclass(frozen=True)
class ValidatedBinding:
    """The single binding that survived structural validation."""

    property_name: str
    store_key: str
    type_annotation: TypeNode | None
    initializer: str | None


@dataclass(frozen=True)
class ClassificationResult:
    """Everything the accessor templates are parameterized by."""

    property_name: str
    store_key: str
    base_type: str
    default_value_expression: str
    strategy: StorageStrategy
    is_optional: bool = False


@dataclass(frozen=True)
class GeneratedAccessorPair:
    """The read and write accessor fragments for one property."""

    getter: str
    setter: str

    def __iter__(self):
        yield self.getter
        yield self.setter
