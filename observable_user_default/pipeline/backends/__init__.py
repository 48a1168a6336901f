"""
Accessor generation backends.
"""

from __future__ import annotations

from .base import AccessorBackend
from .python_backend import PythonBackend
from .swift_backend import SwiftBackend

BACKENDS: dict[str, type[AccessorBackend]] = {
    "swift": SwiftBackend,
    "python": PythonBackend,
}

__all__ = ["AccessorBackend", "SwiftBackend", "PythonBackend", "BACKENDS"]
