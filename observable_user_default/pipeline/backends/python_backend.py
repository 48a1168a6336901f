"""
Python accessor generation backend.

Generates `@property` getter/setter pairs for subclasses of
`observable_user_default.runtime.Observable`.
"""

from __future__ import annotations

import logging
import re
import textwrap

from ...errors import ArgumentError, ArgumentErrorKind
from ..analyzer.ir_nodes import OPTIONAL_DEFAULT, ClassificationResult, GeneratedAccessorPair
from ..formatters import RuffFormatter
from .base import AccessorBackend

logger = logging.getLogger(__name__)

RUNTIME_MODULE = "observable_user_default.runtime"

# Names the generated accessors pull from the runtime module
RUNTIME_NAMES = (
    "Bool",
    "Data",
    "Int",
    "NSDate",
    "NSNumber",
    "Observable",
    "String",
    "case_for_raw_value",
    "decode_json",
    "encode_json",
    "has_raw_value",
)


class PythonBackend(AccessorBackend):
    """Python accessor generation backend."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"
    DEFAULT_STORE_EXPRESSION = "self.store"

    # Swift type names spelled differently in Python. The allow-listed names
    # keep their runtime aliases.
    TYPE_MAP = {
        "Double": "float",
        "Float": "float",
        "CGFloat": "float",
        "Int8": "int",
        "Int16": "int",
        "Int32": "int",
        "Int64": "int",
        "UInt": "int",
        "UInt8": "int",
        "UInt16": "int",
        "UInt32": "int",
        "UInt64": "int",
        "Character": "str",
        "Date": "NSDate",
        "Swift.String": "String",
        "Swift.Int": "Int",
        "Swift.Bool": "Bool",
        "Swift.Double": "float",
    }

    # Generic spellings of the standard containers: Python origin and arity
    GENERIC_MAP = {
        "Array": ("list", 1),
        "Swift.Array": ("list", 1),
        "Set": ("set", 1),
        "Swift.Set": ("set", 1),
        "Dictionary": ("dict", 2),
        "Swift.Dictionary": ("dict", 2),
    }

    # Swift literals that have a different spelling in Python
    LITERAL_MAP = {
        OPTIONAL_DEFAULT: "None",
        "true": "True",
        "false": "False",
        "[:]": "{}",
    }

    def __init__(self, config):
        super().__init__(config)
        self.class_template = self.jinja_env.get_template("class.py.jinja2")
        self.formatter = RuffFormatter()

    def translate_base_type(self, base_type: str) -> str:
        """
        Translate a Swift type to the Python type the accessors check against.

        `[T]` becomes `list[T]`, `[K: V]` becomes `dict[K, V]`, `T?` and
        `Optional<T>` become `T | None`, and named types go through TYPE_MAP.

        Raises:
            ArgumentError: If the type has no Python spelling (tuples,
                closures, protocol compositions, ...)
        """
        text = base_type.strip()
        if text.endswith("?"):
            return f"{self.translate_base_type(text[:-1])} | None"

        if text.startswith("[") and _closes_at_end(text):
            parts = _split_type_arguments(text[1:-1], ":")
            if len(parts) == 1:
                return f"list[{self.translate_base_type(parts[0])}]"
            if len(parts) == 2:
                key, value = (self.translate_base_type(part) for part in parts)
                return f"dict[{key}, {value}]"

        match = _GENERIC.match(text)
        if match and _closes_at_end(text[match.start(2) - 1 :]):
            name, arguments = match.group(1), _split_type_arguments(match.group(2), ",")
            translated = [self.translate_base_type(argument) for argument in arguments]
            if name in ("Optional", "Swift.Optional") and len(translated) == 1:
                return f"{translated[0]} | None"
            if name in self.GENERIC_MAP and self.GENERIC_MAP[name][1] == len(translated):
                return f"{self.GENERIC_MAP[name][0]}[{', '.join(translated)}]"

        if _NAME.match(text):
            return self.TYPE_MAP.get(text, text)

        logger.debug("No Python spelling for type %r", base_type)
        raise ArgumentError(ArgumentErrorKind.UNABLE_TO_EXTRACT_REQUIRED_VALUES_FROM_ARGUMENT)

    def translate_type(self, result: ClassificationResult) -> str:
        annotation = self.translate_base_type(result.base_type)
        return f"{annotation} | None" if result.is_optional else annotation

    def format_default_value(self, expression: str, result: ClassificationResult) -> str:
        expression = expression.strip()
        return self.LITERAL_MAP.get(expression, expression)

    def generate_module(
        self,
        entries: list[tuple[str, GeneratedAccessorPair]],
        name: str,
        generation_comment: str = "",
        imports: list[str] | tuple[str, ...] = (),
        **kwargs,
    ) -> str:
        """Assemble a module holding one Observable subclass with every property."""
        accessors = [
            textwrap.indent(f"{pair.getter}\n\n{pair.setter}", self.config.indent) for _, pair in entries
        ]

        prefix = self.prefix_template.render(
            generation_comment=generation_comment,
            required_imports=self._assemble_imports(imports),
        )
        class_content = self.class_template.render(CLASS_NAME=name, accessors=accessors)
        code = f"{prefix}\n\n{class_content}"
        if self.config.formatter.enabled:
            code = self.formatter.format(code, self.config.formatter)
        return code

    def _assemble_imports(self, imports) -> list[str]:
        """Future import first, then the runtime import, then caller imports."""
        lines = []
        if self.config.use_future_annotations:
            lines.extend(["from __future__ import annotations", ""])

        runtime_names = ",\n".join(f"    {name}" for name in RUNTIME_NAMES)
        lines.append(f"from {RUNTIME_MODULE} import (\n{runtime_names},\n)")

        extra = sorted({line.strip() for line in imports if line.strip()})
        if extra:
            lines.append("")
            lines.extend(extra)
        return lines


_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*$")
_GENERIC = re.compile(r"^([A-Za-z_][A-Za-z0-9_.]*)\s*<(.*)>$", re.DOTALL)


def _closes_at_end(text: str) -> bool:
    """Whether the bracket opening `text` is the one closing it."""
    depth = 0
    for i, char in enumerate(text):
        if char in "[<(":
            depth += 1
        elif char in "]>)":
            depth -= 1
            if depth == 0:
                return i == len(text) - 1
    return False


def _split_type_arguments(text: str, separator: str) -> list[str]:
    """Split type arguments on `separator` outside nested brackets."""
    parts = []
    depth = 0
    start = 0
    for i, char in enumerate(text):
        if char in "[<(":
            depth += 1
        elif char in "]>)":
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return [part.strip() for part in parts]
