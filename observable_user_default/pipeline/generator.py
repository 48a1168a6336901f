"""
Pipeline generator.

Runs the phases in order for each declaration: parse, validate, classify,
then render the accessors with the backend for the target language.
"""

from __future__ import annotations

import logging
import re

from .. import __version__
from ..cli_utils import reconstruct_command_line
from ..errors import DeclarationSyntaxError
from .analyzer import ClassificationResult, DeclarationValidator, GeneratedAccessorPair, TypeClassifier
from .backends import BACKENDS, AccessorBackend
from .config import GeneratorConfig
from .syntax import DeclarationParser, DeclNode, PropertyDeclaration

logger = logging.getLogger(__name__)

# A line holding nothing but attributes, e.g. `@ObservableUserDefault @ObservationIgnored`
_ATTRIBUTES_ONLY = re.compile(r"^(?:@[A-Za-z_][A-Za-z0-9_.]*(?:\([^)]*\))?\s*)+$")

# Line endings and openings that tie a line to its neighbour in one declaration
_CONTINUATION_ENDS = ("=", ":", ",", "->")
_CONTINUATION_STARTS = ("=", "{", ".")

Declaration = str | DeclNode | PropertyDeclaration


class PipelineGenerator:
    """Generates store-backed accessors for property declarations."""

    def __init__(self, config: GeneratorConfig | None = None, language: str = "swift"):
        if language not in BACKENDS:
            raise ValueError(f"Language not supported: {language}")
        self.config = config or GeneratorConfig()
        self.language = language
        self.parser = DeclarationParser()
        self.validator = DeclarationValidator(self.config.attribute_name)
        self.classifier = TypeClassifier()
        self.backend: AccessorBackend = BACKENDS[language](self.config)

    def parse(self, declaration: Declaration) -> DeclNode:
        """Bring any accepted declaration form to syntax nodes."""
        if isinstance(declaration, PropertyDeclaration):
            return declaration.to_node()
        if isinstance(declaration, str):
            return self.parser.parse(declaration)
        return declaration

    def classify(self, declaration: Declaration) -> ClassificationResult:
        """Validate and classify a declaration without rendering anything."""
        binding = self.validator.validate(self.parse(declaration))
        return self.classifier.classify(binding)

    def generate_accessors(self, declaration: Declaration) -> GeneratedAccessorPair:
        """
        Generate the getter/setter pair for a single declaration.

        Args:
            declaration: Source text, parsed syntax node or PropertyDeclaration

        Returns:
            The generated accessor pair

        Raises:
            ObservableUserDefaultError: if accessors cannot be generated
        """
        result = self.classify(declaration)
        pair = self.backend.generate_accessors(result)
        logger.debug("Generated %s accessors for %r", self.language, result.property_name)
        return pair

    def generate_module(self, source: str, name: str) -> str:
        """
        Generate a full module from a declarations source.

        Args:
            source: One declaration per line; attribute-only lines attach to
                the next declaration, `import`/`from` lines are carried over
            name: Class name (Python) or module name (Swift)

        Returns:
            Generated source code
        """
        declarations, imports = split_declarations(source)
        entries = [(declaration, self.generate_accessors(declaration)) for declaration in declarations]
        logger.info("Generated accessors for %d declaration(s)", len(entries))
        return self.backend.generate_module(
            entries,
            name,
            generation_comment=self._generate_command_comment(),
            imports=imports,
        )

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the generated file"""
        if not self.config.add_generation_comment:
            return ""

        comment_prefix = self.backend._get_comment_prefix()

        try:
            from ..observable_user_default import observable_user_default as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "observable_user_default"

        return f"{comment_prefix} Generated by observable_user_default v{__version__} : {command_line}"


def split_declarations(source: str) -> tuple[list[str], list[str]]:
    """
    Split a declarations source into declarations and import lines.

    Blank lines and `//` or `#` comment lines are skipped. A declaration may
    span several lines: lines are joined while brackets are left open or the
    text ends with `=`, `:`, `,` or `->`, and a line opening with `=`, `{` or
    `.` continues the declaration before it.
    """
    declarations: list[str] = []
    imports: list[str] = []
    pending: list[str] = []

    for raw_line in source.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(("//", "#")):
            continue
        if line.startswith(("import ", "from ")) and not pending:
            imports.append(line)
            continue
        if not pending and line.startswith(_CONTINUATION_STARTS):
            if not declarations:
                raise DeclarationSyntaxError("Line continues a declaration that does not exist", line)
            declarations[-1] = f"{declarations[-1]}\n{line}"
            continue
        pending.append(line)
        text = "\n".join(pending)
        if _ATTRIBUTES_ONLY.match(text) or _is_unfinished(text):
            continue
        declarations.append(text)
        pending = []

    if pending:
        text = "\n".join(pending)
        if _ATTRIBUTES_ONLY.match(text):
            raise DeclarationSyntaxError("Attribute is not followed by a declaration", text)
        raise DeclarationSyntaxError(
            "Declaration is not terminated, check for unbalanced brackets or a trailing operator", text
        )
    return declarations, imports


def _is_unfinished(text: str) -> bool:
    """Whether a declaration spanning lines needs more input."""
    depth = 0
    in_string = False
    escaped = False
    for char in text:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in "([{":
            depth += 1
        elif char in ")]}":
            depth -= 1
    return depth > 0 or text.rstrip().endswith(_CONTINUATION_ENDS)


def generate_accessors(
    declaration: Declaration,
    language: str = "swift",
    config: GeneratorConfig | None = None,
) -> GeneratedAccessorPair:
    """Generate accessors for one declaration with a throwaway generator."""
    return PipelineGenerator(config, language).generate_accessors(declaration)
