"""
Errors raised while generating accessors.

Every error aborts generation for the declaration it was raised for.
"""

from __future__ import annotations

from enum import Enum

ATTRIBUTE = "'@ObservableUserDefault'"


class ObservableUserDefaultError(Exception):
    """Base class for all generation errors."""

    pass


class DeclarationSyntaxError(ObservableUserDefaultError):
    """Raised when declaration source text cannot be parsed."""

    def __init__(self, message: str, source: str = ""):
        self.source = source
        if source:
            message = f"{message}: {source!r}"
        super().__init__(message)


class DeclarationErrorKind(Enum):
    """Structural problems with the annotated declaration."""

    NOT_VARIABLE_PROPERTY = "notVariableProperty"
    PROPERTY_MUST_CONTAIN_ONLY_ONE_BINDING = "propertyMustContainOnlyOneBinding"
    PROPERTY_MUST_HAVE_NO_ACCESSOR_BLOCK = "propertyMustHaveNoAccessorBlock"
    PROPERTY_MUST_HAVE_NO_INITIALIZER = "propertyMustHaveNoInitializer"
    PROPERTY_MUST_USE_SIMPLE_PATTERN_SYNTAX = "propertyMustUseSimplePatternSyntax"

    @property
    def description(self) -> str:
        return _DECLARATION_DESCRIPTIONS[self]


class ArgumentErrorKind(Enum):
    """Problems with the attribute argument or the type/initializer pair."""

    MACRO_SHOULD_ONLY_CONTAIN_ONE_ARGUMENT = "macroShouldOnlyContainOneArgument"
    NON_OPTIONAL_TYPE_MUST_HAVE_DEFAULT_VALUE = "nonOptionalTypeMustHaveDefaultValue"
    OPTIONAL_TYPE_SHOULD_HAVE_NO_DEFAULT_VALUE = "optionalTypeShouldHaveNoDefaultValue"
    UNABLE_TO_EXTRACT_REQUIRED_VALUES_FROM_ARGUMENT = "unableToExtractRequiredValuesFromArgument"

    @property
    def description(self) -> str:
        return _ARGUMENT_DESCRIPTIONS[self]


_DECLARATION_DESCRIPTIONS = {
    DeclarationErrorKind.NOT_VARIABLE_PROPERTY: f"{ATTRIBUTE} can only be applied to variables",
    DeclarationErrorKind.PROPERTY_MUST_CONTAIN_ONLY_ONE_BINDING: (
        f"{ATTRIBUTE} cannot be applied to multiple variable bindings"
    ),
    DeclarationErrorKind.PROPERTY_MUST_HAVE_NO_ACCESSOR_BLOCK: f"{ATTRIBUTE} cannot be applied to computed properties",
    DeclarationErrorKind.PROPERTY_MUST_HAVE_NO_INITIALIZER: f"{ATTRIBUTE} cannot be applied to stored properties",
    DeclarationErrorKind.PROPERTY_MUST_USE_SIMPLE_PATTERN_SYNTAX: (
        f"{ATTRIBUTE} can only be applied to a variables using simple declaration syntax, "
        "for example, 'var name: String'"
    ),
}

_ARGUMENT_DESCRIPTIONS = {
    ArgumentErrorKind.MACRO_SHOULD_ONLY_CONTAIN_ONE_ARGUMENT: (
        f"Must provide an argument when using {ATTRIBUTE} with parentheses"
    ),
    ArgumentErrorKind.NON_OPTIONAL_TYPE_MUST_HAVE_DEFAULT_VALUE: (
        f"{ATTRIBUTE} arguments on non-optional types must provide default values"
    ),
    ArgumentErrorKind.OPTIONAL_TYPE_SHOULD_HAVE_NO_DEFAULT_VALUE: (
        f"{ATTRIBUTE} arguments on optional types should not use default values"
    ),
    ArgumentErrorKind.UNABLE_TO_EXTRACT_REQUIRED_VALUES_FROM_ARGUMENT: (
        f"{ATTRIBUTE} unable to extract the required values from the argument"
    ),
}


class DeclarationError(ObservableUserDefaultError):
    """The declaration has a shape accessors cannot be generated for."""

    def __init__(self, kind: DeclarationErrorKind):
        self.kind = kind
        super().__init__(kind.description)


class ArgumentError(ObservableUserDefaultError):
    """The attribute argument or the declared type/initializer are unusable."""

    def __init__(self, kind: ArgumentErrorKind):
        self.kind = kind
        super().__init__(kind.description)
