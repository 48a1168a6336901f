"""
Utility functions for the accessor generator.
"""

import re

# Splits text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case or camelCase text to PascalCase.

    Used to derive a class name from a declarations file name.

    Examples:
        "user_settings" -> "UserSettings"
        "user-settings" -> "UserSettings"
        "userSettings" -> "UserSettings"
        "settings2" -> "Settings2"
    """
    if not text:
        return ""
    words = _WORD_PATTERN.findall(text.replace("_", " ").replace("-", " "))
    return "".join(word.capitalize() for word in words if word)
