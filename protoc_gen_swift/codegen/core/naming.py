"""
Naming utilities for safe code generation.

Handles name sanitization, case conversions and reserved-word conflicts
for generated identifiers.
"""

import re
from enum import Enum
from typing import Dict, Optional, Set


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(
        self,
        reserved_words: Set[str] = None,
        builtin_names: Set[str] = None,
        suffix_on_conflict: str = "_",
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_names: Names that generated members must not shadow
            suffix_on_conflict: Appended to a name that is reserved
        """
        self.reserved_words = reserved_words or set()
        self.builtin_names = builtin_names or set()
        self.suffix_on_conflict = suffix_on_conflict
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.SNAKE_CASE,
        suffix_on_conflict: Optional[str] = None,
    ) -> str:
        """
        Sanitize a name for safe use in the target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Override for the reserved-word suffix

        Returns:
            Sanitized name safe for use
        """
        suffix = (
            self.suffix_on_conflict if suffix_on_conflict is None else suffix_on_conflict
        )
        cache_key = f"{name}_{target_case.value}_{suffix}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = self.convert_case(cleaned, target_case)
        final_name = f"{converted}{suffix}" if self.is_reserved(converted) else converted

        self._name_cache[cache_key] = final_name
        return final_name

    def is_reserved(self, name: str) -> bool:
        """Check a name against reserved words and builtin names."""
        return name in self.reserved_words or name in self.builtin_names

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r"[^a-zA-Z0-9_]", "_", name)

        # Ensure doesn't start with number
        if cleaned and cleaned[0].isdigit():
            cleaned = f"_{cleaned}"

        if not cleaned:
            cleaned = "field"

        return cleaned

    def convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.SNAKE_CASE:
            return self._to_snake_case(name)
        elif target_case == NamingCase.CAMEL_CASE:
            return self._to_camel_case(name)
        elif target_case == NamingCase.PASCAL_CASE:
            return self._to_pascal_case(name)
        else:
            return name

    def _to_snake_case(self, name: str) -> str:
        """Convert to snake_case."""
        # Insert underscore before uppercase letters
        name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)

        name = name.lower()
        name = re.sub(r"_+", "_", name)

        return name.strip("_")

    def _to_camel_case(self, name: str) -> str:
        """Convert to camelCase."""
        pascal = self._to_pascal_case(name)
        if not pascal:
            return name
        return pascal[0].lower() + pascal[1:]

    def _to_pascal_case(self, name: str) -> str:
        """Convert to PascalCase."""
        snake = self._to_snake_case(name)
        parts = snake.split("_")

        # Capitalize only the first letter so digits and the rest stay put
        return "".join(part[0].upper() + part[1:] for part in parts if part)
