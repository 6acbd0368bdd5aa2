"""
Swift-specific naming utilities.

Handles Swift reserved words, identifier validation, and the spelling of
the types, properties, enum cases and extensions generated for a file.
"""

from typing import Dict, Optional

from ..core.descriptor import EnumDescriptor, EnumValueDescriptor, FieldDescriptor, FileDescriptor
from ..core.filenames import split_path
from ..core.naming import NameSanitizer, NamingCase

# Swift keywords (declarations, statements, expressions and types)
SWIFT_RESERVED_WORDS = {
    "associatedtype",
    "class",
    "deinit",
    "enum",
    "extension",
    "fileprivate",
    "func",
    "import",
    "init",
    "inout",
    "internal",
    "let",
    "open",
    "operator",
    "private",
    "precedencegroup",
    "protocol",
    "public",
    "rethrows",
    "static",
    "struct",
    "subscript",
    "typealias",
    "var",
    "break",
    "case",
    "catch",
    "continue",
    "default",
    "defer",
    "do",
    "else",
    "fallthrough",
    "for",
    "guard",
    "if",
    "in",
    "repeat",
    "return",
    "throw",
    "switch",
    "where",
    "while",
    "Any",
    "as",
    "await",
    "false",
    "is",
    "nil",
    "self",
    "Self",
    "super",
    "throws",
    "true",
    "try",
    "Type",
    "Protocol",
}

# Members every generated message already has
SWIFT_MESSAGE_MEMBERS = {
    "unknownFields",
    "isInitialized",
    "hashValue",
    "description",
    "debugDescription",
    "customMirror",
}


def create_swift_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Swift."""
    return NameSanitizer(SWIFT_RESERVED_WORDS, SWIFT_MESSAGE_MEMBERS, suffix_on_conflict="_p")


def is_valid_swift_identifier(name: str, allow_quoted: bool = False) -> bool:
    """
    Check that a string can be used as a Swift identifier.

    Args:
        name: Candidate identifier
        allow_quoted: Accept a backtick-quoted identifier such as `class`
    """
    if allow_quoted and len(name) > 2 and name.startswith("`") and name.endswith("`"):
        name = name[1:-1]

    if not name:
        return False

    head, rest = name[0], name[1:]
    if not (head == "_" or head.isalpha()):
        return False
    return all(char == "_" or char.isalnum() for char in rest)


class SwiftNamer:
    """Spells Swift identifiers for the declarations of one file."""

    def __init__(self, current_file: FileDescriptor):
        self.current_file = current_file
        self.sanitizer = create_swift_sanitizer()
        self._enum_case_names: Dict[str, Dict[str, str]] = {}

    def type_prefix(self, file: FileDescriptor) -> str:
        """
        Prefix for the top-level types of a file.

        An explicit ``swift_prefix`` option wins, even when empty; otherwise
        the package is spelled ``Foo_Bar_`` for ``foo.bar``.
        """
        if file.has_swift_prefix:
            return file.swift_prefix
        if not file.package:
            return ""
        components = [
            self.sanitizer.sanitize_name(
                component, NamingCase.PASCAL_CASE, suffix_on_conflict=""
            )
            for component in file.package.split(".")
        ]
        return "_".join(components) + "_"

    def full_name(self, descriptor) -> str:
        """Fully qualified Swift name of a message or enum."""
        if descriptor.containing_type is not None:
            return f"{self.full_name(descriptor.containing_type)}.{descriptor.name}"
        return self.type_prefix(descriptor.file) + descriptor.name

    def declared_name(self, descriptor) -> str:
        """Name used at the declaration site; nested types use their short name."""
        if descriptor.containing_type is not None:
            return descriptor.name
        return self.full_name(descriptor)

    def flat_name(self, descriptor) -> str:
        """Full name with nesting dots replaced, usable as a plain identifier."""
        return self.full_name(descriptor).replace(".", "_")

    def field_name(self, field: FieldDescriptor) -> str:
        return self.sanitizer.sanitize_name(field.name, NamingCase.CAMEL_CASE)

    def storage_name(self, field: FieldDescriptor) -> str:
        """Backing property of a field that tracks presence."""
        return f"_{self.field_name(field)}"

    def has_name(self, field: FieldDescriptor) -> str:
        return "has" + self._upper_first(self.field_name(field))

    def clear_name(self, field: FieldDescriptor) -> str:
        return "clear" + self._upper_first(self.field_name(field))

    def enum_case_name(self, value: EnumValueDescriptor) -> str:
        """
        Swift case for an enum value.

        A leading copy of the enum's own name is dropped, so ``COLOR_RED`` in
        ``enum Color`` becomes ``red``, unless that would give two distinct
        numbers the same case; those values keep their full name. Reserved
        words are backtick-quoted.
        """
        return self._case_names_for(value.enum)[value.name]

    def _case_names_for(self, enum: EnumDescriptor) -> Dict[str, str]:
        names = self._enum_case_names.get(enum.full_name)
        if names is not None:
            return names

        stripped = {
            value.name: self._case_name(self._strip_enum_prefix(enum, value.name))
            for value in enum.values
        }
        numbers_by_case: Dict[str, set] = {}
        for value in enum.values:
            numbers_by_case.setdefault(stripped[value.name], set()).add(value.number)

        names = {}
        for value in enum.values:
            case_name = stripped[value.name]
            if len(numbers_by_case[case_name]) > 1:
                case_name = self._case_name(value.name)
            names[value.name] = case_name

        self._enum_case_names[enum.full_name] = names
        return names

    def _case_name(self, name: str) -> str:
        case_name = self.sanitizer.convert_case(name, NamingCase.CAMEL_CASE)
        if not case_name or case_name[0].isdigit():
            case_name = f"_{case_name}"
        if case_name in SWIFT_RESERVED_WORDS:
            return f"`{case_name}`"
        return case_name

    def _strip_enum_prefix(self, enum: EnumDescriptor, value_name: str) -> str:
        prefix = enum.name.replace("_", "").lower()
        consumed = 0
        matched = 0
        for char in value_name:
            if matched == len(prefix):
                break
            consumed += 1
            if char == "_":
                continue
            if char.lower() != prefix[matched]:
                return value_name
            matched += 1
        if matched != len(prefix):
            return value_name

        remainder = value_name[consumed:].lstrip("_")
        if not remainder or remainder[0].isdigit():
            return value_name
        return remainder

    def extension_scope_prefix(self, field: FieldDescriptor) -> str:
        if field.extension_scope is not None:
            return self.flat_name(field.extension_scope) + "_"
        return self.type_prefix(field.file)

    def extension_declaration_name(self, field: FieldDescriptor) -> str:
        """Name of the ``MessageExtension`` constant."""
        return f"{self.extension_scope_prefix(field)}Extensions_{field.name}"

    def extension_property_name(self, field: FieldDescriptor) -> str:
        """Accessor added to the extended message."""
        return self.extension_scope_prefix(field) + self.sanitizer.convert_case(
            field.name, NamingCase.CAMEL_CASE
        )

    def file_extensions_registry_name(self, file: Optional[FileDescriptor] = None) -> str:
        file = file or self.current_file
        _, base, _ = split_path(file.name)
        pascal_base = self.sanitizer.sanitize_name(
            base, NamingCase.PASCAL_CASE, suffix_on_conflict=""
        )
        return f"{self.type_prefix(file)}{pascal_base}_Extensions"

    @staticmethod
    def _upper_first(name: str) -> str:
        return name[:1].upper() + name[1:]
