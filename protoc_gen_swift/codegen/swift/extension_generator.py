"""Generates extension accessors, the file registry and extension declarations."""

from typing import Dict, Iterable, List

from ..core.config import GeneratorOptions
from ..core.descriptor import FieldDescriptor, FileDescriptor
from ..core.generator import ExtensionSupportGenerator
from ..core.printer import CodePrinter
from .naming import SwiftNamer
from .templates import get_swift_template_engine
from .types import RUNTIME_MODULE, default_value, extension_field_type, swift_type


class ExtensionSetGenerator(ExtensionSupportGenerator):
    """All extension fields declared in one file, at any nesting level."""

    def __init__(
        self,
        file_descriptor: FileDescriptor,
        generator_options: GeneratorOptions,
        namer: SwiftNamer,
    ):
        self.file_descriptor = file_descriptor
        self.generator_options = generator_options
        self.namer = namer
        self.visibility = generator_options.visibility_source_snippet
        self.template_engine = get_swift_template_engine()
        self.extensions: List[FieldDescriptor] = []

    def add(self, extension_fields: Iterable[FieldDescriptor]) -> None:
        self.extensions.extend(extension_fields)

    @property
    def is_empty(self) -> bool:
        return not self.extensions

    def _by_extendee(self) -> Dict[str, List[FieldDescriptor]]:
        """Group extensions by the Swift name of the message they extend."""
        groups: Dict[str, List[FieldDescriptor]] = {}
        for field in self.extensions:
            extendee = self.namer.full_name(field.extendee)
            groups.setdefault(extendee, []).append(field)
        return groups

    def generate_message_extensions(self, printer: CodePrinter) -> None:
        printer.print(
            "\n",
            "// MARK: - Extension Properties\n",
            "\n",
            "// Swift Extensions on the extended Messages to add easy access to the declared\n",
            "// extension fields. The names are based on the extension field name from the proto\n",
            "// declaration. To avoid naming collisions, the names are prefixed with the name of\n",
            "// the scope where the extend directive occurs.\n",
        )

        for extendee, fields in self._by_extendee().items():
            context = {
                "extendee": extendee,
                "accessors": [self._render_accessor(f) for f in fields],
            }
            printer.print(
                self.template_engine.render_template("message_extensions.swift", context)
            )

    def _render_accessor(self, field: FieldDescriptor) -> str:
        property_name = self.namer.extension_property_name(field)
        upper = property_name[:1].upper() + property_name[1:]
        context = {
            "comments": field.source_comments_with_deprecation(),
            "visibility": self.visibility,
            "property": property_name,
            "swift_type": swift_type(field, self.namer),
            "declaration": self.namer.extension_declaration_name(field),
            "default": default_value(field, self.namer),
            "repeated": field.is_repeated,
            "has_name": f"has{upper}",
            "clear_name": f"clear{upper}",
        }
        return self.template_engine.render_template(
            "extension_accessor.swift", context
        ).rstrip("\n")

    def generate_file_extension_registry(self, printer: CodePrinter) -> None:
        context = {
            "runtime": RUNTIME_MODULE,
            "visibility": self.visibility,
            "registry_name": self.namer.file_extensions_registry_name(self.file_descriptor),
            "declarations": [
                self.namer.extension_declaration_name(f) for f in self.extensions
            ],
        }
        printer.print(
            self.template_engine.render_template("extension_registry.swift", context)
        )

    def generate_extension_declarations(self, printer: CodePrinter) -> None:
        declarations = [
            {
                "comments": field.source_comments_with_deprecation(),
                "name": self.namer.extension_declaration_name(field),
                "field_type": extension_field_type(field, self.namer),
                "extendee": self.namer.full_name(field.extendee),
                "number": field.number,
                "proto_name": field.full_name,
            }
            for field in self.extensions
        ]
        context = {
            "runtime": RUNTIME_MODULE,
            "visibility": self.visibility,
            "declarations": declarations,
        }
        printer.print(
            self.template_engine.render_template("extension_declarations.swift", context)
        )
