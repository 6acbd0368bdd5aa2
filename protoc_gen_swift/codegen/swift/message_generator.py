"""Generates the Swift struct and runtime support for one proto message."""

from typing import Any, Dict, List

from ...logging_config import get_logger
from ..core.config import GeneratorOptions
from ..core.descriptor import FieldDescriptor, MessageDescriptor, to_json_name
from ..core.generator import DeclarationGenerator, ExtensionSupportGenerator, GenerationError
from ..core.printer import CodePrinter
from .enum_generator import EnumGenerator
from .naming import SwiftNamer
from .templates import get_swift_template_engine
from .types import (
    RUNTIME_MODULE,
    codec_suffix,
    default_value,
    map_field_type,
    non_default_condition,
    swift_type,
)

logger = get_logger(__name__)


class MessageGenerator(DeclarationGenerator):
    """Code generator for a proto message and everything nested in it."""

    def __init__(
        self,
        descriptor: MessageDescriptor,
        generator_options: GeneratorOptions,
        namer: SwiftNamer,
        extension_set: ExtensionSupportGenerator,
    ):
        self.descriptor = descriptor
        self.generator_options = generator_options
        self.namer = namer
        self.swift_full_name = namer.full_name(descriptor)
        self.visibility = generator_options.visibility_source_snippet
        self.template_engine = get_swift_template_engine()

        extension_set.add(descriptor.extensions)

        self.enums = [
            EnumGenerator(e, generator_options, namer) for e in descriptor.enums
        ]
        self.messages = [
            MessageGenerator(m, generator_options, namer, extension_set)
            for m in descriptor.messages
            if not m.is_map_entry
        ]
        self.fields_by_number = sorted(descriptor.fields, key=lambda f: f.number)

    def generate_main(self, printer: CodePrinter) -> None:
        """
        Emit the struct, with nested enums and messages inside it.

        Raises:
            GenerationError: If two members would get the same Swift name
        """
        logger.debug("Generating message: %s", self.describe())
        self._check_member_names()

        nested = []
        for enum in self.enums:
            nested.append(self._render_into_printer(enum.generate_main))
        for message in self.messages:
            nested.append(self._render_into_printer(message.generate_main))

        context = {
            "comments": self.descriptor.source_comments_with_deprecation(),
            "visibility": self.visibility,
            "name": self.namer.declared_name(self.descriptor),
            "runtime": RUNTIME_MODULE,
            "fields": [self._render_field(f) for f in self.descriptor.fields],
            "nested": nested,
            "storage": [
                f"fileprivate var {self.namer.storage_name(f)}: "
                f"{swift_type(f, self.namer)}? = nil"
                for f in self.descriptor.fields
                if f.has_presence
            ],
        }
        printer.print(self.template_engine.render_template("message.swift", context))

    @staticmethod
    def _render_into_printer(generate) -> str:
        scratch = CodePrinter()
        generate(scratch)
        return scratch.content.rstrip("\n")

    def _check_member_names(self) -> None:
        owners: Dict[str, str] = {}

        def claim(member: str, field: FieldDescriptor) -> None:
            other = owners.get(member)
            if other is not None and other != field.name:
                raise GenerationError(
                    f"{self.descriptor.full_name} has fields '{other}' and "
                    f"'{field.name}' that both generate the Swift member '{member}'."
                )
            owners[member] = field.name

        for field in self.descriptor.fields:
            claim(self.namer.field_name(field), field)
        for field in self.descriptor.fields:
            if field.has_presence:
                claim(self.namer.has_name(field), field)
                claim(self.namer.clear_name(field), field)

    def _render_field(self, field: FieldDescriptor) -> str:
        context = {
            "comments": field.source_comments_with_deprecation(),
            "visibility": self.visibility,
            "name": self.namer.field_name(field),
            "swift_type": swift_type(field, self.namer),
            "default": default_value(field, self.namer),
            "has_presence": field.has_presence,
            "storage": self.namer.storage_name(field),
            "has_name": self.namer.has_name(field),
            "clear_name": self.namer.clear_name(field),
        }
        return self.template_engine.render_template("field.swift", context).rstrip("\n")

    def generate_case_iterable(self, printer: CodePrinter) -> None:
        """
        Emit ``CaseIterable`` support for nested enums, without guards.

        The caller wraps whatever this produces in a single guarded region.
        """
        for enum in self.enums:
            enum.generate_case_iterable(printer, include_guards=False)
        for message in self.messages:
            message.generate_case_iterable(printer)

    def generate_runtime_support(self, printer: CodePrinter) -> None:
        relative_name = self.descriptor.relative_name
        if self.descriptor.file.package:
            proto_message_name = f'_protobuf_package + ".{relative_name}"'
        else:
            proto_message_name = f'"{relative_name}"'

        context = {
            "full_name": self.swift_full_name,
            "runtime": RUNTIME_MODULE,
            "visibility": self.visibility,
            "proto_message_name": proto_message_name,
            "name_map": self._name_map_entries(),
            "decode_cases": [self._decode_case(f) for f in self.fields_by_number],
            "traverse": [self._traverse_block(f) for f in self.fields_by_number],
            "compared": [self._stored_name(f) for f in self.descriptor.fields],
        }
        printer.print(
            self.template_engine.render_template("message_runtime.swift", context)
        )

        for enum in self.enums:
            enum.generate_runtime_support(printer)
        for message in self.messages:
            message.generate_runtime_support(printer)

    def _stored_name(self, field: FieldDescriptor) -> str:
        if field.has_presence:
            return self.namer.storage_name(field)
        return self.namer.field_name(field)

    def _name_map_entries(self) -> List[str]:
        entries = []
        for field in self.fields_by_number:
            if field.json_name == field.name:
                entries.append(f'{field.number}: .same(proto: "{field.name}")')
            elif field.json_name == to_json_name(field.name):
                entries.append(f'{field.number}: .standard(proto: "{field.name}")')
            else:
                entries.append(
                    f'{field.number}: .unique(proto: "{field.name}", '
                    f'json: "{field.json_name}")'
                )
        return entries

    def _decode_case(self, field: FieldDescriptor) -> str:
        target = f"&self.{self._stored_name(field)}"
        if field.is_map:
            call = (
                f"decoder.decodeMapField(fieldType: {map_field_type(field, self.namer)}.self, "
                f"value: {target})"
            )
        elif field.is_repeated:
            call = f"decoder.decodeRepeated{codec_suffix(field)}Field(value: {target})"
        else:
            call = f"decoder.decodeSingular{codec_suffix(field)}Field(value: {target})"
        return f"case {field.number}: try {{ try {call} }}()"

    def _traverse_block(self, field: FieldDescriptor) -> str:
        number = field.number
        if field.is_map:
            value = f"self.{self.namer.field_name(field)}"
            visit = (
                f"try visitor.visitMapField(fieldType: {map_field_type(field, self.namer)}.self, "
                f"value: {value}, fieldNumber: {number})"
            )
            return f"if !{value}.isEmpty {{\n  {visit}\n}}"

        suffix = codec_suffix(field)
        if field.is_repeated:
            value = f"self.{self.namer.field_name(field)}"
            kind = "Packed" if field.is_packed else "Repeated"
            visit = f"try visitor.visit{kind}{suffix}Field(value: {value}, fieldNumber: {number})"
            return f"if !{value}.isEmpty {{\n  {visit}\n}}"

        if field.has_presence:
            storage = self.namer.storage_name(field)
            visit = f"try visitor.visitSingular{suffix}Field(value: v, fieldNumber: {number})"
            return f"try {{ if let v = self.{storage} {{\n  {visit}\n}} }}()"

        value = f"self.{self.namer.field_name(field)}"
        condition = non_default_condition(field, self.namer, value)
        visit = f"try visitor.visitSingular{suffix}Field(value: {value}, fieldNumber: {number})"
        return f"if {condition} {{\n  {visit}\n}}"

    def describe(self) -> Dict[str, Any]:
        """Summary used for debug logging."""
        return {
            "message": self.descriptor.full_name,
            "fields": len(self.descriptor.fields),
            "nested_messages": len(self.messages),
            "nested_enums": len(self.enums),
        }
