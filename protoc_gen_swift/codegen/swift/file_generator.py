"""
File-level generation.

Builds one Swift source file for one .proto input by sequencing the
preamble and the enum, message and extension generators in a fixed order.
"""

from ...logging_config import get_logger
from ..core.config import GeneratorOptions
from ..core.descriptor import FileDescriptor
from ..core.filenames import FilenameRegistry, output_filename, split_path
from ..core.generator import GenerationError
from ..core.printer import CodePrinter
from .enum_generator import EnumGenerator
from .extension_generator import ExtensionSetGenerator
from .message_generator import MessageGenerator
from .naming import SwiftNamer, is_valid_swift_identifier
from .preamble import build_file_preamble

logger = get_logger(__name__)

CASE_ITERABLE_GUARD_OPEN = "\n#if swift(>=4.2)\n"
CASE_ITERABLE_GUARD_CLOSE = "\n#endif  // swift(>=4.2)\n"


class FileGenerator:
    """Generates the Swift source for one file of the request."""

    def __init__(self, file_descriptor: FileDescriptor, generator_options: GeneratorOptions):
        self.file_descriptor = file_descriptor
        self.generator_options = generator_options
        self.namer = SwiftNamer(file_descriptor)

    def output_filename(self, registry: FilenameRegistry) -> str:
        """Name of the generated file, unique within ``registry``'s run."""
        return output_filename(
            self.file_descriptor.name,
            self.generator_options.output_naming,
            self.file_descriptor.package,
            registry,
        )

    def generate(self) -> str:
        """
        Generate the whole file.

        Raises:
            GenerationError: On the first problem found; nothing is returned
                for the file in that case
        """
        printer = CodePrinter()
        self.generate_output_file(printer)
        return printer.content

    def generate_output_file(self, printer: CodePrinter) -> None:
        file = self.file_descriptor
        options = self.generator_options

        if file.swift_prefix and not is_valid_swift_identifier(
            file.swift_prefix, allow_quoted=False
        ):
            raise GenerationError(
                f"{file.name} has an 'swift_prefix' that isn't a valid Swift "
                f"identifier ({file.swift_prefix})."
            )

        printer.print(build_file_preamble(file, options))

        extension_set = ExtensionSetGenerator(file, options, self.namer)
        extension_set.add(file.extensions)

        enums = [EnumGenerator(e, options, self.namer) for e in file.enums]
        messages = [
            MessageGenerator(m, options, self.namer, extension_set)
            for m in file.messages
        ]
        logger.debug(
            "Generating %s: %d enums, %d messages, %d extensions",
            file.name,
            len(enums),
            len(messages),
            len(extension_set.extensions),
        )

        for enum in enums:
            printer.print("\n")
            enum.generate_main(printer)
            enum.generate_case_iterable(printer)

        for message in messages:
            printer.print("\n")
            message.generate_main(printer)

            case_iterable_printer = CodePrinter()
            message.generate_case_iterable(case_iterable_printer)
            if not case_iterable_printer.is_empty:
                printer.print(CASE_ITERABLE_GUARD_OPEN)
                printer.print(case_iterable_printer.content)
                printer.print(CASE_ITERABLE_GUARD_CLOSE)

        if not extension_set.is_empty:
            _, base, suffix = split_path(file.name)
            printer.print(
                "\n",
                f"// MARK: - Extension support defined in {base}{suffix}.\n",
            )

            # Declarations are emitted last; accessors and the registry refer to them.
            extension_set.generate_message_extensions(printer)
            extension_set.generate_file_extension_registry(printer)
            extension_set.generate_extension_declarations(printer)

        proto_package = file.package
        needs_proto_package = bool(proto_package) and bool(messages)
        if needs_proto_package or enums or messages:
            printer.print(
                "\n",
                "// MARK: - Code below here is support for the SwiftProtobuf runtime.\n",
            )
            if needs_proto_package:
                printer.print(
                    "\n",
                    f'fileprivate let _protobuf_package = "{proto_package}"\n',
                )
            for enum in enums:
                enum.generate_runtime_support(printer)
            for message in messages:
                message.generate_runtime_support(printer)
