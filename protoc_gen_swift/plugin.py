"""
protoc plugin protocol shell.

Turns a CodeGeneratorRequest into a CodeGeneratorResponse: parses the
generation parameters, runs the file generator for every requested file in
order, and reports either every generated file or the first error.
"""

from dataclasses import dataclass
from typing import List, Optional

from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError

from . import __version__
from .codegen.core.config import ConfigError, GeneratorOptions
from .codegen.core.descriptor import DescriptorSet, FileDescriptor, UnresolvedTypeError
from .codegen.core.filenames import FilenameRegistry
from .codegen.core.generator import GenerationError, OutputUnit
from .codegen.core.templates import TemplateError
from .codegen.swift.file_generator import FileGenerator
from .logging_config import get_logger

logger = get_logger(__name__)

PROGRAM_NAME = "protoc-gen-swift"
COPYRIGHT_LINE = "Copyright (C) 2014-2017 Apple Inc. and the project authors"
PROJECT_URL = "https://github.com/apple/swift-protobuf"
MINIMUM_RUNTIME_VERSION = "1.25.0"


class PluginError(Exception):
    """The request itself is unusable; no response can be produced."""

    pass


@dataclass(frozen=True)
class ProtoCompilerContext:
    """What the request tells us about the protoc that invoked the plugin."""

    version: Optional[str] = None

    @classmethod
    def from_request(
        cls, request: plugin_pb2.CodeGeneratorRequest
    ) -> "ProtoCompilerContext":
        if not request.HasField("compiler_version"):
            return cls()
        v = request.compiler_version
        version = f"{v.major}.{v.minor}.{v.patch}"
        if v.suffix:
            version = f"{version}-{v.suffix}"
        return cls(version=version)


class GeneratorOutputs:
    """Files accepted for the response, in the order they were added."""

    def __init__(self):
        self.files: List[OutputUnit] = []

    def add(self, file_name: str, contents: str) -> None:
        self.files.append(OutputUnit(file_name, contents))


def parse_request(data: bytes) -> plugin_pb2.CodeGeneratorRequest:
    """
    Decode a serialized CodeGeneratorRequest.

    Raises:
        PluginError: If the bytes are not a valid request
    """
    request = plugin_pb2.CodeGeneratorRequest()
    try:
        request.ParseFromString(data)
    except DecodeError as e:
        raise PluginError(f"Request failed to decode: {e}") from e
    return request


class GeneratorPlugin:
    """The Swift generator, driven through the protoc plugin protocol."""

    supported_features = [plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL]
    version = __version__
    copyright_line = COPYRIGHT_LINE
    project_url = PROJECT_URL

    def generate(
        self,
        files: List[FileDescriptor],
        parameter: str,
        protoc_context: ProtoCompilerContext,
        generator_outputs: GeneratorOutputs,
    ) -> None:
        """
        Generate every file, or nothing at all.

        Raises:
            ConfigError: If the parameter string is malformed
            GenerationError: For the first file that fails; prefixed with that
                file's name when more than one file was requested
        """
        options = GeneratorOptions.from_parameter(parameter)

        self.audit_protoc_version(protoc_context)

        names = FilenameRegistry()
        generated: List[OutputUnit] = []

        for file_descriptor in files:
            file_generator = FileGenerator(file_descriptor, options)
            try:
                content = file_generator.generate()
            except GenerationError as e:
                message = (
                    f"{file_descriptor.name}: {e.message}" if len(files) > 1 else e.message
                )
                logger.debug("Generation failed for %s: %s", file_descriptor.name, e.message)
                raise GenerationError(message) from e

            name = file_generator.output_filename(names)
            logger.info("Generated %s from %s", name, file_descriptor.name)
            generated.append(OutputUnit(name, content))

        for unit in generated:
            generator_outputs.add(unit.name, unit.content)

    def run(
        self, request: plugin_pb2.CodeGeneratorRequest
    ) -> plugin_pb2.CodeGeneratorResponse:
        """
        Produce the response for one request.

        Generation problems are reported inside the response.

        Raises:
            PluginError: If a file to generate is missing from the request,
                a field refers to a type the request does not define, or a
                template fails to render
        """
        descriptor_set = DescriptorSet(request.proto_file)

        files = []
        for name in request.file_to_generate:
            file_descriptor = descriptor_set.file(name)
            if file_descriptor is None:
                raise PluginError(
                    f"File to generate '{name}' is not among the request's proto files"
                )
            files.append(file_descriptor)

        response = plugin_pb2.CodeGeneratorResponse()
        for feature in self.supported_features:
            response.supported_features |= feature

        outputs = GeneratorOutputs()
        try:
            self.generate(
                files,
                request.parameter,
                ProtoCompilerContext.from_request(request),
                outputs,
            )
        except (ConfigError, GenerationError) as e:
            logger.error("%s", e)
            response.error = str(e)
            return response
        except (UnresolvedTypeError, TemplateError) as e:
            raise PluginError(str(e)) from e

        for unit in outputs.files:
            output_file = response.file.add()
            output_file.name = unit.name
            output_file.content = unit.content
        return response

    def audit_protoc_version(self, context: ProtoCompilerContext) -> None:
        """Warn when protoc did not report its version.

        protoc started reporting compiler_version in 3.2.x, so any reported
        version is new enough.
        """
        if context.version is None:
            logger.warning(
                "unknown version of protoc, use 3.2.x or later to ensure "
                "JSON support is correct."
            )

    def version_text(self) -> str:
        return f"{PROGRAM_NAME} {self.version}"

    def help_text(self) -> str:
        """Extended help shown by ``--help``."""
        return f"""\
{PROGRAM_NAME}: Convert parsed proto definitions into Swift

{self.copyright_line}

Note:  This is a plugin for protoc and should not normally be run
directly.

If you invoke a recent version of protoc with the --swift_out=<dir>
option, then protoc will search the current PATH for {PROGRAM_NAME}
and use it to generate Swift output.

In particular, if you have renamed this program, you will need to
adjust the protoc command-line option accordingly.

The generated Swift output requires the SwiftProtobuf {MINIMUM_RUNTIME_VERSION}
library be included in your project.

If you use `swift build` to compile your project, add this to
Package.swift:

   dependencies: [
     .package(name: "SwiftProtobuf", url: "{self.project_url}.git", from: "{MINIMUM_RUNTIME_VERSION}"),
   ]

Usage: {PROGRAM_NAME} [options]

  -h|--help:  Print this help message
  --version:  Print the program version
"""
