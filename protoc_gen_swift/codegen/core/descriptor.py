"""
Read-only descriptor views over ``descriptor_pb2`` messages.

Wraps the FileDescriptorProtos carried by a CodeGeneratorRequest in a
navigable object graph: files know their dependencies, fields resolve their
message and enum types, and every declaration can produce its source
comments from ``source_code_info``.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from google.protobuf import descriptor_pb2

from .deprecation import SimpleProvidesDeprecation, TypeOrFileProvidesDeprecation

FieldDescriptorProto = descriptor_pb2.FieldDescriptorProto

_FILE = descriptor_pb2.FileDescriptorProto
_MESSAGE = descriptor_pb2.DescriptorProto
_ENUM = descriptor_pb2.EnumDescriptorProto

# Scalar types that are allowed to use the packed wire format.
PACKABLE_TYPES = {
    FieldDescriptorProto.TYPE_DOUBLE,
    FieldDescriptorProto.TYPE_FLOAT,
    FieldDescriptorProto.TYPE_INT64,
    FieldDescriptorProto.TYPE_UINT64,
    FieldDescriptorProto.TYPE_INT32,
    FieldDescriptorProto.TYPE_FIXED64,
    FieldDescriptorProto.TYPE_FIXED32,
    FieldDescriptorProto.TYPE_BOOL,
    FieldDescriptorProto.TYPE_UINT32,
    FieldDescriptorProto.TYPE_ENUM,
    FieldDescriptorProto.TYPE_SFIXED32,
    FieldDescriptorProto.TYPE_SFIXED64,
    FieldDescriptorProto.TYPE_SINT32,
    FieldDescriptorProto.TYPE_SINT64,
}


class UnresolvedTypeError(Exception):
    """Exception raised when a field names a type missing from the request."""

    pass


def _prefix_lines(text: str, prefix: str) -> str:
    lines = text.split("\n")
    # protoc keeps the trailing newline of a comment
    while lines and not lines[-1]:
        lines.pop()
    return "".join(f"{prefix}{line}\n" for line in lines)


def format_source_comment(
    location: descriptor_pb2.SourceCodeInfo.Location,
    comment_prefix: str = "///",
    leading_detached_prefix: Optional[str] = None,
) -> str:
    """
    Render the comments attached to a source location.

    Detached comments are only included when ``leading_detached_prefix``
    is given; each is followed by a blank line.
    """
    parts = []
    if leading_detached_prefix is not None:
        for detached in location.leading_detached_comments:
            parts.append(_prefix_lines(detached, leading_detached_prefix))
            parts.append("\n")
    if location.leading_comments:
        parts.append(_prefix_lines(location.leading_comments, comment_prefix))
    if location.trailing_comments:
        parts.append(_prefix_lines(location.trailing_comments, comment_prefix))
    return "".join(parts)


class ProvidesSourceCodeLocation:
    """Mixin for descriptors addressed by a path into source_code_info."""

    file: "FileDescriptor"
    path: Tuple[int, ...]

    def source_code_info_location(
        self,
    ) -> Optional[descriptor_pb2.SourceCodeInfo.Location]:
        return self.file.location_for(self.path)

    def source_comments(
        self,
        comment_prefix: str = "///",
        leading_detached_prefix: Optional[str] = None,
    ) -> str:
        location = self.source_code_info_location()
        if location is None:
            return ""
        return format_source_comment(location, comment_prefix, leading_detached_prefix)


class EnumValueDescriptor(SimpleProvidesDeprecation, ProvidesSourceCodeLocation):
    """One value of an enum."""

    def __init__(self, enum: "EnumDescriptor", proto, path: Tuple[int, ...]):
        self.enum = enum
        self.file = enum.file
        self.proto = proto
        self.path = path

    @property
    def name(self) -> str:
        return self.proto.name

    @property
    def number(self) -> int:
        return self.proto.number

    @property
    def is_deprecated(self) -> bool:
        return self.proto.options.deprecated


class EnumDescriptor(TypeOrFileProvidesDeprecation, ProvidesSourceCodeLocation):
    """An enum declared at file scope or inside a message."""

    def __init__(
        self,
        file: "FileDescriptor",
        proto,
        path: Tuple[int, ...],
        containing_type: Optional["MessageDescriptor"] = None,
    ):
        self.file = file
        self.proto = proto
        self.path = path
        self.containing_type = containing_type
        self.values = [
            EnumValueDescriptor(self, value, path + (_ENUM.VALUE_FIELD_NUMBER, i))
            for i, value in enumerate(proto.value)
        ]

    @property
    def name(self) -> str:
        return self.proto.name

    @property
    def relative_name(self) -> str:
        """Name relative to the package, e.g. ``Outer.Inner``."""
        if self.containing_type is None:
            return self.name
        return f"{self.containing_type.relative_name}.{self.name}"

    @property
    def full_name(self) -> str:
        if self.file.package:
            return f"{self.file.package}.{self.relative_name}"
        return self.relative_name

    @property
    def is_closed(self) -> bool:
        """Closed enums reject unknown values; proto3 enums are open."""
        return not self.file.is_proto3

    @property
    def is_deprecated(self) -> bool:
        return self.proto.options.deprecated

    @property
    def default_value(self) -> EnumValueDescriptor:
        return self.values[0]


class FieldDescriptor(SimpleProvidesDeprecation, ProvidesSourceCodeLocation):
    """A message field or an extension field."""

    def __init__(
        self,
        file: "FileDescriptor",
        proto,
        path: Tuple[int, ...],
        containing_type: Optional["MessageDescriptor"] = None,
        extension_scope: Optional["MessageDescriptor"] = None,
    ):
        self.file = file
        self.proto = proto
        self.path = path
        self.containing_type = containing_type
        self.extension_scope = extension_scope

    @property
    def name(self) -> str:
        return self.proto.name

    @property
    def number(self) -> int:
        return self.proto.number

    @property
    def type(self) -> int:
        return self.proto.type

    @property
    def json_name(self) -> str:
        if self.proto.HasField("json_name"):
            return self.proto.json_name
        return to_json_name(self.name)

    @property
    def full_name(self) -> str:
        if self.extension_scope is not None:
            return f"{self.extension_scope.full_name}.{self.name}"
        if self.containing_type is not None:
            return f"{self.containing_type.full_name}.{self.name}"
        if self.file.package:
            return f"{self.file.package}.{self.name}"
        return self.name

    @property
    def is_extension(self) -> bool:
        return self.proto.HasField("extendee")

    @property
    def is_repeated(self) -> bool:
        return self.proto.label == FieldDescriptorProto.LABEL_REPEATED

    @property
    def is_deprecated(self) -> bool:
        return self.proto.options.deprecated

    @property
    def message_type(self) -> Optional["MessageDescriptor"]:
        if self.type not in (
            FieldDescriptorProto.TYPE_MESSAGE,
            FieldDescriptorProto.TYPE_GROUP,
        ):
            return None
        return self._resolve(self.file.descriptor_set.find_message, self.proto.type_name)

    @property
    def enum_type(self) -> Optional[EnumDescriptor]:
        if self.type != FieldDescriptorProto.TYPE_ENUM:
            return None
        return self._resolve(self.file.descriptor_set.find_enum, self.proto.type_name)

    @property
    def extendee(self) -> Optional["MessageDescriptor"]:
        if not self.is_extension:
            return None
        return self._resolve(self.file.descriptor_set.find_message, self.proto.extendee)

    def _resolve(self, find, type_name: str):
        resolved = find(type_name)
        if resolved is None:
            raise UnresolvedTypeError(f"{self.full_name}: unknown type '{type_name}'")
        return resolved

    @property
    def is_map(self) -> bool:
        message = self.message_type
        return self.is_repeated and message is not None and message.is_map_entry

    @property
    def has_presence(self) -> bool:
        """Whether the field tracks if it was explicitly set."""
        if self.is_repeated:
            return False
        if self.type in (
            FieldDescriptorProto.TYPE_MESSAGE,
            FieldDescriptorProto.TYPE_GROUP,
        ):
            return True
        if self.proto.proto3_optional:
            return True
        if self.proto.HasField("oneof_index"):
            return True
        return not self.file.is_proto3

    @property
    def is_packed(self) -> bool:
        if not self.is_repeated or self.type not in PACKABLE_TYPES:
            return False
        if self.proto.options.HasField("packed"):
            return self.proto.options.packed
        return self.file.is_proto3


class MessageDescriptor(TypeOrFileProvidesDeprecation, ProvidesSourceCodeLocation):
    """A message declared at file scope or nested in another message."""

    def __init__(
        self,
        file: "FileDescriptor",
        proto,
        path: Tuple[int, ...],
        containing_type: Optional["MessageDescriptor"] = None,
    ):
        self.file = file
        self.proto = proto
        self.path = path
        self.containing_type = containing_type
        self.fields = [
            FieldDescriptor(file, f, path + (_MESSAGE.FIELD_FIELD_NUMBER, i), self)
            for i, f in enumerate(proto.field)
        ]
        self.messages = [
            MessageDescriptor(file, m, path + (_MESSAGE.NESTED_TYPE_FIELD_NUMBER, i), self)
            for i, m in enumerate(proto.nested_type)
        ]
        self.enums = [
            EnumDescriptor(file, e, path + (_MESSAGE.ENUM_TYPE_FIELD_NUMBER, i), self)
            for i, e in enumerate(proto.enum_type)
        ]
        self.extensions = [
            FieldDescriptor(
                file,
                f,
                path + (_MESSAGE.EXTENSION_FIELD_NUMBER, i),
                extension_scope=self,
            )
            for i, f in enumerate(proto.extension)
        ]

    @property
    def name(self) -> str:
        return self.proto.name

    @property
    def relative_name(self) -> str:
        if self.containing_type is None:
            return self.name
        return f"{self.containing_type.relative_name}.{self.name}"

    @property
    def full_name(self) -> str:
        if self.file.package:
            return f"{self.file.package}.{self.relative_name}"
        return self.relative_name

    @property
    def is_map_entry(self) -> bool:
        return self.proto.options.map_entry

    @property
    def is_deprecated(self) -> bool:
        return self.proto.options.deprecated

    def field_named(self, name: str) -> Optional[FieldDescriptor]:
        for field in self.fields:
            if field.name == name:
                return field
        return None


class FileDescriptor(SimpleProvidesDeprecation, ProvidesSourceCodeLocation):
    """One .proto file."""

    def __init__(self, proto: descriptor_pb2.FileDescriptorProto, descriptor_set):
        self.proto = proto
        self.file = self
        self.path: Tuple[int, ...] = ()
        self.descriptor_set = descriptor_set

        self._locations: Dict[Tuple[int, ...], descriptor_pb2.SourceCodeInfo.Location] = {}
        for location in proto.source_code_info.location:
            self._locations.setdefault(tuple(location.path), location)

        self.messages = [
            MessageDescriptor(self, m, (_FILE.MESSAGE_TYPE_FIELD_NUMBER, i))
            for i, m in enumerate(proto.message_type)
        ]
        self.enums = [
            EnumDescriptor(self, e, (_FILE.ENUM_TYPE_FIELD_NUMBER, i))
            for i, e in enumerate(proto.enum_type)
        ]
        self.extensions = [
            FieldDescriptor(self, f, (_FILE.EXTENSION_FIELD_NUMBER, i))
            for i, f in enumerate(proto.extension)
        ]

    @property
    def name(self) -> str:
        return self.proto.name

    @property
    def package(self) -> str:
        return self.proto.package

    @property
    def syntax(self) -> str:
        return self.proto.syntax or "proto2"

    @property
    def is_proto3(self) -> bool:
        return self.syntax == "proto3"

    @property
    def is_deprecated(self) -> bool:
        return self.proto.options.deprecated

    @property
    def has_swift_prefix(self) -> bool:
        return self.proto.options.HasField("swift_prefix")

    @property
    def swift_prefix(self) -> str:
        return self.proto.options.swift_prefix

    @property
    def dependencies(self) -> List["FileDescriptor"]:
        return [
            dependency
            for dependency in (
                self.descriptor_set.file(name) for name in self.proto.dependency
            )
            if dependency is not None
        ]

    @property
    def public_dependencies(self) -> List["FileDescriptor"]:
        names = [self.proto.dependency[i] for i in self.proto.public_dependency]
        return [
            dependency
            for dependency in (self.descriptor_set.file(name) for name in names)
            if dependency is not None
        ]

    def location_for(
        self, path: Tuple[int, ...]
    ) -> Optional[descriptor_pb2.SourceCodeInfo.Location]:
        return self._locations.get(tuple(path))

    def syntax_location(self) -> Optional[descriptor_pb2.SourceCodeInfo.Location]:
        """Location of the ``syntax`` statement, which carries file comments."""
        return self.location_for((_FILE.SYNTAX_FIELD_NUMBER,))


class DescriptorSet:
    """All files of a request, indexed for type lookups."""

    def __init__(self, protos: Iterable[descriptor_pb2.FileDescriptorProto]):
        self._files: Dict[str, FileDescriptor] = {}
        self._messages: Dict[str, MessageDescriptor] = {}
        self._enums: Dict[str, EnumDescriptor] = {}

        for proto in protos:
            file = FileDescriptor(proto, self)
            self._files[file.name] = file
            for enum in file.enums:
                self._enums[f".{enum.full_name}"] = enum
            for message in file.messages:
                self._index_message(message)

    def _index_message(self, message: MessageDescriptor) -> None:
        self._messages[f".{message.full_name}"] = message
        for enum in message.enums:
            self._enums[f".{enum.full_name}"] = enum
        for nested in message.messages:
            self._index_message(nested)

    @property
    def files(self) -> List[FileDescriptor]:
        return list(self._files.values())

    def file(self, name: str) -> Optional[FileDescriptor]:
        return self._files.get(name)

    def find_message(self, type_name: str) -> Optional[MessageDescriptor]:
        """Look up a message by its fully-qualified ``.pkg.Name``."""
        return self._messages.get(type_name)

    def find_enum(self, type_name: str) -> Optional[EnumDescriptor]:
        return self._enums.get(type_name)


def to_json_name(name: str) -> str:
    """protoc's default JSON name: drop underscores, capitalize what follows."""
    result = []
    capitalize_next = False
    for char in name:
        if char == "_":
            capitalize_next = True
        elif capitalize_next:
            result.append(char.upper())
            capitalize_next = False
        else:
            result.append(char)
    return "".join(result)
