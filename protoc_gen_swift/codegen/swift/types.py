"""
Swift type mapping for proto fields.

Maps descriptor field types to Swift types, default values, and the
suffixes used by the runtime's decoder/visitor methods.
"""

from typing import NamedTuple, Optional

from ..core.descriptor import FieldDescriptor, FieldDescriptorProto
from .naming import SwiftNamer

# Module that provides the message runtime for generated code
RUNTIME_MODULE = "GRPCNetwork"


class ScalarInfo(NamedTuple):
    swift_type: str
    codec_suffix: str
    default: str


_SCALARS = {
    FieldDescriptorProto.TYPE_DOUBLE: ScalarInfo("Double", "Double", "0"),
    FieldDescriptorProto.TYPE_FLOAT: ScalarInfo("Float", "Float", "0"),
    FieldDescriptorProto.TYPE_INT64: ScalarInfo("Int64", "Int64", "0"),
    FieldDescriptorProto.TYPE_UINT64: ScalarInfo("UInt64", "UInt64", "0"),
    FieldDescriptorProto.TYPE_INT32: ScalarInfo("Int32", "Int32", "0"),
    FieldDescriptorProto.TYPE_FIXED64: ScalarInfo("UInt64", "Fixed64", "0"),
    FieldDescriptorProto.TYPE_FIXED32: ScalarInfo("UInt32", "Fixed32", "0"),
    FieldDescriptorProto.TYPE_BOOL: ScalarInfo("Bool", "Bool", "false"),
    FieldDescriptorProto.TYPE_STRING: ScalarInfo("String", "String", "String()"),
    FieldDescriptorProto.TYPE_BYTES: ScalarInfo("Data", "Bytes", "Data()"),
    FieldDescriptorProto.TYPE_UINT32: ScalarInfo("UInt32", "UInt32", "0"),
    FieldDescriptorProto.TYPE_SFIXED32: ScalarInfo("Int32", "SFixed32", "0"),
    FieldDescriptorProto.TYPE_SFIXED64: ScalarInfo("Int64", "SFixed64", "0"),
    FieldDescriptorProto.TYPE_SINT32: ScalarInfo("Int32", "SInt32", "0"),
    FieldDescriptorProto.TYPE_SINT64: ScalarInfo("Int64", "SInt64", "0"),
}

_NUMERIC_TYPES = set(_SCALARS) - {
    FieldDescriptorProto.TYPE_BOOL,
    FieldDescriptorProto.TYPE_STRING,
    FieldDescriptorProto.TYPE_BYTES,
}


def is_message(field: FieldDescriptor) -> bool:
    return field.type in (FieldDescriptorProto.TYPE_MESSAGE, FieldDescriptorProto.TYPE_GROUP)


def is_enum(field: FieldDescriptor) -> bool:
    return field.type == FieldDescriptorProto.TYPE_ENUM


def codec_suffix(field: FieldDescriptor) -> str:
    """Suffix of the decoder/visitor methods, e.g. ``String`` or ``SInt32``."""
    if field.type == FieldDescriptorProto.TYPE_MESSAGE:
        return "Message"
    if field.type == FieldDescriptorProto.TYPE_GROUP:
        return "Group"
    if field.type == FieldDescriptorProto.TYPE_ENUM:
        return "Enum"
    return _SCALARS[field.type].codec_suffix


def proto_type_name(field: FieldDescriptor, namer: SwiftNamer) -> str:
    """Generic argument naming the field's wire type to the runtime."""
    if is_message(field):
        return namer.full_name(field.message_type)
    if is_enum(field):
        return namer.full_name(field.enum_type)
    return f"{RUNTIME_MODULE}.Protobuf{_SCALARS[field.type].codec_suffix}"


def base_swift_type(field: FieldDescriptor, namer: SwiftNamer) -> str:
    """Swift type of one element of the field."""
    if is_message(field):
        return namer.full_name(field.message_type)
    if is_enum(field):
        return namer.full_name(field.enum_type)
    return _SCALARS[field.type].swift_type


def map_entry_fields(field: FieldDescriptor):
    entry = field.message_type
    return entry.field_named("key"), entry.field_named("value")


def swift_type(field: FieldDescriptor, namer: SwiftNamer) -> str:
    """Swift type of the generated property."""
    if field.is_map:
        key, value = map_entry_fields(field)
        return f"Dictionary<{base_swift_type(key, namer)},{base_swift_type(value, namer)}>"
    if field.is_repeated:
        return f"[{base_swift_type(field, namer)}]"
    return base_swift_type(field, namer)


def map_field_type(field: FieldDescriptor, namer: SwiftNamer) -> str:
    """The ``_Protobuf*Map`` type used to decode and traverse a map field."""
    key, value = map_entry_fields(field)
    key_type = proto_type_name(key, namer)
    if is_message(value):
        return f"{RUNTIME_MODULE}._ProtobufMessageMap<{key_type},{proto_type_name(value, namer)}>"
    if is_enum(value):
        return f"{RUNTIME_MODULE}._ProtobufEnumMap<{key_type},{proto_type_name(value, namer)}>"
    return f"{RUNTIME_MODULE}._ProtobufMap<{key_type},{proto_type_name(value, namer)}>"


def default_value(field: FieldDescriptor, namer: SwiftNamer) -> str:
    """Swift expression for the value a field reads as when unset."""
    if field.is_map:
        return "[:]"
    if field.is_repeated:
        return "[]"
    if is_message(field):
        return f"{namer.full_name(field.message_type)}()"
    if is_enum(field):
        enum = field.enum_type
        explicit = _explicit_enum_default(field)
        value = explicit if explicit is not None else enum.default_value
        return f".{namer.enum_case_name(value)}"

    explicit = _explicit_scalar_default(field)
    if explicit is not None:
        return explicit
    return _SCALARS[field.type].default


def _explicit_enum_default(field: FieldDescriptor):
    if not field.proto.HasField("default_value"):
        return None
    for value in field.enum_type.values:
        if value.name == field.proto.default_value:
            return value
    return None


def _explicit_scalar_default(field: FieldDescriptor) -> Optional[str]:
    """Proto2 ``[default = ...]`` rendered as a Swift literal."""
    if not field.proto.HasField("default_value"):
        return None

    raw = field.proto.default_value
    if field.type == FieldDescriptorProto.TYPE_STRING:
        escaped = raw.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        return f'"{escaped}"'
    if field.type == FieldDescriptorProto.TYPE_BYTES:
        data = raw.encode("latin-1").decode("unicode_escape").encode("latin-1")
        if not data:
            return "Data()"
        return "Data([" + ", ".join(f"0x{b:02x}" for b in data) + "])"
    if field.type == FieldDescriptorProto.TYPE_BOOL:
        return raw
    if field.type in (FieldDescriptorProto.TYPE_DOUBLE, FieldDescriptorProto.TYPE_FLOAT):
        if raw == "inf":
            return f"{_SCALARS[field.type].swift_type}.infinity"
        if raw == "-inf":
            return f"-{_SCALARS[field.type].swift_type}.infinity"
        if raw == "nan":
            return f"{_SCALARS[field.type].swift_type}.nan"
    return raw


def non_default_condition(field: FieldDescriptor, namer: SwiftNamer, value: str) -> str:
    """Condition under which a field without presence is serialized."""
    if field.is_repeated:
        return f"!{value}.isEmpty"
    if field.type in (FieldDescriptorProto.TYPE_STRING, FieldDescriptorProto.TYPE_BYTES):
        return f"!{value}.isEmpty"
    if field.type == FieldDescriptorProto.TYPE_BOOL:
        return f"{value} != false"
    if field.type in _NUMERIC_TYPES:
        return f"{value} != 0"
    return f"{value} != {default_value(field, namer)}"


def extension_field_type(field: FieldDescriptor, namer: SwiftNamer) -> str:
    """The ``*ExtensionField`` wrapper describing an extension to the runtime."""
    if field.is_packed:
        cardinality = "Packed"
    elif field.is_repeated:
        cardinality = "Repeated"
    else:
        cardinality = "Optional"

    if field.type == FieldDescriptorProto.TYPE_MESSAGE:
        kind = "Message"
    elif field.type == FieldDescriptorProto.TYPE_GROUP:
        kind = "Group"
    elif is_enum(field):
        kind = "Enum"
    else:
        kind = ""

    wrapper = f"{RUNTIME_MODULE}.{cardinality}{kind}ExtensionField"
    return f"{wrapper}<{proto_type_name(field, namer)}>"
