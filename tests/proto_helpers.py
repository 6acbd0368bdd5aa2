"""Builders for descriptor protos and plugin requests used across tests."""

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from protoc_gen_swift.codegen.core.descriptor import DescriptorSet

F = descriptor_pb2.FieldDescriptorProto


def make_field(
    name,
    number,
    type=F.TYPE_STRING,
    label=F.LABEL_OPTIONAL,
    type_name=None,
    extendee=None,
    json_name=None,
    deprecated=False,
    proto3_optional=False,
    default_value=None,
):
    field = F(name=name, number=number, type=type, label=label)
    if type_name:
        field.type_name = type_name
    if extendee:
        field.extendee = extendee
    if json_name:
        field.json_name = json_name
    if deprecated:
        field.options.deprecated = True
    if proto3_optional:
        field.proto3_optional = True
    if default_value is not None:
        field.default_value = default_value
    return field


def make_enum(name, values, deprecated=False):
    enum = descriptor_pb2.EnumDescriptorProto(name=name)
    for value_name, number in values:
        enum.value.add(name=value_name, number=number)
    if deprecated:
        enum.options.deprecated = True
    return enum


def make_message(
    name, fields=(), nested=(), enums=(), extensions=(), deprecated=False, map_entry=False
):
    message = descriptor_pb2.DescriptorProto(name=name)
    message.field.extend(fields)
    message.nested_type.extend(nested)
    message.enum_type.extend(enums)
    message.extension.extend(extensions)
    if deprecated:
        message.options.deprecated = True
    if map_entry:
        message.options.map_entry = True
    return message


def make_file(
    name,
    package="",
    syntax="proto3",
    messages=(),
    enums=(),
    extensions=(),
    dependencies=(),
    public_dependencies=(),
    swift_prefix=None,
    deprecated=False,
):
    file = descriptor_pb2.FileDescriptorProto(name=name, package=package)
    if syntax:
        file.syntax = syntax
    file.message_type.extend(messages)
    file.enum_type.extend(enums)
    file.extension.extend(extensions)
    file.dependency.extend(dependencies)
    file.public_dependency.extend(public_dependencies)
    if swift_prefix is not None:
        file.options.swift_prefix = swift_prefix
    if deprecated:
        file.options.deprecated = True
    return file


def add_comment(file_proto, path, leading=None, trailing=None, detached=()):
    """Attach comments to a source_code_info location."""
    location = file_proto.source_code_info.location.add()
    location.path.extend(path)
    if leading is not None:
        location.leading_comments = leading
    if trailing is not None:
        location.trailing_comments = trailing
    location.leading_detached_comments.extend(detached)
    return location


def load(*file_protos):
    """Wrap file protos in a DescriptorSet; returns the last file's view."""
    descriptor_set = DescriptorSet(file_protos)
    return descriptor_set.file(file_protos[-1].name)


def make_request(files, to_generate=None, parameter="", compiler_version=(3, 21, 12)):
    request = plugin_pb2.CodeGeneratorRequest()
    request.proto_file.extend(files)
    if to_generate is None:
        to_generate = [f.name for f in files]
    request.file_to_generate.extend(to_generate)
    if parameter:
        request.parameter = parameter
    if compiler_version is not None:
        major, minor, patch = compiler_version
        request.compiler_version.major = major
        request.compiler_version.minor = minor
        request.compiler_version.patch = patch
    return request
