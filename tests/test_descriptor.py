"""
Tests for the descriptor views.
"""

import pytest

from protoc_gen_swift.codegen.core.descriptor import (
    DescriptorSet,
    UnresolvedTypeError,
    format_source_comment,
    to_json_name,
)
from tests.proto_helpers import F, add_comment, load, make_enum, make_field, make_file, make_message


class TestSourceComments:
    """Test rendering of source_code_info comments."""

    def test_leading_and_trailing(self):
        proto = make_file("a.proto")
        location = add_comment(proto, [12], leading=" One\n Two\n", trailing=" After\n")
        assert format_source_comment(location) == "/// One\n/// Two\n/// After\n"

    def test_detached_omitted_without_prefix(self):
        proto = make_file("a.proto")
        location = add_comment(proto, [12], leading=" Doc\n", detached=[" Copyright\n"])
        assert format_source_comment(location) == "/// Doc\n"

    def test_detached_included_with_prefix(self):
        proto = make_file("a.proto")
        location = add_comment(
            proto, [12], leading=" Doc\n", detached=[" Copyright\n", " More\n"]
        )
        result = format_source_comment(location, leading_detached_prefix="//")
        assert result == "// Copyright\n\n// More\n\n/// Doc\n"

    def test_missing_location_has_no_comments(self):
        file = load(make_file("a.proto", messages=[make_message("M")]))
        assert file.messages[0].source_comments() == ""

    def test_nested_paths(self):
        nested = make_message("Inner", fields=[make_field("x", 1)])
        proto = make_file("a.proto", messages=[make_message("Outer", nested=[nested])])
        add_comment(proto, [4, 0, 3, 0, 2, 0], leading=" The x.\n")
        file = load(proto)

        assert file.messages[0].messages[0].fields[0].source_comments() == "/// The x.\n"


class TestFieldDescriptor:
    """Test field properties derived from the protos."""

    def test_json_name_default(self):
        file = load(make_file("a.proto", messages=[make_message("M", fields=[make_field("user_id", 1)])]))
        assert file.messages[0].fields[0].json_name == "userId"

    def test_json_name_explicit(self):
        field = make_field("user_id", 1, json_name="uid")
        file = load(make_file("a.proto", messages=[make_message("M", fields=[field])]))
        assert file.messages[0].fields[0].json_name == "uid"

    def test_presence_proto3(self):
        fields = [
            make_field("plain", 1),
            make_field("opt", 2, proto3_optional=True),
            make_field("sub", 3, type=F.TYPE_MESSAGE, type_name=".M"),
        ]
        file = load(make_file("a.proto", messages=[make_message("M", fields=fields)]))
        plain, opt, sub = file.messages[0].fields

        assert not plain.has_presence
        assert opt.has_presence
        assert sub.has_presence

    def test_presence_proto2(self):
        fields = [make_field("plain", 1), make_field("list", 2, label=F.LABEL_REPEATED)]
        file = load(
            make_file("a.proto", syntax="proto2", messages=[make_message("M", fields=fields)])
        )
        plain, repeated = file.messages[0].fields

        assert plain.has_presence
        assert not repeated.has_presence

    def test_map_field(self):
        entry = make_message(
            "TagsEntry",
            fields=[make_field("key", 1), make_field("value", 2)],
            map_entry=True,
        )
        field = make_field(
            "tags", 1, type=F.TYPE_MESSAGE, label=F.LABEL_REPEATED, type_name=".pkg.M.TagsEntry"
        )
        file = load(
            make_file("a.proto", package="pkg", messages=[make_message("M", fields=[field], nested=[entry])])
        )

        assert file.messages[0].fields[0].is_map
        assert file.messages[0].messages[0].is_map_entry

    def test_packed_defaults(self):
        field = make_field("ids", 1, type=F.TYPE_INT32, label=F.LABEL_REPEATED)
        proto3 = load(make_file("a.proto", messages=[make_message("M", fields=[field])]))
        proto2 = load(
            make_file("b.proto", syntax="proto2", messages=[make_message("M", fields=[field])])
        )

        assert proto3.messages[0].fields[0].is_packed
        assert not proto2.messages[0].fields[0].is_packed

    def test_full_names(self):
        nested = make_message("Inner", fields=[make_field("x", 1)])
        file = load(
            make_file("a.proto", package="pkg", messages=[make_message("Outer", nested=[nested])])
        )
        inner = file.messages[0].messages[0]

        assert inner.relative_name == "Outer.Inner"
        assert inner.full_name == "pkg.Outer.Inner"
        assert inner.fields[0].full_name == "pkg.Outer.Inner.x"


class TestDescriptorSet:
    """Test cross-file lookups."""

    def test_resolves_types_across_files(self):
        dep = make_file(
            "dep.proto",
            package="dep",
            messages=[make_message("Shared")],
            enums=[make_enum("Mode", [("MODE_OFF", 0)])],
        )
        fields = [
            make_field("shared", 1, type=F.TYPE_MESSAGE, type_name=".dep.Shared"),
            make_field("mode", 2, type=F.TYPE_ENUM, type_name=".dep.Mode"),
        ]
        main = make_file(
            "main.proto", messages=[make_message("M", fields=fields)], dependencies=["dep.proto"]
        )
        descriptor_set = DescriptorSet([dep, main])
        shared, mode = descriptor_set.file("main.proto").messages[0].fields

        assert shared.message_type is descriptor_set.find_message(".dep.Shared")
        assert mode.enum_type is descriptor_set.find_enum(".dep.Mode")
        assert descriptor_set.file("main.proto").dependencies == [descriptor_set.file("dep.proto")]

    def test_unknown_file(self):
        assert DescriptorSet([]).file("missing.proto") is None

    def test_syntax_defaults_to_proto2(self):
        file = load(make_file("a.proto", syntax=""))
        assert file.syntax == "proto2"
        assert not file.is_proto3

    def test_unknown_field_type(self):
        fields = [make_field("missing", 1, type=F.TYPE_MESSAGE, type_name=".pkg.Missing")]
        file = load(make_file("a.proto", package="pkg", messages=[make_message("M", fields=fields)]))

        with pytest.raises(UnresolvedTypeError, match=r"pkg\.M\.missing: unknown type '\.pkg\.Missing'"):
            file.messages[0].fields[0].message_type


class TestToJsonName:
    def test_conversion(self):
        assert to_json_name("foo_bar_baz") == "fooBarBaz"
        assert to_json_name("already") == "already"
