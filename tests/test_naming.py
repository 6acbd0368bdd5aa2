"""
Tests for name sanitization and Swift naming.
"""

import pytest

from protoc_gen_swift.codegen.core.naming import NameSanitizer, NamingCase
from protoc_gen_swift.codegen.swift.naming import SwiftNamer, is_valid_swift_identifier
from tests.proto_helpers import F, load, make_enum, make_field, make_file, make_message


class TestNameSanitizer:
    """Test the generic sanitizer."""

    def setup_method(self):
        self.sanitizer = NameSanitizer({"class"}, {"description"}, suffix_on_conflict="_p")

    @pytest.mark.parametrize(
        "name,case,expected",
        [
            ("user_name", NamingCase.CAMEL_CASE, "userName"),
            ("user_name", NamingCase.PASCAL_CASE, "UserName"),
            ("userName", NamingCase.SNAKE_CASE, "user_name"),
            ("field_2d", NamingCase.CAMEL_CASE, "field2d"),
        ],
    )
    def test_case_conversion(self, name, case, expected):
        assert self.sanitizer.sanitize_name(name, case) == expected

    def test_reserved_gets_suffix(self):
        assert self.sanitizer.sanitize_name("class", NamingCase.CAMEL_CASE) == "class_p"
        assert self.sanitizer.sanitize_name("description", NamingCase.CAMEL_CASE) == "description_p"

    def test_suffix_override(self):
        assert self.sanitizer.sanitize_name("class", NamingCase.CAMEL_CASE, "") == "class"

    def test_invalid_characters(self):
        assert self.sanitizer.sanitize_name("my-field", NamingCase.SNAKE_CASE) == "my_field"
        assert self.sanitizer.sanitize_name("1st", NamingCase.SNAKE_CASE) == "1st"


class TestSwiftIdentifier:
    @pytest.mark.parametrize("name", ["Foo", "_bar", "Baz_9"])
    def test_valid(self, name):
        assert is_valid_swift_identifier(name)

    @pytest.mark.parametrize("name", ["", "9Foo", "Foo.Bar", "Foo Bar", "`class`"])
    def test_invalid(self, name):
        assert not is_valid_swift_identifier(name)

    def test_quoted_allowed(self):
        assert is_valid_swift_identifier("`class`", allow_quoted=True)


class TestSwiftNamer:
    """Test the spelling of generated declarations."""

    def test_type_prefix_from_package(self):
        file = load(make_file("a.proto", package="foo.bar_baz", messages=[make_message("Msg")]))
        namer = SwiftNamer(file)

        assert namer.type_prefix(file) == "Foo_BarBaz_"
        assert namer.full_name(file.messages[0]) == "Foo_BarBaz_Msg"

    def test_explicit_swift_prefix_wins(self):
        file = load(make_file("a.proto", package="foo", swift_prefix="XY", messages=[make_message("Msg")]))
        assert SwiftNamer(file).full_name(file.messages[0]) == "XYMsg"

    def test_empty_swift_prefix(self):
        file = load(make_file("a.proto", package="foo", swift_prefix="", messages=[make_message("Msg")]))
        assert SwiftNamer(file).full_name(file.messages[0]) == "Msg"

    def test_nested_names(self):
        inner = make_message("Inner")
        file = load(make_file("a.proto", package="p", messages=[make_message("Outer", nested=[inner])]))
        namer = SwiftNamer(file)
        nested = file.messages[0].messages[0]

        assert namer.full_name(nested) == "P_Outer.Inner"
        assert namer.declared_name(nested) == "Inner"
        assert namer.flat_name(nested) == "P_Outer_Inner"

    def test_field_names(self):
        fields = [
            make_field("user_name", 1),
            make_field("class", 2),
            make_field("unknown_fields", 3),
        ]
        file = load(make_file("a.proto", messages=[make_message("M", fields=fields)]))
        namer = SwiftNamer(file)
        user_name, klass, unknown = file.messages[0].fields

        assert namer.field_name(user_name) == "userName"
        assert namer.storage_name(user_name) == "_userName"
        assert namer.has_name(user_name) == "hasUserName"
        assert namer.clear_name(user_name) == "clearUserName"
        assert namer.field_name(klass) == "class_p"
        assert namer.field_name(unknown) == "unknownFields_p"

    def test_enum_case_names(self):
        enum = make_enum(
            "Color",
            [("COLOR_UNSPECIFIED", 0), ("COLOR_DARK_RED", 1), ("BLUE", 2), ("COLOR_1", 3), ("DEFAULT", 4)],
        )
        file = load(make_file("a.proto", enums=[enum]))
        namer = SwiftNamer(file)
        names = [namer.enum_case_name(v) for v in file.enums[0].values]

        assert names == ["unspecified", "darkRed", "blue", "color1", "`default`"]

    def test_enum_case_names_keep_prefix_when_stripping_collides(self):
        enum = make_enum("Foo", [("FOO_BAR", 0), ("BAR", 1), ("FOO_BAZ", 2), ("BAZ", 2)])
        file = load(make_file("a.proto", enums=[enum]))
        namer = SwiftNamer(file)
        names = [namer.enum_case_name(v) for v in file.enums[0].values]

        assert names == ["fooBar", "bar", "baz", "baz"]

    def test_extension_names(self):
        base = make_message("Base")
        scoped = make_field("note", 101, extendee=".p.Base")
        holder = make_message("Holder", extensions=[scoped])
        top = make_field("top_level", 100, type=F.TYPE_INT32, extendee=".p.Base")
        file = load(
            make_file("dir/my_things.proto", package="p", messages=[base, holder], extensions=[top])
        )
        namer = SwiftNamer(file)

        assert namer.extension_declaration_name(file.extensions[0]) == "P_Extensions_top_level"
        assert namer.extension_property_name(file.extensions[0]) == "P_topLevel"
        assert namer.extension_declaration_name(file.messages[1].extensions[0]) == "P_Holder_Extensions_note"
        assert namer.extension_property_name(file.messages[1].extensions[0]) == "P_Holder_note"
        assert namer.file_extensions_registry_name() == "P_MyThings_Extensions"
