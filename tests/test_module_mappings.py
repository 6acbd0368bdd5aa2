"""
Tests for proto file to module mappings.
"""

import pytest

from protoc_gen_swift.codegen.core.module_mappings import (
    ModuleMappingError,
    ProtoFileToModuleMappings,
)
from protoc_gen_swift.codegen.core.descriptor import DescriptorSet
from tests.proto_helpers import make_file


@pytest.fixture
def mappings():
    return ProtoFileToModuleMappings.from_dict(
        {
            "mapping": [
                {"module_name": "Base", "proto_file_path": ["base.proto"]},
                {"module_name": "Common", "proto_file_path": ["common.proto", "reexport.proto"]},
                {"module_name": "App", "proto_file_path": ["app.proto", "sibling.proto"]},
            ]
        }
    )


class TestLoading:
    """Test reading the mapping table."""

    def test_from_file(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text('{"mapping": [{"module_name": "M", "proto_file_path": ["a.proto"]}]}')

        mappings = ProtoFileToModuleMappings.from_file(path)
        descriptor_set = DescriptorSet(
            [
                make_file("a.proto"),
                make_file("b.proto"),
                make_file("app.proto", dependencies=["a.proto", "b.proto"]),
            ]
        )

        assert mappings.needed_modules(descriptor_set.file("app.proto")) == ["M"]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text("{not json")

        with pytest.raises(ModuleMappingError, match="Invalid JSON"):
            ProtoFileToModuleMappings.from_file(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text("[]")

        with pytest.raises(ModuleMappingError, match="JSON object"):
            ProtoFileToModuleMappings.from_file(path)

    def test_entry_without_module(self):
        with pytest.raises(ModuleMappingError, match="no module_name"):
            ProtoFileToModuleMappings.from_dict({"mapping": [{"proto_file_path": ["a.proto"]}]})

    def test_conflicting_entries(self):
        data = {
            "mapping": [
                {"module_name": "A", "proto_file_path": ["x.proto"]},
                {"module_name": "B", "proto_file_path": ["x.proto"]},
            ]
        }
        with pytest.raises(ModuleMappingError, match="Duplicate"):
            ProtoFileToModuleMappings.from_dict(data)


class TestNeededModules:
    """Test which modules a file must import."""

    def test_no_mappings(self):
        descriptor_set = DescriptorSet([make_file("app.proto")])
        assert ProtoFileToModuleMappings().needed_modules(descriptor_set.file("app.proto")) is None

    def test_direct_and_public_dependencies(self, mappings):
        descriptor_set = DescriptorSet(
            [
                make_file("base.proto"),
                make_file("reexport.proto", dependencies=["base.proto"], public_dependencies=[0]),
                make_file("sibling.proto"),
                make_file("unmapped.proto"),
                make_file(
                    "app.proto",
                    dependencies=["reexport.proto", "sibling.proto", "unmapped.proto"],
                ),
            ]
        )

        needed = mappings.needed_modules(descriptor_set.file("app.proto"))

        assert needed == ["Base", "Common"]

    def test_private_transitive_dependencies_ignored(self, mappings):
        descriptor_set = DescriptorSet(
            [
                make_file("base.proto"),
                make_file("common.proto", dependencies=["base.proto"]),
                make_file("app.proto", dependencies=["common.proto"]),
            ]
        )

        assert mappings.needed_modules(descriptor_set.file("app.proto")) == ["Common"]
