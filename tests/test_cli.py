"""
Tests for the command-line entry point.
"""

from io import BytesIO

import pytest
from google.protobuf.compiler import plugin_pb2

from protoc_gen_swift.cli import create_parser, main
from tests.proto_helpers import F, make_field, make_file, make_message, make_request


def run_plugin(data: bytes):
    stdout = BytesIO()
    exit_code = main([], stdin=BytesIO(data), stdout=stdout)
    return exit_code, stdout.getvalue()


class TestArguments:
    def test_parser_flags(self):
        args = create_parser().parse_args(["--version"])
        assert args.show_version
        assert not args.show_help

    def test_help(self, capsys):
        assert main(["--help"]) == 0
        assert "Usage: protoc-gen-swift [options]" in capsys.readouterr().out

    def test_short_help(self, capsys):
        assert main(["-h"]) == 0
        assert "protoc-gen-swift" in capsys.readouterr().out

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert capsys.readouterr().out.strip() == "protoc-gen-swift 0.1.0"


class TestPluginRun:
    """Test the stdin to stdout round trip."""

    def test_writes_response(self):
        request = make_request([make_file("a.proto", messages=[make_message("A")])])

        exit_code, output = run_plugin(request.SerializeToString())

        response = plugin_pb2.CodeGeneratorResponse.FromString(output)
        assert exit_code == 0
        assert [f.name for f in response.file] == ["a.pb.swift"]

    def test_generation_error_is_not_a_process_failure(self):
        request = make_request([make_file("a.proto", swift_prefix="9X")])

        exit_code, output = run_plugin(request.SerializeToString())

        response = plugin_pb2.CodeGeneratorResponse.FromString(output)
        assert exit_code == 0
        assert "swift_prefix" in response.error
        assert len(response.file) == 0

    def test_malformed_request(self):
        exit_code, output = run_plugin(b"\x0a\x05ab")

        assert exit_code == 1
        assert output == b""

    def test_missing_file_to_generate(self):
        request = make_request([make_file("a.proto")], to_generate=["b.proto"])

        exit_code, output = run_plugin(request.SerializeToString())

        assert exit_code == 1
        assert output == b""

    def test_unresolved_type_fails_the_process(self):
        field = make_field("ref", 1, type=F.TYPE_ENUM, type_name=".Missing")
        request = make_request([make_file("a.proto", messages=[make_message("A", fields=[field])])])

        exit_code, output = run_plugin(request.SerializeToString())

        assert exit_code == 1
        assert output == b""


class TestUnknownOptions:
    def test_rejected_by_argparse(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--bogus"])

        assert exc_info.value.code == 2
