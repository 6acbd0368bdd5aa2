"""
Command-line entry point for protoc-gen-swift.

protoc runs the plugin with a serialized CodeGeneratorRequest on stdin and
reads the serialized CodeGeneratorResponse from stdout.
"""

import argparse
import sys
from typing import BinaryIO, List, Optional

from rich.console import Console

from .logging_config import get_logger, setup_logging
from .plugin import PROGRAM_NAME, GeneratorPlugin, PluginError, parse_request

logger = get_logger(__name__)

# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser; help is printed by the plugin itself."""
    parser = argparse.ArgumentParser(prog=PROGRAM_NAME, add_help=False)
    parser.add_argument("-h", "--help", action="store_true", dest="show_help")
    parser.add_argument("--version", action="store_true", dest="show_version")
    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> int:
    """
    Run the plugin.

    Args:
        argv: Command-line arguments, without the program name
        stdin: Binary stream holding the request (default: sys.stdin)
        stdout: Binary stream for the response (default: sys.stdout)

    Returns:
        Exit code: 0 when a response was written, 1 otherwise
    """
    setup_logging()
    args = create_parser().parse_args(argv)
    plugin = GeneratorPlugin()

    if args.show_help:
        console.print(plugin.help_text(), markup=False, highlight=False, soft_wrap=True)
        return 0

    if args.show_version:
        console.print(plugin.version_text(), markup=False, highlight=False, soft_wrap=True)
        return 0

    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer

    try:
        request = parse_request(stdin.read())
        response = plugin.run(request)
    except PluginError as e:
        logger.error("%s", e)
        return 1

    stdout.write(response.SerializeToString())
    stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
