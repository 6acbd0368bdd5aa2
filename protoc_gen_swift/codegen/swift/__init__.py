"""
Swift code generator module.

Generates Swift structs, enums and extension support for the
GRPCNetwork protobuf runtime.
"""

from .file_generator import FileGenerator
from .enum_generator import EnumGenerator
from .message_generator import MessageGenerator
from .extension_generator import ExtensionSetGenerator
from .naming import SwiftNamer, create_swift_sanitizer, is_valid_swift_identifier
from .preamble import build_file_preamble

__all__ = [
    "FileGenerator",
    "EnumGenerator",
    "MessageGenerator",
    "ExtensionSetGenerator",
    "SwiftNamer",
    "create_swift_sanitizer",
    "is_valid_swift_identifier",
    "build_file_preamble",
]
