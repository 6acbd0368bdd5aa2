"""
Code generation for protoc-gen-swift.

``core`` holds the language-agnostic pieces; ``swift`` the Swift generators.
"""

from .core import ConfigError, GenerationError, GeneratorOptions, OutputUnit
from .swift import FileGenerator

__all__ = [
    "ConfigError",
    "GenerationError",
    "GeneratorOptions",
    "OutputUnit",
    "FileGenerator",
]
