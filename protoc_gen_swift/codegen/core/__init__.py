"""
Core code generation components.

Provides the descriptor model, options, naming and template utilities
used by the Swift generators.
"""

from .generator import (
    DeclarationGenerator,
    ExtensionSupportGenerator,
    GenerationError,
    OutputUnit,
)
from .descriptor import (
    DescriptorSet,
    EnumDescriptor,
    EnumValueDescriptor,
    FieldDescriptor,
    FileDescriptor,
    MessageDescriptor,
    UnresolvedTypeError,
)
from .deprecation import (
    ProvidesDeprecation,
    SimpleProvidesDeprecation,
    TypeOrFileProvidesDeprecation,
    combine_comments_with_deprecation,
)
from .filenames import FilenameRegistry, output_filename, split_path
from .naming import NameSanitizer, NamingCase
from .config import ConfigError, GeneratorOptions, OutputNaming, Visibility
from .module_mappings import ProtoFileToModuleMappings
from .printer import CodePrinter
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Generator interfaces
    "DeclarationGenerator",
    "ExtensionSupportGenerator",
    "GenerationError",
    "OutputUnit",
    "CodePrinter",
    # Descriptor model
    "DescriptorSet",
    "FileDescriptor",
    "MessageDescriptor",
    "EnumDescriptor",
    "EnumValueDescriptor",
    "FieldDescriptor",
    "UnresolvedTypeError",
    # Deprecation
    "ProvidesDeprecation",
    "SimpleProvidesDeprecation",
    "TypeOrFileProvidesDeprecation",
    "combine_comments_with_deprecation",
    # Output filenames
    "FilenameRegistry",
    "output_filename",
    "split_path",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "ConfigError",
    "GeneratorOptions",
    "OutputNaming",
    "Visibility",
    "ProtoFileToModuleMappings",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
