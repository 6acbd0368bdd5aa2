"""
Configuration management for code generation.

Parses the free-form parameter string that protoc passes to the plugin
(``--swift_opt=Key=Value``) into a typed options structure, validating
every key and value before any file is generated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ...logging_config import get_logger
from .module_mappings import ModuleMappingError, ProtoFileToModuleMappings

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class OutputNaming(Enum):
    """How output filenames are derived from proto file paths."""

    FULL_PATH = "FullPath"
    PATH_TO_UNDERSCORES = "PathToUnderscores"
    DROP_PATH = "DropPath"
    PACKAGE = "Package"


class Visibility(Enum):
    """Access level of the generated Swift symbols."""

    INTERNAL = "Internal"
    PUBLIC = "Public"
    PACKAGE = "Package"


def parse_parameter(parameter: Optional[str]) -> List[Tuple[str, str]]:
    """
    Split a protoc parameter string into (key, value) pairs.

    Items are comma separated; ``key`` alone yields an empty value.

    Args:
        parameter: Raw parameter string from the request

    Returns:
        Ordered list of (key, value) pairs
    """
    if not parameter:
        return []

    pairs = []
    for item in parameter.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        pairs.append((key.strip(), value.strip() if sep else ""))
    return pairs


def _parse_enum(enum_cls, key: str, value: str):
    for member in enum_cls:
        if member.value == value:
            return member
    raise ConfigError(f"Unknown value for {key}: {value}")


def _parse_bool(key: str, value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise ConfigError(f"Unknown value for {key}: {value}")


@dataclass
class GeneratorOptions:
    """Options controlling one generation run."""

    output_naming: OutputNaming = OutputNaming.FULL_PATH
    visibility: Visibility = Visibility.INTERNAL
    implementation_only_imports: bool = False
    proto_to_module_mappings: ProtoFileToModuleMappings = field(
        default_factory=ProtoFileToModuleMappings
    )

    @classmethod
    def from_parameter(cls, parameter: Optional[str]) -> "GeneratorOptions":
        """
        Build options from the request's parameter string.

        Raises:
            ConfigError: On an unknown key, an invalid value, or an
                unreadable module mapping file
        """
        options = cls()
        module_mappings_path = None

        for key, value in parse_parameter(parameter):
            if key == "FileNaming":
                options.output_naming = _parse_enum(OutputNaming, key, value)
            elif key == "Visibility":
                options.visibility = _parse_enum(Visibility, key, value)
            elif key == "ProtoPathModuleMappings":
                if not value:
                    raise ConfigError(f"Unknown value for {key}: {value}")
                module_mappings_path = value
            elif key == "ImplementationOnlyImports":
                options.implementation_only_imports = _parse_bool(key, value)
            else:
                raise ConfigError(f"Unknown parameter: {key}")

        if module_mappings_path:
            try:
                options.proto_to_module_mappings = (
                    ProtoFileToModuleMappings.from_file(module_mappings_path)
                )
            except ModuleMappingError as e:
                raise ConfigError(str(e)) from e

        logger.debug("Generator options: %s", options)
        return options

    @property
    def visibility_source_snippet(self) -> str:
        """Access modifier prefix for generated declarations."""
        if self.visibility == Visibility.PUBLIC:
            return "public "
        if self.visibility == Visibility.PACKAGE:
            return "package "
        return ""
