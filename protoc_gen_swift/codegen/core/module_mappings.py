"""
Proto file to Swift module mappings.

When generated code is split across Swift modules, a file that imports a
proto compiled into another module must ``import`` that module. The table
is loaded from a JSON file named by the ``ProtoPathModuleMappings`` option:

    {
      "mapping": [
        {"module_name": "Foo", "proto_file_path": ["foo/a.proto", "foo/b.proto"]}
      ]
    }
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class ModuleMappingError(Exception):
    """Exception raised for an unreadable or inconsistent mapping table."""

    pass


class ProtoFileToModuleMappings:
    """Maps proto file paths to the Swift module that contains them."""

    def __init__(self, mappings: Optional[Dict[str, str]] = None):
        self._mappings: Dict[str, str] = dict(mappings or {})

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ProtoFileToModuleMappings":
        """Load mappings from a JSON file."""
        path = Path(path)

        if not path.exists():
            raise ModuleMappingError(f"Module mappings file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ModuleMappingError(
                f"Invalid JSON in module mappings file {path}: {e}"
            ) from e
        except OSError as e:
            raise ModuleMappingError(
                f"Failed to load module mappings file {path}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ModuleMappingError(
                f"Module mappings file must contain a JSON object: {path}"
            )

        logger.debug("Loaded module mappings from %s", path)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProtoFileToModuleMappings":
        """Build mappings from the decoded JSON structure."""
        mappings: Dict[str, str] = {}

        for index, entry in enumerate(data.get("mapping", [])):
            module_name = entry.get("module_name") if isinstance(entry, dict) else None
            if not module_name:
                raise ModuleMappingError(
                    f"Module mapping entry {index} has no module_name"
                )

            for proto_path in entry.get("proto_file_path", []):
                existing = mappings.get(proto_path)
                if existing is not None and existing != module_name:
                    raise ModuleMappingError(
                        f"Duplicate proto file path mapping: '{proto_path}' is "
                        f"mapped to both '{existing}' and '{module_name}'"
                    )
                mappings[proto_path] = module_name

        return cls(mappings)

    def needed_modules(self, file) -> Optional[List[str]]:
        """
        Modules the generated code for ``file`` has to import.

        Direct dependencies count, and so does everything they re-export
        through ``import public``. The file's own module is never listed.

        Args:
            file: FileDescriptor being generated

        Returns:
            Sorted module names, or None when no mappings are configured
        """
        if not self._mappings:
            return None

        own_module = self._mappings.get(file.name)
        modules: Set[str] = set()
        visited: Set[str] = set()

        def collect(dependency) -> None:
            if dependency.name in visited:
                return
            visited.add(dependency.name)

            module = self._mappings.get(dependency.name)
            if module and module != own_module:
                modules.add(module)

            for public_dependency in dependency.public_dependencies:
                collect(public_dependency)

        for dependency in file.dependencies:
            collect(dependency)

        return sorted(modules)
