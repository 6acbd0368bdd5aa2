"""
Output filename resolution.

Maps a proto file path to the name of the generated Swift file under the
configured naming policy, keeping names unique within one run.
"""

from typing import Dict, Tuple

from .config import OutputNaming

OUTPUT_EXTENSION = ".pb.swift"


def split_path(pathname: str) -> Tuple[str, str, str]:
    """
    Split a path into (directory, base name, suffix).

    The directory keeps its trailing slash and the suffix keeps its dot:
    ``"a/b.c.proto"`` becomes ``("a/", "b.c", ".proto")``.
    """
    directory, sep, filename = pathname.rpartition("/")
    directory = directory + sep

    base, dot, suffix = filename.rpartition(".")
    if not dot:
        return directory, filename, ""
    return directory, base, dot + suffix


class FilenameRegistry:
    """Collision counters for the base names handed out during one run."""

    def __init__(self):
        self._counts: Dict[str, int] = {}

    def make_name(self, name: str) -> str:
        """Return ``name`` the first time, then ``name.1``, ``name.2``, ..."""
        count = self._counts.get(name)
        if count is None:
            self._counts[name] = 1
            return name
        self._counts[name] = count + 1
        return f"{name}.{count}"


def output_filename(
    path: str,
    naming: OutputNaming,
    package: str,
    registry: FilenameRegistry,
) -> str:
    """
    Resolve the generated filename for one proto file.

    ``PATH_TO_UNDERSCORES`` does not consult the registry; flattening the
    directory is expected to keep those names apart.
    """
    directory, base, _ = split_path(path)

    if naming == OutputNaming.FULL_PATH:
        return directory + registry.make_name(base) + OUTPUT_EXTENSION
    if naming == OutputNaming.PATH_TO_UNDERSCORES:
        return directory.replace("/", "_") + base + OUTPUT_EXTENSION
    if naming == OutputNaming.DROP_PATH:
        return registry.make_name(base) + OUTPUT_EXTENSION
    if naming == OutputNaming.PACKAGE:
        return package + "/" + registry.make_name(base) + OUTPUT_EXTENSION
    raise ValueError(f"Unsupported output naming: {naming}")
