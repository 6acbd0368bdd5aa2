"""Header, file comments and imports at the top of every generated file."""

from ..core.config import GeneratorOptions, Visibility
from ..core.descriptor import FileDescriptor, format_source_comment
from ..core.generator import GenerationError
from .templates import get_swift_template_engine
from .types import RUNTIME_MODULE

IMPLEMENTATION_ONLY_ANNOTATION = "@_implementationOnly "

IMPLEMENTATION_ONLY_PUBLIC_ERROR = (
    "Cannot use @_implementationOnly imports when the proto visibility is public.\n"
    "Either change the visibility to internal, or disable @_implementationOnly imports."
)


def import_annotation(options: GeneratorOptions) -> str:
    """Prefix for dependency imports; hides them when symbols are not public."""
    if options.implementation_only_imports and options.visibility != Visibility.PUBLIC:
        return IMPLEMENTATION_ONLY_ANNOTATION
    return ""


def build_file_preamble(file: FileDescriptor, options: GeneratorOptions) -> str:
    """
    Assemble the text that precedes the generated declarations.

    Raises:
        GenerationError: If implementation-only imports are requested while
            the generated symbols are public
    """
    parts = [
        get_swift_template_engine().render_template(
            "file_header.swift", {"source": file.name}
        )
    ]

    # Comments above the syntax statement carry the file's copyright and
    # license text.
    syntax_location = file.syntax_location()
    if syntax_location is not None:
        comments = format_source_comment(
            syntax_location, comment_prefix="///", leading_detached_prefix="//"
        )
        if comments:
            parts.append(comments)
            if not comments.endswith("\n\n"):
                parts.append("\n")

    parts.append("import Foundation\n")
    parts.append(f"import {RUNTIME_MODULE}\n")

    if options.implementation_only_imports and options.visibility == Visibility.PUBLIC:
        raise GenerationError(IMPLEMENTATION_ONLY_PUBLIC_ERROR)

    annotation = import_annotation(options)
    needed_modules = options.proto_to_module_mappings.needed_modules(file)
    if needed_modules:
        parts.append("\n")
        for module in needed_modules:
            parts.append(f"{annotation}import {module}\n")

    return "".join(parts)
