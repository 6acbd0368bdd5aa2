"""
Deprecation annotations for generated declarations.

Descriptors mix these classes in to expose a ``deprecation()`` snippet and
to combine it with their source comments into one documentation block.
"""

from abc import ABC, abstractmethod
from typing import Optional

DEPRECATION_ANNOTATION = "@available(*, deprecated)\n"
FILE_DEPRECATION_ANNOTATION = (
    '@available(*, deprecated, message: "This file was marked as deprecated.")\n'
)


def combine_comments_with_deprecation(source_comments: str, deprecation: str) -> str:
    """
    Append a deprecation annotation to a comment block.

    The annotation follows the comment directly, with no blank line between.
    """
    if not deprecation:
        return source_comments
    if not source_comments:
        return deprecation
    return f"{source_comments}{deprecation}"


class ProvidesDeprecation(ABC):
    """Mixin for descriptors that can be marked deprecated."""

    @abstractmethod
    def deprecation(self) -> str:
        """Return the annotation to emit, or an empty string."""
        pass

    def source_comments_with_deprecation(
        self,
        comment_prefix: str = "///",
        leading_detached_prefix: Optional[str] = None,
    ) -> str:
        """Source comments followed by the deprecation annotation, if any."""
        comments = self.source_comments(
            comment_prefix=comment_prefix,
            leading_detached_prefix=leading_detached_prefix,
        )
        return combine_comments_with_deprecation(comments, self.deprecation())


class SimpleProvidesDeprecation(ProvidesDeprecation):
    """Only the descriptor's own ``deprecated`` option counts."""

    def deprecation(self) -> str:
        if not self.is_deprecated:
            return ""
        return DEPRECATION_ANNOTATION


class TypeOrFileProvidesDeprecation(ProvidesDeprecation):
    """Deprecated when the type itself or its whole file is deprecated."""

    def deprecation(self) -> str:
        if self.is_deprecated:
            return DEPRECATION_ANNOTATION
        if self.file.is_deprecated:
            return FILE_DEPRECATION_ANNOTATION
        return ""
