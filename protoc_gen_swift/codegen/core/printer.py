"""Text accumulator shared by the generators of one output file."""

from typing import List


class CodePrinter:
    """Collects generated text in order."""

    def __init__(self):
        self._chunks: List[str] = []

    def print(self, *text: str) -> None:
        """Append each piece of text as-is."""
        self._chunks.extend(t for t in text if t)

    @property
    def content(self) -> str:
        return "".join(self._chunks)

    @property
    def is_empty(self) -> bool:
        return not self._chunks
