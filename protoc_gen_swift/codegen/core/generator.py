"""
Base generator interfaces for all generated declarations.

Defines the contract the file-level orchestrator relies on: one family of
generators per construct kind, each writing into a shared CodePrinter.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from .printer import CodePrinter


class GenerationError(Exception):
    """A file could not be generated; carries a human-readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class OutputUnit:
    """One generated file."""

    name: str
    content: str


class DeclarationGenerator(ABC):
    """Generator for one enum or message declared in a file."""

    @abstractmethod
    def generate_main(self, printer: CodePrinter) -> None:
        """
        Emit the primary type definition.

        Raises:
            GenerationError: If the declaration cannot be expressed
        """
        pass

    @abstractmethod
    def generate_case_iterable(self, printer: CodePrinter) -> None:
        """Emit case-enumeration support; may emit nothing."""
        pass

    @abstractmethod
    def generate_runtime_support(self, printer: CodePrinter) -> None:
        """Emit the conformances that wire the type into the runtime."""
        pass


class ExtensionSupportGenerator(ABC):
    """Collects the extension fields of a file and emits their support."""

    @abstractmethod
    def add(self, extension_fields: Iterable) -> None:
        pass

    @property
    @abstractmethod
    def is_empty(self) -> bool:
        pass

    @abstractmethod
    def generate_message_extensions(self, printer: CodePrinter) -> None:
        """Emit accessors on the extended messages."""
        pass

    @abstractmethod
    def generate_file_extension_registry(self, printer: CodePrinter) -> None:
        """Emit the registry of every extension in the file."""
        pass

    @abstractmethod
    def generate_extension_declarations(self, printer: CodePrinter) -> None:
        """Emit the extension declarations the other two sections use."""
        pass
