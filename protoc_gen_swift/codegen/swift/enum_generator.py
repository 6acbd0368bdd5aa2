"""Generates the Swift enum for one proto enum."""

from typing import Any, Dict, List

from ..core.config import GeneratorOptions
from ..core.descriptor import EnumDescriptor
from ..core.generator import DeclarationGenerator, GenerationError
from ..core.printer import CodePrinter
from .naming import SwiftNamer
from .templates import get_swift_template_engine
from .types import RUNTIME_MODULE


class EnumGenerator(DeclarationGenerator):
    """Code generator for a proto enum."""

    def __init__(
        self,
        descriptor: EnumDescriptor,
        generator_options: GeneratorOptions,
        namer: SwiftNamer,
    ):
        self.descriptor = descriptor
        self.generator_options = generator_options
        self.namer = namer
        self.swift_full_name = namer.full_name(descriptor)
        self.visibility = generator_options.visibility_source_snippet
        self.template_engine = get_swift_template_engine()
        self.cases = self._build_cases()

    def _build_cases(self) -> List[Dict[str, Any]]:
        """One case per distinct number; later aliases only reach the name map."""
        cases = []
        seen_numbers = set()
        for value in self.descriptor.values:
            if value.number in seen_numbers:
                continue
            seen_numbers.add(value.number)
            cases.append(
                {
                    "name": self.namer.enum_case_name(value),
                    "proto_name": value.name,
                    "number": value.number,
                    "comments": value.source_comments_with_deprecation(),
                }
            )
        return cases

    def _check_case_names(self) -> None:
        owners: Dict[str, str] = {}
        for case in self.cases:
            other = owners.get(case["name"])
            if other is not None:
                raise GenerationError(
                    f"{self.descriptor.full_name} has values '{other}' and "
                    f"'{case['proto_name']}' that both generate the Swift case "
                    f"'{case['name']}'."
                )
            owners[case["name"]] = case["proto_name"]

    def generate_main(self, printer: CodePrinter) -> None:
        """
        Emit the enum declaration.

        Raises:
            GenerationError: If two values would get the same Swift case
        """
        self._check_case_names()

        context = {
            "comments": self.descriptor.source_comments_with_deprecation(),
            "visibility": self.visibility,
            "name": self.namer.declared_name(self.descriptor),
            "runtime": RUNTIME_MODULE,
            "cases": self.cases,
            "closed": self.descriptor.is_closed,
            "default_case": self.cases[0]["name"],
        }
        printer.print(self.template_engine.render_template("enum.swift", context))

    def generate_case_iterable(
        self, printer: CodePrinter, include_guards: bool = True
    ) -> None:
        """
        Emit ``CaseIterable`` conformance.

        Closed enums have no UNRECOGNIZED case, so the compiler synthesizes
        ``allCases`` and the extension body stays empty.
        """
        context = {
            "guards": include_guards,
            "closed": self.descriptor.is_closed,
            "full_name": self.swift_full_name,
            "visibility": self.visibility,
            "cases": self.cases,
        }
        printer.print(
            self.template_engine.render_template("enum_case_iterable.swift", context)
        )

    def generate_runtime_support(self, printer: CodePrinter) -> None:
        context = {
            "full_name": self.swift_full_name,
            "runtime": RUNTIME_MODULE,
            "visibility": self.visibility,
            "name_map": self._name_map_entries(),
        }
        printer.print(self.template_engine.render_template("enum_runtime.swift", context))

    def _name_map_entries(self) -> List[str]:
        names_by_number: Dict[int, List[str]] = {}
        for value in self.descriptor.values:
            names_by_number.setdefault(value.number, []).append(value.name)

        entries = []
        for number in sorted(names_by_number):
            names = names_by_number[number]
            if len(names) == 1:
                entries.append(f'{number}: .same(proto: "{names[0]}")')
            else:
                aliases = ", ".join(f'"{name}"' for name in names[1:])
                entries.append(
                    f'{number}: .aliased(proto: "{names[0]}", aliases: [{aliases}])'
                )
        return entries
