"""
General style rules.
"""

import re
from typing import Iterator, Set

from flintpp.core.files import FileCategory
from flintpp.core.findings import Severity
from flintpp.core.rules import LintContext, Rule, RuleMetadata, rule


@rule
class ExplicitConstructorRule(Rule):
    """
    Single-argument constructors should be marked ``explicit`` so they
    are not used as implicit conversions.

    Constructors are found textually: a line starting with the name of a
    class declared in the same file, followed by exactly one parameter.
    Copy and move constructors are skipped.
    """

    CLASS_NAME = re.compile(r"\b(?:class|struct)\s+(\w+)")

    @property
    def metadata(self) -> RuleMetadata:
        return RuleMetadata(
            rule_id="FLINT-005",
            name="Implicit single-argument constructor",
            description=(
                "Single-argument constructor may inadvertently be used as a "
                "type conversion constructor. Mark it 'explicit'."
            ),
            severity=Severity.WARNING,
            cpp_only=True,
            categories=frozenset({
                FileCategory.HEADER,
                FileCategory.INL_HEADER,
                FileCategory.SOURCE_CPP,
            }),
        )

    def class_names(self, context: LintContext) -> Set[str]:
        return set(self.CLASS_NAME.findall(context.content))

    def _candidates(self, context: LintContext, name: str) -> Iterator[int]:
        ctor = re.compile(r"^\s*(?:inline\s+|constexpr\s+)*" + re.escape(name) + r"\s*\(([^(),]*)\)")
        copy_or_move = re.compile(r"\b" + re.escape(name) + r"\s*(?:<[^>]*>\s*)?&")

        for line_num, line in enumerate(context.lines, start=1):
            match = ctor.match(line)
            if not match:
                continue
            param = match.group(1).strip()
            if not param or param == "void" or copy_or_move.search(param):
                continue
            if "initializer_list" in param:
                continue
            yield line_num

    def check(self, context: LintContext):
        for name in sorted(self.class_names(context)):
            for line_num in self._candidates(context, name):
                self.report(context, line_num, title=f"Implicit single-argument constructor '{name}'")


@rule
class TrailingWhitespaceRule(Rule):
    """Flags code lines that end with spaces or tabs."""

    @property
    def metadata(self) -> RuleMetadata:
        return RuleMetadata(
            rule_id="FLINT-006",
            name="Trailing whitespace",
            description="Line ends with whitespace.",
            severity=Severity.ADVICE,
        )

    def check(self, context: LintContext):
        for line_num, line in enumerate(context.lines, start=1):
            line = line.rstrip("\r")
            # Whitespace-only lines include blanked ignored regions.
            if line.strip() and line != line.rstrip(" \t"):
                self.report(context, line_num)
