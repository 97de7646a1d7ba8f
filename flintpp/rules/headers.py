"""
Rules about headers and includes.
"""

import re
from typing import List

from flintpp.core.files import FileCategory
from flintpp.core.findings import Severity
from flintpp.core.rules import (
    HEADER_CATEGORIES, LintContext, PatternRule, Rule, RuleMetadata, rule
)


@rule
class UsingNamespaceInHeaderRule(PatternRule):
    """
    Detects ``using namespace`` directives in headers, which leak into
    every file that includes them.
    """

    @property
    def metadata(self) -> RuleMetadata:
        return RuleMetadata(
            rule_id="FLINT-002",
            name="Using directive in header",
            description=(
                "Using directives in headers pull the namespace into every "
                "translation unit that includes the header."
            ),
            severity=Severity.ERROR,
            cpp_only=True,
            categories=HEADER_CATEGORIES,
        )

    @property
    def patterns(self) -> List["re.Pattern[str]"]:
        return [re.compile(r"^\s*using\s+namespace\s+[\w:]+\s*;")]

    def format_title(self, match: "re.Match[str]") -> str:
        return "Using directive in header: '" + match.group(0).strip() + "'"


@rule
class IncludeGuardRule(Rule):
    """
    Headers must be protected by ``#pragma once`` or a classic
    ``#ifndef``/``#define`` include guard.
    """

    PRAGMA_ONCE = re.compile(r"^\s*#\s*pragma\s+once\b", re.MULTILINE)
    IFNDEF_GUARD = re.compile(r"^\s*#\s*ifndef\s+(\w+)\s*\r?\n\s*#\s*define\s+\1\b", re.MULTILINE)

    @property
    def metadata(self) -> RuleMetadata:
        return RuleMetadata(
            rule_id="FLINT-003",
            name="Missing include guard",
            description="Header files should begin with '#pragma once' or an include guard.",
            severity=Severity.WARNING,
            categories=frozenset({FileCategory.HEADER}),
        )

    def check(self, context: LintContext):
        if not context.content.strip():
            return
        if self.PRAGMA_ONCE.search(context.content):
            return
        if self.IFNDEF_GUARD.search(context.content):
            return
        self.report(context, 1)


@rule
class IncludeSourceFileRule(PatternRule):
    """Detects ``#include`` of a source file."""

    @property
    def metadata(self) -> RuleMetadata:
        return RuleMetadata(
            rule_id="FLINT-004",
            name="Including a source file",
            description="Source files should be compiled and linked, not included.",
            severity=Severity.ERROR,
        )

    @property
    def patterns(self) -> List["re.Pattern[str]"]:
        return [re.compile(r"^\s*#\s*include\s*[\"<]([^\">]+\.(?:c|cc|cpp|cxx))[\">]")]

    def format_title(self, match: "re.Match[str]") -> str:
        return f"Including a source file '{match.group(1)}'"
