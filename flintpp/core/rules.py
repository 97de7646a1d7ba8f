"""
Rule engine for the style checker.

This module provides the base classes for defining style rules, the
context handed to each rule while a file is checked, and the registry
used to discover rules.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Type

from flintpp.core.files import FileCategory
from flintpp.core.findings import Finding, Severity
from flintpp.core.report import FileReport


ALL_CATEGORIES: FrozenSet[FileCategory] = frozenset({
    FileCategory.HEADER,
    FileCategory.INL_HEADER,
    FileCategory.SOURCE_C,
    FileCategory.SOURCE_CPP,
})

HEADER_CATEGORIES: FrozenSet[FileCategory] = frozenset({
    FileCategory.HEADER,
    FileCategory.INL_HEADER,
})


@dataclass(frozen=True)
class RuleMetadata:
    """Metadata for a rule."""
    rule_id: str
    name: str
    description: str
    severity: Severity
    cpp_only: bool = False
    categories: FrozenSet[FileCategory] = field(default=ALL_CATEGORIES)


class LintContext:
    """
    Context provided to rules while one file is checked.

    ``content`` is the text after ignored regions were blanked, so line
    numbers are the same as in the original file.
    """

    def __init__(
        self,
        path: str,
        content: str,
        category: FileCategory,
        c_mode: bool = False,
        report: Optional[FileReport] = None,
    ):
        self.path = path
        self.content = content
        self.category = category
        self.c_mode = c_mode
        self.report = report if report is not None else FileReport(path)
        self._lines: Optional[List[str]] = None

    @property
    def lines(self) -> List[str]:
        """Get the source lines, without line terminators."""
        if self._lines is None:
            self._lines = self.content.split("\n")
            if self._lines and self._lines[-1] == "" and self.content.endswith("\n"):
                self._lines.pop()
        return self._lines

    def add_finding(self, severity: Severity, line: int, title: str, description: str = "") -> Finding:
        finding = Finding(severity=severity, line=line, title=title, description=description)
        self.report.add(finding)
        return finding


class Rule(ABC):
    """
    Base class for all style rules.

    Each rule is an independent producer of findings for one file.
    """

    @property
    @abstractmethod
    def metadata(self) -> RuleMetadata:
        """Return rule metadata."""

    @abstractmethod
    def check(self, context: LintContext):
        """Check the file in context and add findings to its report."""

    def applies_to(self, context: LintContext) -> bool:
        """Check if this rule should run on a file."""
        meta = self.metadata
        if meta.cpp_only and context.c_mode:
            return False
        return context.category in meta.categories

    def report(self, context: LintContext, line: int, title: Optional[str] = None,
               description: Optional[str] = None) -> Finding:
        """Add a finding using the rule's metadata as defaults."""
        return context.add_finding(
            self.metadata.severity,
            line,
            title or self.metadata.name,
            description or self.metadata.description,
        )


class PatternRule(Rule):
    """
    A rule that matches regex patterns line by line.
    """

    @property
    @abstractmethod
    def patterns(self) -> List["re.Pattern[str]"]:
        """Return the regex patterns to match."""

    def format_title(self, match: "re.Match[str]") -> Optional[str]:
        """Build a finding title from a match. None uses the rule name."""
        return None

    def check(self, context: LintContext):
        for line_num, line in enumerate(context.lines, start=1):
            for pattern in self.patterns:
                for match in pattern.finditer(line):
                    self.report(context, line_num, title=self.format_title(match))


class RuleRegistry:
    """
    Registry for discovering rules.
    """

    _instance: Optional["RuleRegistry"] = None

    def __init__(self):
        self._rules: Dict[str, Rule] = {}
        self._disabled_rules: Set[str] = set()

    @classmethod
    def get_instance(cls) -> "RuleRegistry":
        """Get the singleton registry instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, rule_class: Type[Rule]) -> Type[Rule]:
        """
        Register a rule class.

        Can be used as a decorator:

        @registry.register
        class MyRule(Rule):
            ...
        """
        instance = rule_class()
        rule_id = instance.metadata.rule_id
        if rule_id in self._rules:
            raise ValueError(f"Duplicate rule id: {rule_id}")
        self._rules[rule_id] = instance
        return rule_class

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        return self._rules.get(rule_id)

    def get_rules(self, disabled: Iterable[str] = ()) -> List[Rule]:
        """
        Get the enabled rules, ordered by rule id.

        Rules disabled on the registry and the ids in ``disabled`` are left out.
        """
        disabled = self._disabled_rules.union(disabled)
        return [
            rule for rule_id, rule in sorted(self._rules.items())
            if rule_id not in disabled
        ]

    def enable_rule(self, rule_id: str):
        """Enable a rule by ID."""
        self._disabled_rules.discard(rule_id)

    def disable_rule(self, rule_id: str):
        """Disable a rule by ID."""
        self._disabled_rules.add(rule_id)

    def is_enabled(self, rule_id: str) -> bool:
        return rule_id in self._rules and rule_id not in self._disabled_rules

    @property
    def rule_count(self) -> int:
        return len(self._rules)


# Global registry instance
registry = RuleRegistry.get_instance()


def rule(cls: Type[Rule]) -> Type[Rule]:
    """
    Decorator to register a rule with the global registry.

    Usage:
        @rule
        class MyRule(Rule):
            ...
    """
    return registry.register(cls)
