"""
Rules about functions and expressions that should not be used.
"""

import re
from typing import List

from flintpp.core.findings import Severity
from flintpp.core.rules import PatternRule, RuleMetadata, rule


BLACKLISTED_FUNCTIONS = [
    "gets",
    "strcpy",
    "strcat",
    "sprintf",
    "vsprintf",
    "strtok",
    "atoi",
    "atol",
]


@rule
class BlacklistedFunctionRule(PatternRule):
    """
    Detects calls to C library functions that are unsafe or have
    better-behaved replacements.
    """

    PATTERN = re.compile(
        r"(?<![\w.])(?<!->)\b(" + "|".join(BLACKLISTED_FUNCTIONS) + r")\s*\("
    )

    @property
    def metadata(self) -> RuleMetadata:
        return RuleMetadata(
            rule_id="FLINT-001",
            name="Blacklisted function",
            description=(
                "This function is unsafe or deprecated. Use a bounded or "
                "reentrant replacement such as snprintf, strncpy or strtol."
            ),
            severity=Severity.ERROR,
        )

    @property
    def patterns(self) -> List["re.Pattern[str]"]:
        return [self.PATTERN]

    def format_title(self, match: "re.Match[str]") -> str:
        return f"Blacklisted function '{match.group(1)}'"


@rule
class ThrowByPointerRule(PatternRule):
    """Detects ``throw new`` expressions."""

    @property
    def metadata(self) -> RuleMetadata:
        return RuleMetadata(
            rule_id="FLINT-007",
            name="Throw by pointer",
            description=(
                "Exceptions should be thrown by value and caught by reference. "
                "Throwing a heap allocated object leaks it unless every handler deletes it."
            ),
            severity=Severity.ERROR,
            cpp_only=True,
        )

    @property
    def patterns(self) -> List["re.Pattern[str]"]:
        return [re.compile(r"\bthrow\s+new\b")]
