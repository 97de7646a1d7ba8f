"""
Finding data structures for the style checker.

A Finding is one reported style issue: a severity, the line it was found
on, a short title and a longer description.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Union


def safe_text(value: str) -> str:
    """
    Replace lone surrogates with U+FFFD so the text can be encoded.

    Surrogate-escaped file names from ``os.walk`` and stray surrogates in
    titles would otherwise make writing the report fail. A surrogate pair
    split over two code points is joined back into one character.
    """
    try:
        value.encode("utf-8")
        return value
    except UnicodeEncodeError:
        return value.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


class Severity(IntEnum):
    """
    Severity levels for findings, ordered by increasing verbosity.

    ERROR is the least verbose level (always shown), ADVICE the most
    verbose (shown only at the most permissive threshold).
    """
    ERROR = 0
    WARNING = 1
    ADVICE = 2

    @classmethod
    def clamp(cls, value: Union[int, float, str, "Severity"]) -> "Severity":
        """
        Map a level number or name onto the nearest valid severity.

        Never raises: fractional levels are truncated and anything that
        is not a number or a severity name means the most verbose level.
        """
        if isinstance(value, str):
            name = value.strip().upper()
            if name in cls.__members__:
                return cls[name]
            try:
                value = float(name)
            except ValueError:
                return cls.ADVICE
        try:
            value = int(value)
        except (TypeError, ValueError, OverflowError):
            return cls.ADVICE
        if value < cls.ERROR:
            return cls.ERROR
        if value > cls.ADVICE:
            return cls.ADVICE
        return cls(value)

    @property
    def title(self) -> str:
        return self.name.capitalize()

    @property
    def label(self) -> str:
        """The fixed-width tag used in human-readable output."""
        return f"[{self.title:<7}]"

    def visible_at(self, threshold: "Severity") -> bool:
        """Check if findings of this severity are shown at a threshold."""
        return self <= threshold


@dataclass(frozen=True)
class Finding:
    """Represents a single style finding on one line of a file."""
    severity: Severity
    line: int
    title: str
    description: str = ""

    def __post_init__(self):
        if not isinstance(self.severity, Severity):
            object.__setattr__(self, "severity", Severity.clamp(self.severity))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.severity.title,
            "line": self.line,
            "title": self.title,
            "desc": self.description,
        }

    def format_line(self, path: str) -> str:
        """Format the finding as a single human-readable line."""
        return f"{self.severity.label} {safe_text(path)}:{self.line}: {safe_text(self.title)}\n"
