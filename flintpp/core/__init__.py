"""Core linting engine and data structures."""

from flintpp.core.findings import Finding, Severity
from flintpp.core.ignored import Marker, MarkerKind, MarkerScanner, RegionSuppressor, remove_ignored_code
from flintpp.core.report import FileReport, RunReport, OutputFormat, RenderOptions
from flintpp.core.files import FileCategory, get_file_category
from flintpp.core.rules import Rule, RuleRegistry, LintContext
from flintpp.core.engine import LintEngine

__all__ = [
    "Finding",
    "Severity",
    "Marker",
    "MarkerKind",
    "MarkerScanner",
    "RegionSuppressor",
    "remove_ignored_code",
    "FileReport",
    "RunReport",
    "OutputFormat",
    "RenderOptions",
    "FileCategory",
    "get_file_category",
    "Rule",
    "RuleRegistry",
    "LintContext",
    "LintEngine",
]
