"""
Report aggregation and serialization.

Findings are collected into a FileReport per linted file, and FileReports
into a single RunReport per invocation. Counters are always the true
totals; the severity threshold only decides which findings are written.
"""

import json
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, TextIO, Tuple

from flintpp.core.findings import Finding, Severity, safe_text


class OutputFormat(Enum):
    """Supported report formats."""
    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class RenderOptions:
    """Run-wide rendering settings, passed down to every render call."""
    output_format: OutputFormat = OutputFormat.TEXT
    threshold: Severity = Severity.ADVICE

    def __post_init__(self):
        object.__setattr__(self, "output_format", OutputFormat(self.output_format))
        object.__setattr__(self, "threshold", Severity.clamp(self.threshold))


def _sanitize(data: Any) -> Any:
    if isinstance(data, str):
        return safe_text(data)
    if isinstance(data, dict):
        return {key: _sanitize(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_sanitize(item) for item in data]
    return data


def _dump_json(data: Dict[str, Any]) -> str:
    return json.dumps(_sanitize(data), indent=4, ensure_ascii=False) + "\n"


@dataclass
class SeverityCounts:
    """Per-severity counters shared by file and run reports."""
    errors: int = 0
    warnings: int = 0
    advice: int = 0

    @property
    def total(self) -> int:
        return self.errors + self.warnings + self.advice

    def count(self, severity: Severity, amount: int = 1):
        if severity is Severity.ERROR:
            self.errors += amount
        elif severity is Severity.WARNING:
            self.warnings += amount
        else:
            self.advice += amount

    def merge(self, other: "SeverityCounts"):
        self.errors += other.errors
        self.warnings += other.warnings
        self.advice += other.advice

    def to_dict(self) -> Dict[str, int]:
        return {
            "errors": self.errors,
            "warnings": self.warnings,
            "advice": self.advice,
        }


class FileReport:
    """
    All findings for one file, in the order they were discovered.
    """

    def __init__(self, path: str):
        self.path = path
        self._findings: List[Finding] = []
        self._counts = SeverityCounts()

    @property
    def findings(self) -> Tuple[Finding, ...]:
        return tuple(self._findings)

    @property
    def counts(self) -> SeverityCounts:
        return SeverityCounts(**self._counts.to_dict())

    @property
    def errors(self) -> int:
        return self._counts.errors

    @property
    def warnings(self) -> int:
        return self._counts.warnings

    @property
    def advice(self) -> int:
        return self._counts.advice

    @property
    def total(self) -> int:
        return self._counts.total

    def add(self, finding: Finding):
        """Append a finding and count it. No deduplication is done."""
        self._findings.append(finding)
        self._counts.count(finding.severity)

    def visible_findings(self, threshold: Severity) -> List[Finding]:
        """Get the findings shown at a threshold, in insertion order."""
        return [f for f in self._findings if f.severity.visible_at(threshold)]

    def to_dict(self, threshold: Severity = Severity.ADVICE) -> Dict[str, Any]:
        """Convert to the structured form; counts are never filtered."""
        return {
            "path": self.path,
            **self._counts.to_dict(),
            "reports": [f.to_dict() for f in self.visible_findings(threshold)],
        }

    def format_text(self, threshold: Severity) -> str:
        if self.total == 0:
            return ""
        return "".join(f.format_line(self.path) for f in self.visible_findings(threshold))

    def render(self, options: RenderOptions, sink: TextIO):
        """Write this file's report to sink."""
        if options.output_format is OutputFormat.JSON:
            sink.write(_dump_json(self.to_dict(options.threshold)))
        else:
            sink.write(self.format_text(options.threshold))

    def __repr__(self) -> str:
        return f"FileReport(path={self.path!r}, total={self.total})"


class RunReport:
    """
    The whole report for one invocation.

    FileReports are kept in the order they were added. ``add`` is safe to
    call from several threads.
    """

    def __init__(self):
        self._files: List[FileReport] = []
        self._counts = SeverityCounts()
        self._lock = threading.Lock()

    @property
    def files(self) -> Tuple[FileReport, ...]:
        return tuple(self._files)

    @property
    def file_count(self) -> int:
        return len(self._files)

    @property
    def errors(self) -> int:
        return self._counts.errors

    @property
    def warnings(self) -> int:
        return self._counts.warnings

    @property
    def advice(self) -> int:
        return self._counts.advice

    @property
    def total(self) -> int:
        return self._counts.total

    def add(self, file_report: FileReport):
        with self._lock:
            self._files.append(file_report)
            self._counts.merge(file_report.counts)

    def to_dict(self, threshold: Severity = Severity.ADVICE) -> Dict[str, Any]:
        return {
            **self._counts.to_dict(),
            "files": [report.to_dict(threshold) for report in self._files],
        }

    def format_summary(self, threshold: Severity) -> str:
        summary = f"\nLint Summary: {self.file_count} files\nErrors: {self.errors}"
        if threshold >= Severity.WARNING:
            summary += f" Warnings: {self.warnings}"
        if threshold >= Severity.ADVICE:
            summary += f" Advice: {self.advice}"
        return summary + "\n"

    def format_text(self, threshold: Severity) -> str:
        lines = [report.format_text(threshold) for report in self._files if report.total > 0]
        lines.append(self.format_summary(threshold))
        return "".join(lines)

    def render(self, options: RenderOptions, sink: TextIO):
        """Write the full report to sink in the configured format."""
        if options.output_format is OutputFormat.JSON:
            sink.write(_dump_json(self.to_dict(options.threshold)))
        else:
            sink.write(self.format_text(options.threshold))
