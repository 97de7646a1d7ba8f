"""
flint++ style checker

A lint tool for C and C++ source files. Code between pause and resume
marker comments is ignored, and findings are reported as text or JSON.
"""

__version__ = "1.0.0"
__author__ = "flintpp Team"

from flintpp.core.engine import LintEngine
from flintpp.core.findings import Finding, Severity
from flintpp.core.report import FileReport, RunReport, OutputFormat, RenderOptions
from flintpp.config import LintConfig

__all__ = [
    "LintEngine",
    "Finding",
    "Severity",
    "FileReport",
    "RunReport",
    "OutputFormat",
    "RenderOptions",
    "LintConfig",
]
