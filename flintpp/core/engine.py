"""
Main linting engine.

This module orchestrates a run: it discovers files, blanks ignored
regions, runs every applicable rule and collects the FileReports into a
RunReport.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional

from flintpp.core.files import FileCategory, get_file_category
from flintpp.core.ignored import PAUSE_MARKER, RESUME_MARKER, RegionSuppressor
from flintpp.core.report import FileReport, RunReport
from flintpp.core.rules import LintContext, Rule, RuleRegistry, registry
from flintpp.exceptions import FileReadError

# Import rules to register them with the registry
import flintpp.rules  # noqa: F401

logger = logging.getLogger(__name__)


class LintEngine:
    """
    Runs the style rules over a set of files.

    The engine:
    1. Discovers candidate files from the given paths
    2. Reads each file and blanks its ignored regions
    3. Runs the applicable rules, which add findings to a FileReport
    4. Adds the FileReports to a RunReport in discovery order
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, rule_registry: Optional[RuleRegistry] = None):
        self.config = config or {}
        self.registry = rule_registry or registry

        self.recursive = bool(self.config.get("recursive", False))
        self.c_mode = bool(self.config.get("c_mode", False))
        self.max_workers = max(1, int(self.config.get("jobs", 4)))
        self.suppressor = RegionSuppressor(
            self.config.get("pause_marker") or PAUSE_MARKER,
            self.config.get("resume_marker") or RESUME_MARKER,
        )
        self.rules: List[Rule] = self.registry.get_rules(self.config.get("disabled_rules", []))

    def discover_files(self, paths: Iterable[str]) -> List[str]:
        """Resolve the command-line paths into an ordered list of files."""
        files: List[str] = []

        for path in paths:
            if len(path) > 1:
                path = path.rstrip("/\\") or path

            if os.path.isfile(path):
                if get_file_category(path) is not FileCategory.UNKNOWN:
                    files.append(path)
                else:
                    logger.debug("Skipping %s: unknown file type", path)
            elif os.path.isdir(path):
                files.extend(self._walk(path))
            else:
                logger.warning("Skipping %s: no such file or directory", path)

        return files

    def _walk(self, directory: str) -> List[str]:
        files: List[str] = []
        for root, dirs, names in os.walk(directory):
            dirs.sort()
            if not self.recursive:
                dirs[:] = []
            for name in sorted(names):
                file_path = os.path.join(root, name)
                if get_file_category(file_path) is not FileCategory.UNKNOWN:
                    files.append(file_path)
        return files

    def read_file(self, file_path: str) -> str:
        """Read a file's contents."""
        try:
            with open(file_path, "r", encoding="utf-8", errors="replace", newline="") as f:
                return f.read()
        except OSError as e:
            raise FileReadError(file_path, e.strerror or str(e)) from e

    def lint_content(self, path: str, content: str) -> FileReport:
        """
        Lint text directly without reading from a file.

        Useful for editor integrations and testing.
        """
        category = get_file_category(path)
        context = LintContext(
            path=path,
            content=self.suppressor.suppress(content),
            category=category,
            c_mode=self.c_mode,
        )

        for rule in self.rules:
            if not rule.applies_to(context):
                continue
            try:
                rule.check(context)
            except Exception:
                logger.error("Rule %s failed on %s", rule.metadata.rule_id, path)
                raise

        logger.debug("%s: %d findings", path, context.report.total)
        return context.report

    def lint_file(self, file_path: str) -> FileReport:
        """Lint a single file."""
        return self.lint_content(file_path, self.read_file(file_path))

    def run(self, paths: Iterable[str]) -> RunReport:
        """
        Lint every file found under paths.

        Files are checked in parallel, but the RunReport lists them in
        the order they were discovered.
        """
        files = self.discover_files(paths)
        report = RunReport()
        logger.info("Linting %d files with %d workers", len(files), self.max_workers)

        if len(files) > 1 and self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [executor.submit(self.lint_file, f) for f in files]
                try:
                    for future in futures:
                        report.add(future.result())
                except Exception:
                    # A failed file aborts the run; don't wait for queued ones.
                    for future in futures:
                        future.cancel()
                    raise
        else:
            for file_path in files:
                report.add(self.lint_file(file_path))

        return report
