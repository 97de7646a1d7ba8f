"""
Tests for findings and report aggregation.
"""

import io
import json
import os
import sys
import threading

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flintpp.core.findings import Finding, Severity, safe_text
from flintpp.core.report import FileReport, OutputFormat, RenderOptions, RunReport


def render(report, output_format, threshold):
    sink = io.StringIO()
    report.render(RenderOptions(output_format, threshold), sink)
    return sink.getvalue()


def make_file(path, errors=0, warnings=0, advice=0):
    report = FileReport(path)
    line = 1
    for severity, count in ((Severity.ERROR, errors), (Severity.WARNING, warnings), (Severity.ADVICE, advice)):
        for _ in range(count):
            report.add(Finding(severity, line, f"{severity.title} {line}", "details"))
            line += 1
    return report


class TestSeverity:
    """Tests for severity ordering and clamping."""

    def test_ordering(self):
        assert Severity.ERROR < Severity.WARNING < Severity.ADVICE

    @pytest.mark.parametrize("value, expected", [
        (-5, Severity.ERROR),
        (0, Severity.ERROR),
        (1, Severity.WARNING),
        (2, Severity.ADVICE),
        (99, Severity.ADVICE),
        ("warning", Severity.WARNING),
        ("Advice", Severity.ADVICE),
        ("7", Severity.ADVICE),
        (1.5, Severity.WARNING),
        (0.9, Severity.ERROR),
        ("1.5", Severity.WARNING),
        ("high", Severity.ADVICE),
        ("", Severity.ADVICE),
        (None, Severity.ADVICE),
        (float("nan"), Severity.ADVICE),
    ])
    def test_clamp(self, value, expected):
        """Test that out-of-range levels are clamped, not rejected."""
        assert Severity.clamp(value) is expected

    def test_labels(self):
        assert Severity.ERROR.label == "[Error  ]"
        assert Severity.WARNING.label == "[Warning]"
        assert Severity.ADVICE.label == "[Advice ]"

    def test_visibility(self):
        assert Severity.ERROR.visible_at(Severity.ERROR)
        assert not Severity.ADVICE.visible_at(Severity.WARNING)


class TestFinding:
    """Tests for the finding value."""

    def test_finding_is_immutable(self):
        finding = Finding(Severity.ERROR, 3, "title", "desc")
        with pytest.raises(AttributeError):
            finding.line = 4

    def test_finding_to_dict(self):
        data = Finding(Severity.WARNING, 12, "Title", "Long description").to_dict()
        assert data == {"level": "Warning", "line": 12, "title": "Title", "desc": "Long description"}

    def test_int_severity_is_converted(self):
        assert Finding(1, 1, "t").severity is Severity.WARNING


class TestFileReport:
    """Tests for per-file aggregation."""

    def test_counts(self):
        report = make_file("a.cpp", errors=2, warnings=1, advice=3)

        assert report.errors == 2
        assert report.warnings == 1
        assert report.advice == 3
        assert report.total == 6 == len(report.findings)

    def test_insertion_order_kept(self):
        report = FileReport("a.cpp")
        report.add(Finding(Severity.ADVICE, 9, "late"))
        report.add(Finding(Severity.ERROR, 1, "early"))
        report.add(Finding(Severity.ERROR, 1, "early"))

        assert [f.title for f in report.findings] == ["late", "early", "early"]

    @pytest.mark.parametrize("threshold", list(Severity))
    def test_counts_never_filtered(self, threshold):
        """Test that JSON counts are the true totals at every threshold."""
        report = make_file("a.cpp", errors=1, warnings=2, advice=3)
        data = json.loads(render(report, OutputFormat.JSON, threshold))

        assert (data["errors"], data["warnings"], data["advice"]) == (1, 2, 3)
        assert len(data["reports"]) == len(report.visible_findings(threshold))

    def test_text_lines(self):
        report = FileReport("src/a.cpp")
        report.add(Finding(Severity.WARNING, 7, "second"))
        report.add(Finding(Severity.ERROR, 3, "first"))
        report.add(Finding(Severity.ADVICE, 1, "third"))

        output = render(report, OutputFormat.TEXT, Severity.WARNING)
        assert output == (
            "[Warning] src/a.cpp:7: second\n"
            "[Error  ] src/a.cpp:3: first\n"
        )

    def test_empty_file_renders_nothing_as_text(self):
        assert render(FileReport("a.cpp"), OutputFormat.TEXT, Severity.ADVICE) == ""

    def test_json_escaping(self):
        """Test that quotes and control characters survive as valid JSON."""
        report = FileReport('dir/we"ird\tname.h')
        report.add(Finding(Severity.ERROR, 1, 'say "hi"\x01', "line\nbreak\\"))

        data = json.loads(render(report, OutputFormat.JSON, Severity.ADVICE))
        assert data["path"] == 'dir/we"ird\tname.h'
        assert data["reports"][0]["title"] == 'say "hi"\x01'
        assert data["reports"][0]["desc"] == "line\nbreak\\"

    def test_unencodable_text_is_replaced(self):
        """Test that a lone surrogate does not abort rendering."""
        report = FileReport("a.c")
        report.add(Finding(Severity.ERROR, 1, "bad \ud800 char", "ok"))

        output = render(report, OutputFormat.JSON, Severity.ADVICE)
        output.encode("utf-8")
        title = json.loads(output)["reports"][0]["title"]
        assert "\ufffd" in title
        assert "\ud800" not in title

    def test_unencodable_path_in_text(self):
        """Test that a surrogate-escaped file name still renders as text."""
        report = FileReport("src/bad\udcff.c")
        report.add(Finding(Severity.ERROR, 2, "title \udcff", "desc"))

        output = render(report, OutputFormat.TEXT, Severity.ADVICE)
        output.encode("utf-8")
        assert output == "[Error  ] src/bad\ufffd.c:2: title \ufffd\n"


class TestRunReport:
    """Tests for whole-run aggregation and rendering."""

    def test_totals_are_sums(self):
        run = RunReport()
        run.add(make_file("a.c", errors=2, advice=1))
        run.add(make_file("b.c", warnings=1))
        run.add(make_file("c.c"))

        assert (run.errors, run.warnings, run.advice) == (2, 1, 1)
        assert run.total == sum(f.total for f in run.files)
        assert run.file_count == 3

    def test_json_scenario(self):
        """Test two files rendered at the warning threshold."""
        run = RunReport()
        run.add(make_file("first.cpp", errors=2, advice=1))
        run.add(make_file("second.cpp", warnings=1))

        data = json.loads(render(run, OutputFormat.JSON, Severity.WARNING))

        assert (data["errors"], data["warnings"], data["advice"]) == (2, 1, 1)
        first, second = data["files"]
        assert first["path"] == "first.cpp"
        assert [r["level"] for r in first["reports"]] == ["Error", "Error"]
        assert first["advice"] == 1
        assert [r["level"] for r in second["reports"]] == ["Warning"]

    def test_json_with_everything_filtered(self):
        """Test a valid document when every finding is below threshold."""
        run = RunReport()
        run.add(make_file("a.c", advice=2))
        run.add(make_file("b.c", warnings=2, advice=1))
        run.add(make_file("c.c"))

        data = json.loads(render(run, OutputFormat.JSON, Severity.ERROR))
        assert [f["reports"] for f in data["files"]] == [[], [], []]
        assert data["advice"] == 3

    def test_text_scenario(self):
        """Test the human-readable example with one error."""
        report = FileReport("path")
        report.add(Finding(Severity.ERROR, 3, "use of bad_code", "bad_code() is not allowed"))
        run = RunReport()
        run.add(report)

        assert render(run, OutputFormat.TEXT, Severity.ERROR) == (
            "[Error  ] path:3: use of bad_code\n"
            "\n"
            "Lint Summary: 1 files\n"
            "Errors: 1\n"
        )

    def test_text_summary_depends_on_threshold(self):
        run = RunReport()
        run.add(make_file("a.c", errors=1, warnings=2, advice=3))

        assert render(run, OutputFormat.TEXT, Severity.WARNING).endswith("Errors: 1 Warnings: 2\n")
        assert render(run, OutputFormat.TEXT, Severity.ADVICE).endswith("Errors: 1 Warnings: 2 Advice: 3\n")

    def test_text_skips_clean_files(self):
        run = RunReport()
        run.add(make_file("clean.c"))
        run.add(make_file("dirty.c", errors=1))

        output = render(run, OutputFormat.TEXT, Severity.ADVICE)
        assert "clean.c" not in output
        assert "dirty.c:1" in output
        assert "Lint Summary: 2 files" in output

    def test_threshold_monotonicity(self):
        """Test that a stricter threshold shows a subset of the lines."""
        run = RunReport()
        run.add(make_file("a.c", errors=1, warnings=1, advice=1))
        run.add(make_file("b.c", warnings=2, advice=2))

        def finding_lines(threshold):
            output = render(run, OutputFormat.TEXT, threshold)
            return [line for line in output.splitlines() if line.startswith("[")]

        error_lines = finding_lines(Severity.ERROR)
        warning_lines = finding_lines(Severity.WARNING)
        advice_lines = finding_lines(Severity.ADVICE)

        assert set(error_lines) <= set(warning_lines) <= set(advice_lines)
        assert len(advice_lines) == run.total

    def test_options_clamp_threshold(self):
        assert RenderOptions(OutputFormat.TEXT, 10).threshold is Severity.ADVICE
        assert RenderOptions("json", -1).threshold is Severity.ERROR

    def test_concurrent_add(self):
        """Test that counters stay consistent when added from threads."""
        run = RunReport()

        def worker(index):
            run.add(make_file(f"{index}.c", errors=1, warnings=1, advice=1))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert run.file_count == 20
        assert (run.errors, run.warnings, run.advice) == (20, 20, 20)


class TestSafeText:
    """Tests for replacing unencodable characters."""

    def test_plain_text_is_unchanged(self):
        assert safe_text("café \U0001F600") == "café \U0001F600"

    def test_lone_surrogate_becomes_one_replacement(self):
        assert safe_text("a\ud800b") == "a\ufffdb"
        assert safe_text("\udcff.c") == "\ufffd.c"

    def test_split_surrogate_pair_is_joined(self):
        assert safe_text("x\ud83d\ude00y") == "x\U0001F600y"
