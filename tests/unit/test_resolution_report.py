"""
Tests for trrt/report.py
"""

import logging

from trrt.report import (
    KIND_WIDTH,
    LOCATOR_WIDTH,
    Diagnostic,
    DiagnosticKind,
    ResolutionReport,
    format_message,
)


class TestFormatMessage:
    def test_columns(self):
        line = format_message("TERM HELP", "doc.md", 3, "Term ref not found")
        assert line.startswith("TERM HELP".ljust(KIND_WIDTH) + " doc.md:3")
        assert line.endswith(" Term ref not found")
        assert len(line) == KIND_WIDTH + 1 + LOCATOR_WIDTH + 1 + len("Term ref not found")

    def test_long_locator_truncated_from_the_left(self):
        path = "/very/long/" + "x" * 80 + "/doc.md"
        line = format_message("ERROR", path, 12, "boom")
        locator = line[KIND_WIDTH + 1:KIND_WIDTH + 1 + LOCATOR_WIDTH]
        assert locator.startswith("...")
        assert locator.endswith("/doc.md:12")
        assert len(locator) == LOCATOR_WIDTH

    def test_no_file(self):
        line = format_message("ERROR", None, None, "boom")
        assert line == "ERROR".ljust(KIND_WIDTH) + " " + " " * LOCATOR_WIDTH + " boom"


class TestResolutionReport:
    def test_empty(self):
        report = ResolutionReport()
        assert report.converted_count == 0
        assert report.has_errors is False
        assert report.summary() == "Resolution Report:\n       Number of terms converted: 0"

    def test_records(self):
        report = ResolutionReport()
        report.term_converted("gateway")
        report.term_converted("gateway")
        report.term_help("doc.md", 2, "could not be matched")
        report.entry_dropped("mrg.ex.1.0.yaml", "missing locator")
        report.error("cannot read", file="bad.md")

        assert report.converted_count == 2
        assert report.has_errors is True
        assert [d.kind for d in report.diagnostics] == [
            DiagnosticKind.UNRESOLVED,
            DiagnosticKind.INVALID_ENTRY,
        ]
        assert report.of_kind(DiagnosticKind.FILE_ERROR)[0].file == "bad.md"

    def test_diagnostics_are_logged(self, caplog):
        report = ResolutionReport()
        with caplog.at_level(logging.WARNING, logger="trrt.report"):
            report.term_help("doc.md", 2, "could not be matched")
            report.error("cannot read", file="bad.md")

        levels = [r.levelno for r in caplog.records]
        assert levels == [logging.WARNING, logging.ERROR]
        assert "doc.md:2" in caplog.records[0].getMessage()

    def test_summary(self):
        report = ResolutionReport()
        report.term_converted("gateway")
        report.term_help("doc.md", 2, "could not be matched")
        report.entry_dropped("mrg.ex.1.0.yaml", "missing locator")
        report.error("cannot read", file="bad.md")

        lines = report.summary().splitlines()
        assert lines[0] == "Resolution Report:"
        assert lines[1] == "       Number of terms converted: 1"
        assert lines[2] == "   Warnings:"
        assert lines[3].startswith("TERM HELP") and lines[3].endswith("could not be matched")
        assert lines[4].startswith("MRG ENTRY") and lines[4].endswith("missing locator")
        assert lines[5] == "   Errors:"
        assert lines[6].startswith("ERROR") and "bad.md" in lines[6]

    def test_diagnostic_to_dict(self):
        diagnostic = Diagnostic(DiagnosticKind.EMPTY_RENDER, "empty", file="doc.md", line=4)
        assert diagnostic.to_dict() == {
            "kind": "empty-render",
            "file": "doc.md",
            "line": 4,
            "message": "empty",
        }
