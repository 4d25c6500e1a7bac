"""Tests for reporters/plain_text.py."""

import io

from pray.application.reporters.plain_text import PlainTextReporter
from pray.domain.model.finding import FindingKind
from pray.domain.model.report import Report
from tests.factories import make_finding, make_record


class TestPlainTextReporter:
    """Tests for PlainTextReporter."""

    def test_emit_writes_one_line(self) -> None:
        """Each finding is one line, its message."""
        output = io.StringIO()
        reporter = PlainTextReporter(output)

        reporter.emit(make_finding(make_record("Foo", line=5, column=5)))

        assert output.getvalue() == "/test/file.py:5:5: Foo is unused\n"

    def test_emit_error_finding(self) -> None:
        """Query errors are printed verbatim."""
        output = io.StringIO()
        reporter = PlainTextReporter(output)

        reporter.emit(make_finding(kind=FindingKind.ERROR, message="cannot find package app"))

        assert output.getvalue() == "cannot find package app\n"

    def test_lines_in_emit_order(self) -> None:
        output = io.StringIO()
        reporter = PlainTextReporter(output)

        reporter.emit(make_finding(make_record("b", line=9)))
        reporter.emit(make_finding(make_record("a", line=1)))

        lines = output.getvalue().splitlines()
        assert lines == ["/test/file.py:9:1: b is unused", "/test/file.py:1:1: a is unused"]

    def test_finish_writes_nothing(self) -> None:
        """No summary: output is exactly the findings."""
        output = io.StringIO()
        PlainTextReporter(output).finish(Report.empty())
        assert output.getvalue() == ""

    def test_defaults_to_stderr(self, capsys) -> None:  # noqa: ANN001
        PlainTextReporter().emit(make_finding())
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Foo is unused" in captured.err
