"""Tests for reporters/json_reporter.py."""

import io
import json

from pray.application.reporters.json_reporter import JSONReporter
from pray.domain.model.declaration import DeclarationKind
from pray.domain.model.finding import FindingKind
from pray.domain.model.report import Report
from tests.factories import make_finding, make_record


def _render(report: Report, **kwargs: object) -> str:
    output = io.StringIO()
    reporter = JSONReporter(output, **kwargs)  # type: ignore[arg-type]
    for finding in report.findings:
        reporter.emit(finding)
    reporter.finish(report)
    return output.getvalue()


class TestJSONReporter:
    """Tests for JSONReporter."""

    def test_passed_report(self) -> None:
        data = json.loads(_render(Report(findings=(), checked=4)))
        assert data == {
            "passed": True,
            "summary": {"checked": 4, "unused_count": 0, "error_count": 0},
            "findings": [],
        }

    def test_finding_fields(self) -> None:
        record = make_record("start", kind=DeclarationKind.METHOD, owner="Server", line=3, column=9)
        data = json.loads(_render(Report(findings=(make_finding(record),), checked=1)))

        assert data["passed"] is False
        assert data["findings"] == [
            {
                "kind": "UNUSED",
                "identifier": "Server.start",
                "declaration": "METHOD",
                "location": {"file": "/test/file.py", "line": 3, "column": 9},
                "message": "/test/file.py:3:9: start is unused",
            }
        ]

    def test_findings_sorted_by_location(self) -> None:
        late = make_finding(make_record("late", line=20))
        early = make_finding(make_record("early", line=2), kind=FindingKind.ERROR)
        data = json.loads(_render(Report(findings=(late, early), checked=2)))

        assert [f["identifier"] for f in data["findings"]] == ["early", "late"]
        assert data["summary"] == {"checked": 2, "unused_count": 1, "error_count": 1}

    def test_nothing_written_before_finish(self) -> None:
        output = io.StringIO()
        JSONReporter(output).emit(make_finding())
        assert output.getvalue() == ""

    def test_compact(self) -> None:
        text = _render(Report.empty(), indent=None)
        assert text.count("\n") == 1
