"""Tests for services/verifier.py."""

from pathlib import Path

import pytest

from pray.application.services.verifier import UsageVerifier, finding_for
from pray.domain.model.declaration import DeclarationKind
from pray.domain.model.finding import FindingKind
from pray.domain.model.usage_result import UsageResult
from pray.domain.ports.reference_finder import NO_IDENTIFIER
from tests.factories import FakeFinder, make_record, make_reference


class TestUsageVerifier:
    """Tests for UsageVerifier.verify()."""

    def test_one_query_per_record(self) -> None:
        finder = FakeFinder()
        record = make_record()
        UsageVerifier(finder, ["app", "app.cli"]).verify(record)
        assert finder.calls == [(("app", "app.cli"), record.position)]

    def test_references_carried(self) -> None:
        record = make_record()
        refs = (make_reference(3, 1), make_reference(9, 4))
        result = UsageVerifier(FakeFinder({record.position: refs}), ["app"]).verify(record)
        assert result.references == refs
        assert result.error is None
        assert result.is_used

    def test_no_references(self) -> None:
        result = UsageVerifier(FakeFinder(), ["app"]).verify(make_record())
        assert result.references == ()
        assert not result.is_used

    def test_query_error_captured(self) -> None:
        record = make_record()
        finder = FakeFinder({record.position: "cannot find package app"})
        result = UsageVerifier(finder, ["app"]).verify(record)
        assert result.error == "cannot find package app"
        assert result.references == ()

    def test_targets_property(self) -> None:
        assert UsageVerifier(FakeFinder(), ["a", "b"]).targets == ("a", "b")

    def test_none_finder_raises(self) -> None:
        with pytest.raises(TypeError, match="finder"):
            UsageVerifier(None, ["app"])  # type: ignore[arg-type]

    def test_empty_targets_raises(self) -> None:
        with pytest.raises(ValueError, match="targets"):
            UsageVerifier(FakeFinder(), [])


class TestFindingFor:
    """Tests for the reporting policy."""

    def test_unused(self) -> None:
        record = make_record("Foo", file=Path("/src/lib/foo.py"), line=5, column=5)
        finding = finding_for(UsageResult(declaration=record))
        assert finding is not None
        assert finding.kind is FindingKind.UNUSED
        assert finding.message == "/src/lib/foo.py:5:5: Foo is unused"

    def test_unused_method_uses_bare_name(self) -> None:
        record = make_record("start", kind=DeclarationKind.METHOD, owner="Server")
        finding = finding_for(UsageResult(declaration=record))
        assert finding is not None
        assert finding.message.endswith(": start is unused")

    def test_used_has_no_finding(self) -> None:
        result = UsageResult(declaration=make_record(), references=(make_reference(),))
        assert finding_for(result) is None

    def test_no_identifier_rewritten(self) -> None:
        record = make_record("Foo", line=7, column=3)
        finding = finding_for(UsageResult(declaration=record, error=NO_IDENTIFIER))
        assert finding is not None
        assert finding.kind is FindingKind.ERROR
        assert finding.message == "/test/file.py:7:3 - no identifier here"

    def test_other_error_verbatim(self) -> None:
        result = UsageResult(declaration=make_record(), error="cannot find package app")
        finding = finding_for(result)
        assert finding is not None
        assert finding.kind is FindingKind.ERROR
        assert finding.message == "cannot find package app"

    def test_error_containing_phrase_not_rewritten(self) -> None:
        result = UsageResult(declaration=make_record(), error="oops: no identifier here")
        finding = finding_for(result)
        assert finding is not None
        assert finding.message == "oops: no identifier here"
