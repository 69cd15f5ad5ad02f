"""Unit tests for the severity retention policy."""

from typing import List, Sequence

import pytest

from llm_linter.core.severity_filter import SeverityFilter
from llm_linter.models import Finding, FindingKind, Location


def finding(kind: FindingKind, message: str) -> Finding:
    return Finding(kind=kind, message=message, location=Location(path="a.py", start_line=1, end_line=1))


@pytest.fixture
def mixed_findings():
    """Findings of every kind, interleaved."""
    return [
        finding(FindingKind.WARNING, "w1"),
        finding(FindingKind.ERROR, "e1"),
        finding(FindingKind.CANCEL, "c1"),
        finding(FindingKind.ERROR, "e2"),
        finding(FindingKind.WARNING, "w2"),
    ]


def messages(findings) -> List[str]:
    return [f.message for f in findings]


def test_default_policy_keeps_only_errors_in_order(mixed_findings):
    """Test that only errors reach the reporter, order preserved."""
    assert messages(SeverityFilter().apply(mixed_findings)) == ["e1", "e2"]


def test_exclude_cancel_keeps_warnings(mixed_findings):
    """Test the cancel step on its own."""
    assert messages(SeverityFilter.exclude_cancel(mixed_findings)) == ["w1", "e1", "e2", "w2"]


def test_exclude_warnings_keeps_cancelled(mixed_findings):
    """Test the warning step on its own."""
    assert messages(SeverityFilter.exclude_warnings(mixed_findings)) == ["e1", "c1", "e2"]


def test_warnings_can_be_retained(mixed_findings):
    """Test a policy that reports warnings too."""
    assert messages(SeverityFilter(drop_warnings=False).apply(mixed_findings)) == ["w1", "e1", "e2", "w2"]


def test_cancelled_only_reply_reports_nothing():
    """Test that a self-retracted finding is dropped."""
    assert SeverityFilter().apply([finding(FindingKind.CANCEL, "ok")]) == []


def test_policy_is_overridable(mixed_findings):
    """Test replacing the policy in a subclass."""

    class FirstErrorOnly(SeverityFilter):
        def apply(self, findings: Sequence[Finding]) -> List[Finding]:
            return super().apply(findings)[:1]

    assert messages(FirstErrorOnly().apply(mixed_findings)) == ["e1"]
