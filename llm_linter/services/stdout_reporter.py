"""Printing findings to a text stream."""

import sys
from typing import Optional, Sequence, TextIO

from llm_linter.models.finding import Finding
from llm_linter.models.result import PublishResult
from llm_linter.services.base import Reporter


def format_finding(finding: Finding) -> str:
    location = finding.location
    return (
        f"{location.path}\n"
        f"from {location.start_line} to {location.end_line}\n"
        f"kind: {finding.kind.value}\n"
        f"{finding.message}\n"
    )


class StdoutReporter(Reporter):
    """Writes findings to stdout (or any text stream) for local runs."""
    
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
    
    async def report(self, findings: Sequence[Finding]) -> PublishResult:
        stream = self.stream or sys.stdout
        for finding in findings:
            print(format_finding(finding), file=stream)
        return PublishResult(success=True, published_count=len(findings), failed_count=0)
