"""Retention policy applied to findings before they are reported."""

from typing import List, Sequence

from llm_linter.models.finding import Finding, FindingKind
from llm_linter.utils.logging import get_logger

logger = get_logger(__name__)


class SeverityFilter:
    """
    Decides which findings reach the reporter.
    
    The default policy reports errors only: cancelled findings were retracted
    by the model itself and warnings are context dependent. Each step is
    usable on its own; subclass and override ``apply`` for other policies.
    """
    
    def __init__(self, drop_cancelled: bool = True, drop_warnings: bool = True):
        self.drop_cancelled = drop_cancelled
        self.drop_warnings = drop_warnings
    
    @staticmethod
    def exclude_cancel(findings: Sequence[Finding]) -> List[Finding]:
        return [finding for finding in findings if finding.kind != FindingKind.CANCEL]
    
    @staticmethod
    def exclude_warnings(findings: Sequence[Finding]) -> List[Finding]:
        return [finding for finding in findings if finding.kind != FindingKind.WARNING]
    
    def apply(self, findings: Sequence[Finding]) -> List[Finding]:
        """
        Apply the configured steps, preserving order.
        
        Args:
            findings: All findings of a run
            
        Returns:
            Findings to report
        """
        retained = list(findings)
        if self.drop_cancelled:
            retained = self.exclude_cancel(retained)
        if self.drop_warnings:
            retained = self.exclude_warnings(retained)
        
        logger.info(f"Retained {len(retained)} of {len(findings)} findings")
        return retained
