"""
Review pipeline.

fetch diff -> parse -> lint -> severity filter -> report

Reporting only starts once every change unit has been linted, so a fatal
error anywhere earlier means nothing is published.
"""

import uuid
from typing import Optional

from llm_linter.core.diff_parser import parse_diff
from llm_linter.core.linter import Linter
from llm_linter.core.severity_filter import SeverityFilter
from llm_linter.exceptions import LinterError
from llm_linter.models.result import ReviewResult
from llm_linter.services.base import PatchSource, Reporter
from llm_linter.utils.logging import get_logger, log_phase_transition
from llm_linter.utils.metrics import LintMetrics

logger = get_logger(__name__)


class ReviewPipeline:
    """Runs one review from diff retrieval to reporting."""
    
    def __init__(
        self,
        patch_source: PatchSource,
        linter: Linter,
        reporter: Reporter,
        severity_filter: Optional[SeverityFilter] = None,
        metrics: Optional[LintMetrics] = None,
        run_id: Optional[str] = None,
    ):
        self.patch_source = patch_source
        self.linter = linter
        self.reporter = reporter
        self.severity_filter = severity_filter or SeverityFilter()
        self.run_id = run_id or uuid.uuid4().hex[:12]
        self.metrics = metrics or linter.metrics or LintMetrics(self.run_id)
        if linter.metrics is None:
            linter.metrics = self.metrics
        self._logger = logger.with_context(run_id=self.run_id)
    
    async def run(self) -> ReviewResult:
        """
        Execute the review.
        
        Returns:
            ReviewResult with all findings and the reporting outcome
            
        Raises:
            LinterError: Any fatal error; nothing has been reported in that case
        """
        self.metrics.start()
        
        try:
            log_phase_transition(self._logger, self.run_id, "fetch", "started")
            diff = await self.patch_source.fetch()
            log_phase_transition(self._logger, self.run_id, "fetch", "completed", diff_bytes=len(diff))
            
            units = parse_diff(diff)
            self.metrics.record_units_parsed(len(units))
            log_phase_transition(self._logger, self.run_id, "parse", "completed", units=len(units))
            
            log_phase_transition(self._logger, self.run_id, "lint", "started")
            findings = await self.linter.lint(units)
            log_phase_transition(self._logger, self.run_id, "lint", "completed", findings=len(findings))
            
            retained = self.severity_filter.apply(findings)
            
            log_phase_transition(self._logger, self.run_id, "report", "started", findings=len(retained))
            publish_result = await self.reporter.report(retained)
            self.metrics.record_reported(publish_result.published_count)
            log_phase_transition(
                self._logger,
                self.run_id,
                "report",
                "completed",
                published=publish_result.published_count,
                failed=publish_result.failed_count,
            )
        
        except LinterError as e:
            self.metrics.complete(status="failed", error_message=str(e))
            raise
        
        self.metrics.complete(status="completed")
        
        return ReviewResult(
            units_parsed=len(units),
            prompts_sent=self.metrics.prompts_sent,
            findings=findings,
            reported=retained,
            publish_result=publish_result,
            metrics=self.metrics.get_metrics_summary(),
        )
