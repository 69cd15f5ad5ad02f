"""
Linter: runs every change unit with applicable rules through the model.

Units are processed one at a time in parsed order, with a paced wait before
each model call. A failed call aborts the whole run; there is no per-unit
retry or skip.
"""

from typing import List, Optional, Sequence

from llm_linter.core.prompt_builder import build_prompt
from llm_linter.models.change_unit import ChangeUnit
from llm_linter.models.finding import Finding
from llm_linter.rules.matcher import extract_rules_for
from llm_linter.rules.rule_set import RuleSet
from llm_linter.services.base import LlmClient
from llm_linter.utils.logging import get_logger
from llm_linter.utils.metrics import LintMetrics
from llm_linter.utils.resilience import Pacer

logger = get_logger(__name__)

DEFAULT_MODEL_CALL_DELAY = 3.0


class Linter:
    """Matches rules to change units and collects the model's findings."""
    
    def __init__(
        self,
        llm_client: LlmClient,
        rule_set: RuleSet,
        pacer: Optional[Pacer] = None,
        metrics: Optional[LintMetrics] = None,
    ):
        """
        Initialize Linter.
        
        Args:
            llm_client: Model-calling collaborator
            rule_set: Rules to match against change units
            pacer: Wait applied before each model call (3 seconds by default)
            metrics: Optional metrics collector
        """
        self.llm_client = llm_client
        self.rule_set = rule_set
        self.pacer = pacer or Pacer(DEFAULT_MODEL_CALL_DELAY)
        self.metrics = metrics
    
    def generate_prompt(self, unit: ChangeUnit) -> Optional[str]:
        """Prompt for the unit, or None if no rule applies to its path."""
        return build_prompt(unit, extract_rules_for(unit, self.rule_set))
    
    async def lint(self, units: Sequence[ChangeUnit]) -> List[Finding]:
        """
        Lint change units sequentially.
        
        Args:
            units: Change units in parsed order
            
        Returns:
            All findings, ordered by unit and then by reply order
            
        Raises:
            ModelCallError: If a model call fails
            ResponseError: If a reply does not match the finding schema
        """
        findings: List[Finding] = []
        
        for unit in units:
            unit_logger = logger.with_context(path=unit.path)
            prompt = self.generate_prompt(unit)
            
            if prompt is None:
                unit_logger.debug(
                    f"No rules match {unit.path}, skipping lines {unit.start_line}-{unit.end_line}"
                )
                if self.metrics:
                    self.metrics.record_unit_skipped()
                continue
            
            await self.pacer.wait()
            
            unit_logger.info(f"Linting {unit.path} lines {unit.start_line}-{unit.end_line}")
            unit_findings = await self.llm_client.check(unit.path, prompt)
            
            if self.metrics:
                self.metrics.record_prompt_sent()
                self.metrics.record_findings(unit_findings)
            
            unit_logger.info(f"Model reported {len(unit_findings)} findings for {unit.path}")
            findings.extend(unit_findings)
        
        return findings
