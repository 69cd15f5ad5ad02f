"""
Metrics collection for observability.

This module provides metrics tracking for:
- Review run duration
- Change units parsed, linted and skipped
- Findings per severity, before and after filtering
- Model token usage and estimated cost
- API call counts and latency
"""

import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional
from contextlib import asynccontextmanager

from llm_linter.models.finding import Finding
from llm_linter.utils.logging import get_logger, log_api_call

logger = get_logger(__name__)


class LintMetrics:
    """
    Collects metrics during one review run.
    
    Tracks:
    - Execution start/end time
    - Units parsed, prompts sent, units skipped
    - Findings per kind and reported count
    - Token usage and estimated cost
    - API call counts and latency
    """
    
    def __init__(self, run_id: str, clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        """
        Initialize metrics collector.
        
        Args:
            run_id: Review run ID
            clock: Returns the current time; injectable for tests
        """
        self.run_id = run_id
        self._clock = clock
        
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None
        self.duration_ms: Optional[int] = None
        
        self.units_parsed: int = 0
        self.prompts_sent: int = 0
        self.units_skipped: int = 0
        self.findings_by_kind: Dict[str, int] = {}
        self.findings_reported: int = 0
        
        self.prompt_tokens: int = 0
        self.completion_tokens: int = 0
        self.total_tokens: int = 0
        self.estimated_cost: float = 0.0
        
        self.api_calls: Dict[str, int] = {}
        self.api_latencies: Dict[str, list[float]] = {}
        
        self.status: str = "running"
        self.error_message: Optional[str] = None
    
    def start(self) -> None:
        """Mark review run start."""
        self.start_time = self._clock()
        self.status = "running"
        logger.info(
            f"Metrics collection started for run {self.run_id}",
            extra={"run_id": self.run_id}
        )
    
    def complete(self, status: str = "completed", error_message: Optional[str] = None) -> None:
        """
        Mark review run completion and log the metrics summary.
        
        Args:
            status: Final status ('completed' or 'failed')
            error_message: Error message if failed
        """
        self.end_time = self._clock()
        self.status = status
        self.error_message = error_message
        
        if self.start_time:
            duration = (self.end_time - self.start_time).total_seconds()
            self.duration_ms = int(duration * 1000)
        
        logger.info(
            f"Metrics collection completed for run {self.run_id}",
            extra={"run_id": self.run_id, "metrics": self.get_metrics_summary()}
        )
    
    def record_units_parsed(self, count: int) -> None:
        self.units_parsed = count
    
    def record_prompt_sent(self) -> None:
        self.prompts_sent += 1
    
    def record_unit_skipped(self) -> None:
        self.units_skipped += 1
    
    def record_findings(self, findings: Iterable[Finding]) -> None:
        """Count findings per kind."""
        for finding in findings:
            kind = finding.kind.value
            self.findings_by_kind[kind] = self.findings_by_kind.get(kind, 0) + 1
    
    def record_reported(self, count: int) -> None:
        self.findings_reported = count
    
    def record_usage(self, prompt_tokens: int, completion_tokens: int, total_tokens: int, cost: float) -> None:
        """
        Accumulate model token usage.
        
        Args:
            prompt_tokens: Tokens in the request
            completion_tokens: Tokens in the reply
            total_tokens: Total tokens billed
            cost: Estimated cost of the call in USD
        """
        self.prompt_tokens += prompt_tokens
        self.completion_tokens += completion_tokens
        self.total_tokens += total_tokens
        self.estimated_cost += cost
    
    def record_api_call(self, service: str, duration_ms: float) -> None:
        """
        Record API call and latency.
        
        Args:
            service: Service name (e.g., 'github', 'openai')
            duration_ms: Call duration in milliseconds
        """
        self.api_calls[service] = self.api_calls.get(service, 0) + 1
        self.api_latencies.setdefault(service, []).append(duration_ms)
    
    def get_metrics_summary(self) -> Dict[str, Any]:
        """
        Get summary of collected metrics.
        
        Returns:
            Dictionary of metrics
        """
        summary = {
            "run_id": self.run_id,
            "status": self.status,
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "duration_ms": self.duration_ms,
            "units_parsed": self.units_parsed,
            "prompts_sent": self.prompts_sent,
            "units_skipped": self.units_skipped,
            "findings_by_kind": dict(self.findings_by_kind),
            "findings_reported": self.findings_reported,
            "usage": {
                "prompt_tokens": self.prompt_tokens,
                "completion_tokens": self.completion_tokens,
                "total_tokens": self.total_tokens,
                "estimated_cost_usd": round(self.estimated_cost, 4),
            },
            "api_calls": dict(self.api_calls),
        }
        
        if self.api_latencies:
            latency_stats = {}
            for service, latencies in self.api_latencies.items():
                if latencies:
                    latency_stats[service] = {
                        "count": len(latencies),
                        "min_ms": round(min(latencies), 2),
                        "max_ms": round(max(latencies), 2),
                        "avg_ms": round(sum(latencies) / len(latencies), 2),
                    }
            summary["api_latencies"] = latency_stats
        
        if self.error_message:
            summary["error_message"] = self.error_message
        
        return summary


@asynccontextmanager
async def track_api_call(
    metrics_collector: Optional[LintMetrics],
    service: str,
    endpoint: str,
    method: str,
    logger_adapter
):
    """
    Context manager to track API call timing.
    
    Usage:
        async with track_api_call(metrics, "openai", "chat.completions", "POST", logger):
            response = await client.chat.completions.create(...)
    
    Args:
        metrics_collector: Metrics collector (optional)
        service: Service name
        endpoint: Endpoint called
        method: HTTP method
        logger_adapter: Logger for logging API calls
        
    Yields:
        None
    """
    start_time = time.monotonic()
    error = None
    
    try:
        yield
    except Exception as e:
        error = e
        raise
    finally:
        duration_ms = (time.monotonic() - start_time) * 1000
        
        if metrics_collector:
            metrics_collector.record_api_call(service, duration_ms)
        
        log_api_call(
            logger_adapter,
            service=service,
            endpoint=endpoint,
            method=method,
            duration_ms=duration_ms,
            error=str(error) if error else None
        )
