"""
Utility modules for the LLM linter.
"""

from llm_linter.utils.logging import (
    get_logger,
    setup_logging,
    log_phase_transition,
    log_api_call,
    log_error_with_context,
)
from llm_linter.utils.metrics import (
    LintMetrics,
    track_api_call,
)
from llm_linter.utils.resilience import (
    Pacer,
    RetryPolicy,
    retry_async,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "log_phase_transition",
    "log_api_call",
    "log_error_with_context",
    "LintMetrics",
    "track_api_call",
    "Pacer",
    "RetryPolicy",
    "retry_async",
]
