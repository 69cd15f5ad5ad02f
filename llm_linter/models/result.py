"""Result models for reporting and whole review runs."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from .finding import Finding


class PublishResult(BaseModel):
    """Result of a reporting pass."""

    success: bool
    published_count: int
    failed_count: int
    errors: List[str] = []


class ReviewResult(BaseModel):
    """Outcome of one review pipeline run."""

    units_parsed: int
    prompts_sent: int
    findings: List[Finding] = []
    reported: List[Finding] = []
    publish_result: Optional[PublishResult] = None
    metrics: Dict[str, Any] = {}
