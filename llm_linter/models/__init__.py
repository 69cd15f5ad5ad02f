"""Data models for the LLM linter."""

from .change_unit import ChangeUnit
from .finding import Finding, FindingKind, Location
from .result import PublishResult, ReviewResult
from .rule import Rule

__all__ = [
    # Diff models
    "ChangeUnit",
    # Rule models
    "Rule",
    # Finding models
    "FindingKind",
    "Location",
    "Finding",
    # Result models
    "PublishResult",
    "ReviewResult",
]
