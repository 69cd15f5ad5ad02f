"""Diff-to-finding pipeline."""

from llm_linter.core.diff_parser import parse_diff
from llm_linter.core.linter import Linter
from llm_linter.core.pipeline import ReviewPipeline
from llm_linter.core.prompt_builder import build_prompt
from llm_linter.core.response_interpreter import interpret_response
from llm_linter.core.severity_filter import SeverityFilter

__all__ = [
    "parse_diff",
    "Linter",
    "ReviewPipeline",
    "build_prompt",
    "interpret_response",
    "SeverityFilter",
]
