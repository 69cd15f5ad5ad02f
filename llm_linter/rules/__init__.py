"""Rule documents, glob scoping and rule matching."""

from llm_linter.rules.glob import compile_glob
from llm_linter.rules.markdown import load_rules, parse_rules
from llm_linter.rules.matcher import extract_rules_for
from llm_linter.rules.rule_set import RuleSet

__all__ = [
    "compile_glob",
    "load_rules",
    "parse_rules",
    "extract_rules_for",
    "RuleSet",
]
