"""Selecting the rule text that applies to a change unit."""

from llm_linter.models.change_unit import ChangeUnit
from llm_linter.rules.rule_set import RuleSet


def extract_rules_for(unit: ChangeUnit, rule_set: RuleSet) -> str:
    """
    Concatenate the content of every rule whose glob matches the unit's path.
    
    Returns:
        Matching rule bodies joined by newlines, in rule set order, with
        surrounding whitespace trimmed; empty string when nothing matches
    """
    return "\n".join(rule.content for rule in rule_set.matching(unit.path)).strip()
