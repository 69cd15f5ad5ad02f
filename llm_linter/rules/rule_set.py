"""Ordered rule collection with eagerly compiled globs."""

from typing import Iterator, List, Pattern, Sequence, Tuple

from llm_linter.models.rule import Rule
from llm_linter.rules.glob import compile_glob


class RuleSet:
    """
    Ordered collection of rules.
    
    Globs are compiled on construction, so an invalid pattern fails at load
    time with ConfigError rather than while matching.
    """
    
    def __init__(self, rules: Sequence[Rule] = ()):
        self._entries: List[Tuple[Rule, Pattern[str]]] = [
            (rule, compile_glob(rule.target_file_glob)) for rule in rules
        ]
    
    @property
    def rules(self) -> List[Rule]:
        return [rule for rule, _ in self._entries]
    
    def matching(self, path: str) -> List[Rule]:
        """Rules whose glob matches ``path``, in set order."""
        return [rule for rule, regex in self._entries if regex.fullmatch(path)]
    
    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def __repr__(self) -> str:
        globs = ", ".join(rule.target_file_glob for rule in self.rules)
        return f"RuleSet([{globs}])"
