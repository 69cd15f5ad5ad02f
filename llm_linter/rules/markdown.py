"""
Rule document loading.

A rule document is markdown in which a marker line scopes the text that
follows it to a file glob:

    <!-- llm-lint-glob: src/**/*.rs -->
    - Do not use `unwrap` in production code

Text up to the next marker (or the end of the document) belongs to that
marker's rule. Text before the first marker is ignored. A repeated glob
opens a new, separate rule.
"""

import re
from pathlib import Path
from typing import List, Optional, Union

from llm_linter.exceptions import ConfigError, ParseError
from llm_linter.models.rule import Rule
from llm_linter.rules.rule_set import RuleSet
from llm_linter.utils.logging import get_logger

logger = get_logger(__name__)

GLOB_MARKER = re.compile(r"<!--\s*llm-lint-glob:(.*?)-->")


class _OpenRule:
    """Rule being accumulated while the scanner is in the open-glob state."""
    
    def __init__(self, glob: str):
        self.glob = glob
        self.lines: List[str] = []
    
    def close(self) -> Rule:
        return Rule(target_file_glob=self.glob, content="\n".join(self.lines))


def parse_rules(text: str) -> RuleSet:
    """
    Parse a rule document.
    
    Args:
        text: Markdown rule document
        
    Returns:
        RuleSet with one rule per marker, in document order
        
    Raises:
        ParseError: If a marker carries no glob
        ConfigError: If a glob is malformed
    """
    rules: List[Rule] = []
    current: Optional[_OpenRule] = None
    
    for number, line in enumerate(text.split("\n"), start=1):
        match = GLOB_MARKER.search(line)
        
        if match is None:
            if current is not None:
                current.lines.append(line)
            continue
        
        glob = match.group(1).strip()
        if not glob:
            raise ParseError(f"Rule marker without a glob on line {number}: {line.strip()}")
        
        if current is not None:
            rules.append(current.close())
        current = _OpenRule(glob)
    
    if current is not None:
        rules.append(current.close())
    
    if not rules:
        logger.warning("Rule document contains no llm-lint-glob markers")
    
    return RuleSet(rules)


def load_rules(path: Union[str, Path]) -> RuleSet:
    """
    Read and parse a rule document from disk.
    
    Raises:
        ConfigError: If the file cannot be read or a glob is malformed
        ParseError: If a marker carries no glob
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read rules file {path}: {e}") from e
    
    rule_set = parse_rules(text)
    logger.info(f"Loaded {len(rule_set)} rules from {path}")
    return rule_set
