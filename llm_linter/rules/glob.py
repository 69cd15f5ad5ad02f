"""
File glob compilation.

Globs are translated to anchored regular expressions:

- ``*`` matches any run of characters and ``?`` any single character; both
  may cross ``/``
- ``**/`` matches zero or more leading directories, ``/**`` anything below
- ``[abc]``, ``[a-z]`` and ``[!abc]`` are character classes
- ``{a,b}`` is an alternation (not nestable)
- ``\\`` escapes the next character
"""

import re
from typing import List, Pattern

from llm_linter.exceptions import ConfigError


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate a ``[...]`` class starting at ``start``; return regex and next index."""
    i = start + 1
    negate = False
    if i < len(pattern) and pattern[i] in "!^":
        negate = True
        i += 1
    
    members: List[str] = []
    # A leading ']' is a literal member
    if i < len(pattern) and pattern[i] == "]":
        members.append(r"\]")
        i += 1
    
    while i < len(pattern) and pattern[i] != "]":
        char = pattern[i]
        if char == "-" and members and i + 1 < len(pattern) and pattern[i + 1] != "]":
            members.append("-")
        elif char in "\\^[":
            members.append("\\" + char)
        else:
            members.append(char)
        i += 1
    
    if i >= len(pattern):
        raise ConfigError(f"Invalid glob {pattern!r}: unclosed character class")
    if not members:
        raise ConfigError(f"Invalid glob {pattern!r}: empty character class")
    
    return "[" + ("^" if negate else "") + "".join(members) + "]", i + 1


def translate_glob(pattern: str) -> str:
    """
    Translate a glob to an (unanchored) regular expression string.
    
    Raises:
        ConfigError: If the glob is malformed
    """
    parts: List[str] = []
    in_braces = False
    i = 0
    n = len(pattern)
    
    while i < n:
        char = pattern[i]
        
        if char == "\\":
            if i + 1 >= n:
                raise ConfigError(f"Invalid glob {pattern!r}: dangling escape")
            parts.append(re.escape(pattern[i + 1]))
            i += 2
        elif char == "*":
            if pattern.startswith("**", i):
                at_segment_start = i == 0 or pattern[i - 1] == "/"
                if at_segment_start and pattern.startswith("**/", i):
                    parts.append("(?:.*/)?")
                    i += 3
                else:
                    parts.append(".*")
                    i += 2
            else:
                parts.append(".*")
                i += 1
        elif char == "?":
            parts.append(".")
            i += 1
        elif char == "[":
            regex, i = _translate_class(pattern, i)
            parts.append(regex)
        elif char == "{":
            if in_braces:
                raise ConfigError(f"Invalid glob {pattern!r}: nested alternation")
            in_braces = True
            parts.append("(?:")
            i += 1
        elif char == "}":
            if not in_braces:
                raise ConfigError(f"Invalid glob {pattern!r}: unopened alternation")
            in_braces = False
            parts.append(")")
            i += 1
        elif char == "," and in_braces:
            parts.append("|")
            i += 1
        else:
            parts.append(re.escape(char))
            i += 1
    
    if in_braces:
        raise ConfigError(f"Invalid glob {pattern!r}: unclosed alternation")
    
    return "".join(parts)


def compile_glob(pattern: str) -> Pattern[str]:
    """
    Compile a glob into a regex matching whole paths.
    
    Args:
        pattern: Glob pattern such as ``src/**/*.{rs,toml}``
        
    Returns:
        Compiled regex; use ``fullmatch`` against a repository-relative path
        
    Raises:
        ConfigError: If the glob is empty or malformed
    """
    if not pattern:
        raise ConfigError("Invalid glob: empty pattern")
    
    try:
        return re.compile(translate_glob(pattern), re.DOTALL)
    except re.error as e:
        raise ConfigError(f"Invalid glob {pattern!r}: {e}") from e
