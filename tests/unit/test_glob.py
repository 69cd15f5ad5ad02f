"""Unit tests for glob compilation."""

import pytest

from llm_linter.exceptions import ConfigError
from llm_linter.rules.glob import compile_glob


def matches(pattern: str, path: str) -> bool:
    return compile_glob(pattern).fullmatch(path) is not None


@pytest.mark.parametrize(
    "pattern,path,expected",
    [
        ("src/**/*.rs", "src/main.rs", True),
        ("src/**/*.rs", "src/a/b/c.rs", True),
        ("src/**/*.rs", "lib/main.rs", False),
        ("src/**/*.rs", "src/main.py", False),
        ("**/*.py", "a.py", True),
        ("**/*.py", "pkg/sub/a.py", True),
        ("*.rs", "mainrs", False),
        ("docs/**", "docs/a/b.md", True),
        ("src/?.rs", "src/a.rs", True),
        ("src/?.rs", "src/ab.rs", False),
        ("src/*.{rs,toml}", "src/Cargo.toml", True),
        ("src/*.{rs,toml}", "src/lib.md", False),
        ("[!a]*.txt", "b.txt", True),
        ("[!a]*.txt", "a.txt", False),
        ("file[0-9].txt", "file3.txt", True),
        ("file[0-9].txt", "filex.txt", False),
        ("a\\*b", "a*b", True),
        ("a\\*b", "axb", False),
        ("README.md", "README.md", True),
        ("README.md", "docs/README.md", False),
    ],
)
def test_glob_matching(pattern, path, expected):
    """Test whole-path glob matching."""
    assert matches(pattern, path) is expected


def test_star_crosses_directory_separator():
    """Test that a single star also matches nested paths."""
    assert matches("*.md", "docs/guide.md")


@pytest.mark.parametrize(
    "pattern",
    ["", "src/{a,b", "src/a}", "{a,{b,c}}", "[abc", "[]", "abc\\", "[z-a]"],
)
def test_invalid_globs_raise_config_error(pattern):
    """Test that malformed globs are rejected."""
    with pytest.raises(ConfigError):
        compile_glob(pattern)
