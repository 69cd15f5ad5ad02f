"""
Shared fixtures for the test suite.
"""

import logging

import pytest

SAMPLE_DIFF = "\n".join([
    "diff --git a/src/main.rs b/src/main.rs",
    "index 83db48f..bf269f4 100644",
    "--- a/src/main.rs",
    "+++ b/src/main.rs",
    "@@ -1,3 +1,4 @@",
    " fn main() {",
    "-    println!(\"hi\");",
    "+    let x = foo().unwrap();",
    "+    println!(\"{}\", x);",
    " }",
    "@@ -10,2 +11,3 @@ fn foo() {",
    " fn foo() -> Option<i32> {",
    "+    // comment",
    "     Some(1)",
    "diff --git a/README.md b/README.md",
    "index 1111111..2222222 100644",
    "--- a/README.md",
    "+++ b/README.md",
    "@@ -1 +1 @@",
    "-# Old",
    "+# New",
]) + "\n"

SAMPLE_RULES = "\n".join([
    "# Rules",
    "",
    "<!-- llm-lint-glob: src/**/*.rs -->",
    "- Do not use `unwrap` in production code",
    "",
]) + "\n"


@pytest.fixture
def sample_diff():
    """Diff touching src/main.rs (two hunks) and README.md (one hunk)."""
    return SAMPLE_DIFF


@pytest.fixture
def sample_rules():
    """Rule document with a single rule for Rust sources."""
    return SAMPLE_RULES


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging calls made by a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
