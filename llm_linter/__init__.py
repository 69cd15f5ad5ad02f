"""LLM linter: rule-driven pull request review backed by a language model."""

__version__ = "0.1.0"
