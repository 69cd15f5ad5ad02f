"""External collaborators: diff sources, model clients and reporters."""

from llm_linter.services.base import LlmClient, PatchSource, Reporter
from llm_linter.services.file_source import FilePatchSource
from llm_linter.services.github import (
    GitHubPatchSource,
    GitHubReporter,
    build_github_client,
)
from llm_linter.services.openai_client import OpenAIClient
from llm_linter.services.stdout_reporter import StdoutReporter

__all__ = [
    'LlmClient',
    'PatchSource',
    'Reporter',
    'FilePatchSource',
    'GitHubPatchSource',
    'GitHubReporter',
    'build_github_client',
    'OpenAIClient',
    'StdoutReporter',
]
