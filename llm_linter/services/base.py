"""
Interfaces of the external collaborators of the review pipeline.

Concrete implementations talk to GitHub, OpenAI or the local filesystem;
the pipeline only depends on these abstractions.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from llm_linter.models.finding import Finding
from llm_linter.models.result import PublishResult


class PatchSource(ABC):
    """Provides the unified diff under review."""
    
    @abstractmethod
    async def fetch(self) -> str:
        """
        Retrieve raw unified diff text.
        
        Raises:
            FetchError: If the diff cannot be retrieved
        """
        pass


class LlmClient(ABC):
    """Evaluates a prompt with a language model."""
    
    @abstractmethod
    async def check(self, path: str, prompt: str) -> List[Finding]:
        """
        Send one prompt and interpret the reply.
        
        Args:
            path: Path of the change unit the prompt was built from
            prompt: Complete prompt text
            
        Returns:
            Findings located in ``path``, in reply order
            
        Raises:
            ModelCallError: If the model call fails
            ResponseError: If the reply does not match the finding schema
        """
        pass


class Reporter(ABC):
    """Publishes retained findings."""
    
    @abstractmethod
    async def report(self, findings: Sequence[Finding]) -> PublishResult:
        """
        Publish findings. A failure on one finding does not stop the others.
        
        Args:
            findings: Findings that passed the severity filter
            
        Returns:
            PublishResult with published and failed counts
        """
        pass
