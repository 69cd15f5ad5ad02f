"""
GitHub integration.

GitHubPatchSource downloads the diff of a pull request; GitHubReporter posts
findings back to it as inline review comments. Both share an
``httpx.AsyncClient`` built by ``build_github_client``.
"""

import time
from typing import Any, Dict, List, Optional, Sequence

import httpx

from llm_linter.config import Settings
from llm_linter.exceptions import FetchError
from llm_linter.models.finding import Finding
from llm_linter.models.result import PublishResult
from llm_linter.services.base import PatchSource, Reporter
from llm_linter.utils.logging import get_logger, log_api_call
from llm_linter.utils.metrics import LintMetrics
from llm_linter.utils.resilience import Pacer

logger = get_logger(__name__)

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
ATTRIBUTION = "Reported by [LLM linter](https://github.com/HosokawaR/LLM-linter)"
DEFAULT_COMMENT_DELAY = 1.0


def build_github_client(settings: Settings) -> httpx.AsyncClient:
    """
    Create an authenticated client for the GitHub REST API.
    
    The token only ever lives in the Authorization header.
    """
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
        "User-Agent": "llm-linter",
    }
    if settings.github_token is not None:
        headers["Authorization"] = f"Bearer {settings.github_token.get_secret_value()}"
    
    return httpx.AsyncClient(
        base_url=settings.github_api_url,
        headers=headers,
        timeout=settings.request_timeout_seconds,
    )


def pull_request_path(owner: str, repository: str, pull_number: int) -> str:
    return f"/repos/{owner}/{repository}/pulls/{pull_number}"


class GitHubPatchSource(PatchSource):
    """Fetches the unified diff of a pull request."""
    
    def __init__(
        self,
        client: httpx.AsyncClient,
        owner: str,
        repository: str,
        pull_number: int,
        metrics: Optional[LintMetrics] = None,
    ):
        self.client = client
        self.owner = owner
        self.repository = repository
        self.pull_number = pull_number
        self.metrics = metrics
    
    async def fetch(self) -> str:
        endpoint = pull_request_path(self.owner, self.repository, self.pull_number)
        start_time = time.monotonic()
        
        try:
            response = await self.client.get(endpoint, headers={"Accept": DIFF_MEDIA_TYPE})
        except httpx.HTTPError as e:
            log_api_call(logger, "github", endpoint, "GET", error=str(e))
            raise FetchError(f"Failed to fetch diff for {self._label}: {e}") from e
        
        duration_ms = (time.monotonic() - start_time) * 1000
        if self.metrics:
            self.metrics.record_api_call("github", duration_ms)
        
        if not response.is_success:
            log_api_call(
                logger, "github", endpoint, "GET",
                status_code=response.status_code,
                duration_ms=duration_ms,
                error=response.text[:500],
            )
            raise FetchError(
                f"Failed to fetch diff for {self._label}: HTTP {response.status_code}"
            )
        
        log_api_call(logger, "github", endpoint, "GET", status_code=response.status_code, duration_ms=duration_ms)
        return response.text
    
    @property
    def _label(self) -> str:
        return f"{self.owner}/{self.repository}#{self.pull_number}"


def add_suffix(message: str) -> str:
    """Append the attribution footer to a comment body."""
    return f"{message}\n\n{ATTRIBUTION}"


def build_comment_request(finding: Finding, commit_id: str) -> Dict[str, Any]:
    """
    Build the payload of a pull request review comment.
    
    Single-line findings anchor on ``line`` only; ranges also carry
    ``start_line`` and ``start_side``.
    """
    location = finding.location
    request: Dict[str, Any] = {
        "body": add_suffix(finding.message),
        "commit_id": commit_id,
        "path": location.path,
        "line": location.end_line,
        "side": "RIGHT",
    }
    if not location.is_single_line:
        request["start_line"] = location.start_line
        request["start_side"] = "RIGHT"
    return request


class GitHubReporter(Reporter):
    """Posts findings as inline comments on a pull request."""
    
    def __init__(
        self,
        client: httpx.AsyncClient,
        owner: str,
        repository: str,
        pull_number: int,
        pacer: Optional[Pacer] = None,
        metrics: Optional[LintMetrics] = None,
    ):
        """
        Initialize the reporter.
        
        Args:
            client: Authenticated GitHub client
            owner: Repository owner
            repository: Repository name
            pull_number: Pull request number
            pacer: Wait applied before each comment (1 second by default)
            metrics: Optional metrics collector
        """
        self.client = client
        self.owner = owner
        self.repository = repository
        self.pull_number = pull_number
        self.pacer = pacer or Pacer(DEFAULT_COMMENT_DELAY)
        self.metrics = metrics
    
    async def report(self, findings: Sequence[Finding]) -> PublishResult:
        """
        Post every finding as an inline comment on the head commit.
        
        Failed comments are logged and counted; the rest still post.
        
        Raises:
            FetchError: If the head commit cannot be resolved
        """
        if not findings:
            logger.info("No findings to report")
            return PublishResult(success=True, published_count=0, failed_count=0)
        
        logger.info(f"Publishing {len(findings)} comments to {self.owner}/{self.repository}#{self.pull_number}")
        
        commit_id = await self.fetch_latest_commit_sha()
        
        published_count = 0
        errors: List[str] = []
        
        for finding in findings:
            await self.pacer.wait()
            error = await self._comment(finding, commit_id)
            if error is None:
                published_count += 1
            else:
                errors.append(error)
        
        logger.info(f"Published {published_count}/{len(findings)} comments successfully")
        
        return PublishResult(
            success=not errors,
            published_count=published_count,
            failed_count=len(errors),
            errors=errors,
        )
    
    async def fetch_latest_commit_sha(self) -> str:
        """
        Head commit of the pull request, which comments are anchored to.
        
        Raises:
            FetchError: If the pull request cannot be read or has no head sha
        """
        endpoint = pull_request_path(self.owner, self.repository, self.pull_number)
        try:
            response = await self.client.get(endpoint)
            response.raise_for_status()
            sha = response.json()["head"]["sha"]
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            log_api_call(logger, "github", endpoint, "GET", error=str(e))
            raise FetchError(
                f"Could not resolve head commit of {self.owner}/{self.repository}#{self.pull_number}: {e}"
            ) from e
        logger.debug(f"Pull request head sha: {sha}")
        return sha
    
    async def _comment(self, finding: Finding, commit_id: str) -> Optional[str]:
        """Post one comment; return an error description instead of raising."""
        endpoint = pull_request_path(self.owner, self.repository, self.pull_number) + "/comments"
        location = finding.location
        label = f"{location.path}:{location.start_line}-{location.end_line}"
        start_time = time.monotonic()
        
        try:
            response = await self.client.post(endpoint, json=build_comment_request(finding, commit_id))
        except httpx.HTTPError as e:
            log_api_call(logger, "github", endpoint, "POST", error=str(e))
            return f"{label} - {e}"
        
        duration_ms = (time.monotonic() - start_time) * 1000
        if self.metrics:
            self.metrics.record_api_call("github", duration_ms)
        
        if not response.is_success:
            logger.warning(
                f"GitHub API returned an error for comment on {label}",
                extra={
                    "status_code": response.status_code,
                    "response_body": response.text[:500],
                    "finding": finding.model_dump(mode="json"),
                }
            )
            return f"{label} - HTTP {response.status_code}"
        
        log_api_call(logger, "github", endpoint, "POST", status_code=response.status_code, duration_ms=duration_ms)
        return None
