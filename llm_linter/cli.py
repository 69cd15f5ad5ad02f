"""
Command line entry point.

    llm-linter review --rules RULES.md --owner OWNER --repository REPO --pull 42
    llm-linter review --rules RULES.md --diff-file change.diff
    llm-linter rules RULES.md
"""

import asyncio
import uuid
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from llm_linter.config import ReporterKind, RunConfig, Settings, build_run_config, load_settings
from llm_linter.core.linter import Linter
from llm_linter.core.pipeline import ReviewPipeline
from llm_linter.exceptions import ConfigError, LinterError
from llm_linter.models.result import ReviewResult
from llm_linter.rules.markdown import load_rules
from llm_linter.services.base import PatchSource, Reporter
from llm_linter.services.file_source import FilePatchSource
from llm_linter.services.github import GitHubPatchSource, GitHubReporter, build_github_client
from llm_linter.services.openai_client import OpenAIClient
from llm_linter.services.stdout_reporter import StdoutReporter
from llm_linter.utils.logging import get_logger, log_error_with_context, setup_logging
from llm_linter.utils.metrics import LintMetrics
from llm_linter.utils.resilience import Pacer, Sleep

logger = get_logger(__name__)

app = typer.Typer(help="Review pull request diffs against markdown rules with an LLM.")

ENV_FILES = (".env.local", ".env")


def load_env_files() -> None:
    """Load the first .env file found in the working directory; real environment variables win."""
    for env_file in ENV_FILES:
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=False)
            logger.info(f"Loaded environment from {env_file}")
            break


async def run_review(settings: Settings, run_config: RunConfig, sleep: Sleep = asyncio.sleep) -> ReviewResult:
    """
    Wire the collaborators for one run and execute the review pipeline.
    
    Rules are loaded and credentials checked before any network call.
    
    Raises:
        LinterError: Any fatal error of the run
    """
    rule_set = load_rules(run_config.rules_path)
    
    uses_github = run_config.diff_file is None or run_config.reporter == ReporterKind.GITHUB
    if uses_github and settings.github_token is None:
        raise ConfigError("GITHUB_TOKEN must be set to read or comment on pull requests")
    
    run_id = uuid.uuid4().hex[:12]
    metrics = LintMetrics(run_id)
    
    async with build_github_client(settings) as github:
        patch_source: PatchSource
        if run_config.diff_file is not None:
            patch_source = FilePatchSource(run_config.diff_file)
        else:
            patch_source = GitHubPatchSource(
                github, run_config.owner, run_config.repository, run_config.pull_number, metrics=metrics
            )
        
        reporter: Reporter
        if run_config.reporter == ReporterKind.STDOUT:
            reporter = StdoutReporter()
        else:
            reporter = GitHubReporter(
                github,
                run_config.owner,
                run_config.repository,
                run_config.pull_number,
                pacer=Pacer(settings.comment_delay_seconds, sleep),
                metrics=metrics,
            )
        
        llm_client = OpenAIClient(settings, metrics=metrics, sleep=sleep)
        linter = Linter(
            llm_client,
            rule_set,
            pacer=Pacer(settings.model_call_delay_seconds, sleep),
            metrics=metrics,
        )
        pipeline = ReviewPipeline(patch_source, linter, reporter, metrics=metrics, run_id=run_id)
        return await pipeline.run()


@app.command()
def review(
    rules: Path = typer.Option(..., "--rules", "-r", help="Path to the rules markdown file"),
    diff_file: Optional[Path] = typer.Option(None, "--diff-file", "-f", help="Read the diff from a local file"),
    owner: Optional[str] = typer.Option(None, "--owner", "-o", help="Owner of the repository"),
    repository: Optional[str] = typer.Option(None, "--repository", "-p", help="Repository name"),
    pull: Optional[int] = typer.Option(None, "--pull", "-n", help="Pull request number"),
    reporter: Optional[ReporterKind] = typer.Option(
        None,
        "--reporter",
        help="Where to report findings (default: github for pull requests, stdout for diff files)",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Overrides LOG_LEVEL"),
) -> None:
    """Lint a pull request or diff file against the rules."""
    setup_logging(log_level or "INFO")
    
    load_env_files()
    
    try:
        settings = load_settings()
        if log_level is None:
            setup_logging(settings.log_level)
        
        if reporter is None:
            reporter = ReporterKind.STDOUT if diff_file is not None else ReporterKind.GITHUB
        
        run_config = build_run_config(
            rules_path=rules,
            diff_file=diff_file,
            owner=owner,
            repository=repository,
            pull_number=pull,
            reporter=reporter,
        )
        result = asyncio.run(run_review(settings, run_config))
    except LinterError as e:
        log_error_with_context(logger, f"Review failed: {e}", e)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    
    typer.echo(
        f"Linted {result.prompts_sent} of {result.units_parsed} change units: "
        f"{len(result.findings)} findings, {len(result.reported)} reported.",
        err=True,
    )
    usage = result.metrics.get("usage", {})
    if usage.get("total_tokens"):
        typer.echo(
            f"Model usage: {usage['total_tokens']} tokens, estimated cost ${usage['estimated_cost_usd']:.4f}.",
            err=True,
        )
    if result.publish_result is not None and not result.publish_result.success:
        typer.echo(f"{result.publish_result.failed_count} comments could not be posted.", err=True)


@app.command("rules")
def show_rules(
    rules: Path = typer.Argument(..., help="Path to the rules markdown file"),
) -> None:
    """Validate a rules file and list its globs."""
    try:
        rule_set = load_rules(rules)
    except LinterError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    
    for rule in rule_set:
        lines = len(rule.content.strip().splitlines())
        typer.echo(f"{rule.target_file_glob}\t{lines} lines")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
