"""
Application configuration management.

``Settings`` holds process-wide values loaded from the environment (the CLI
loads ``.env`` files into it first); ``RunConfig`` holds the parameters of a
single review run. Both are built once by the CLI and handed to every
collaborator explicitly.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, SecretStr, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from llm_linter.exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    # OpenAI
    openai_api_key: SecretStr
    openai_model: str = "gpt-4o-mini"
    openai_base_url: Optional[str] = None

    # GitHub
    github_token: Optional[SecretStr] = None
    github_api_url: str = "https://api.github.com"

    # Pacing (seconds)
    model_call_delay_seconds: float = Field(default=3.0, ge=0)
    comment_delay_seconds: float = Field(default=1.0, ge=0)
    request_timeout_seconds: float = Field(default=60.0, gt=0)

    # Total attempts per model call, first one included
    model_max_attempts: int = Field(default=1, ge=1)

    # USD per 1000 tokens, used for cost estimates in logs
    input_token_price_per_1k: float = 0.005
    output_token_price_per_1k: float = 0.015

    # Application
    log_level: str = "INFO"


def load_settings(**overrides) -> Settings:
    """
    Build settings from the environment, turning validation failures into ConfigError.

    Args:
        **overrides: Explicit values taking precedence over the environment

    Returns:
        Validated Settings instance

    Raises:
        ConfigError: If a required value is missing or invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = ", ".join(
            ".".join(str(part) for part in err["loc"]).upper() for err in e.errors()
        )
        raise ConfigError(f"Invalid or missing settings: {missing}") from e


class ReporterKind(str, Enum):
    """Where retained findings are reported."""

    GITHUB = "github"
    STDOUT = "stdout"


class RunConfig(BaseModel):
    """Parameters of a single review run."""

    rules_path: Path
    diff_file: Optional[Path] = None
    owner: Optional[str] = None
    repository: Optional[str] = None
    pull_number: Optional[int] = None
    reporter: ReporterKind = ReporterKind.GITHUB

    @model_validator(mode="after")
    def _check_sources(self) -> "RunConfig":
        if self.pull_number is not None and self.pull_number <= 0:
            raise ValueError("pull number must be positive")
        if self.diff_file is None and not self.has_pull_request:
            raise ValueError("either a diff file or owner, repository and pull number must be set")
        if self.reporter == ReporterKind.GITHUB and not self.has_pull_request:
            raise ValueError("the github reporter needs owner, repository and pull number")
        return self

    @property
    def has_pull_request(self) -> bool:
        return bool(self.owner and self.repository and self.pull_number)


def build_run_config(**values) -> RunConfig:
    """
    Validate run parameters.

    Raises:
        ConfigError: If a required run parameter is missing or invalid
    """
    try:
        return RunConfig(**values)
    except ValidationError as e:
        details = "; ".join(err["msg"] for err in e.errors())
        raise ConfigError(f"Invalid run configuration: {details}") from e
