"""Change unit data models."""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, model_validator


class ChangeUnit(BaseModel):
    """
    One hunk of a unified diff, addressed by post-change line numbers.

    ``end_line`` is ``start_line`` plus the hunk's post-change line count,
    i.e. one past the last line the hunk spans.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    lines: Tuple[str, ...]
    start_line: int
    end_line: int

    @model_validator(mode="after")
    def _check_range(self) -> "ChangeUnit":
        if self.start_line < 0:
            raise ValueError(f"start_line must be non-negative, got {self.start_line}")
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) must not precede start_line ({self.start_line})"
            )
        return self

    @property
    def content(self) -> str:
        """Number-prefixed hunk lines joined by newlines."""
        return "\n".join(self.lines)

    def content_with_path(self) -> str:
        return f"path: {self.path}\n{self.content}"
