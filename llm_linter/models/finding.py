"""Finding (model-reported review comment) data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class FindingKind(str, Enum):
    """Severity of a finding as decided by the model."""

    ERROR = "error"
    WARNING = "warning"
    CANCEL = "cancel"  # retracted by the model on re-evaluation


class Location(BaseModel):
    """Where a finding applies in the post-change file."""

    model_config = ConfigDict(frozen=True)

    path: str
    start_line: int
    end_line: int

    @property
    def is_single_line(self) -> bool:
        return self.start_line == self.end_line


class Finding(BaseModel):
    """One located, severity-tagged review comment candidate."""

    model_config = ConfigDict(frozen=True)

    kind: FindingKind
    message: str
    location: Location
