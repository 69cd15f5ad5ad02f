"""Review rule data models."""

from pydantic import BaseModel, ConfigDict


class Rule(BaseModel):
    """A free-text review rule scoped to files matching a glob."""

    model_config = ConfigDict(frozen=True)

    target_file_glob: str
    content: str
