"""
Interpretation of model replies.

The reply must be a JSON object of the form::

    {"messages": [{"message": "...", "kind": "error",
                   "location": {"start_line": 5, "end_line": 7}}]}

Anything else, including an unknown ``kind``, is a ResponseError: a finding
is never silently dropped or downgraded.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, model_validator

from llm_linter.exceptions import ResponseError
from llm_linter.models.finding import Finding, FindingKind, Location

KIND_BY_TOKEN: Dict[str, FindingKind] = {
    "error": FindingKind.ERROR,
    "warning": FindingKind.WARNING,
    "cancel": FindingKind.CANCEL,
}


class ReplyLocation(BaseModel):
    """Line span as reported by the model; integers only, in ascending order."""

    model_config = ConfigDict(extra="ignore")

    start_line: StrictInt = Field(ge=0)
    end_line: StrictInt = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "ReplyLocation":
        if self.end_line < self.start_line:
            raise ValueError(f"end_line ({self.end_line}) precedes start_line ({self.start_line})")
        return self


class ReplyMessage(BaseModel):
    """One finding as reported by the model; justification fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    kind: str
    message: str
    location: ReplyLocation


class Reply(BaseModel):
    """Top-level reply object."""

    model_config = ConfigDict(extra="ignore")

    messages: List[ReplyMessage]


def to_kind(token: str) -> FindingKind:
    """
    Map a model severity token to a FindingKind.
    
    Raises:
        ResponseError: If the token is not one of error, warning, cancel
    """
    try:
        return KIND_BY_TOKEN[token]
    except KeyError:
        raise ResponseError(f"Unknown finding kind: {token!r}") from None


def interpret_response(raw: str, path: str) -> List[Finding]:
    """
    Parse a model reply into findings.
    
    Args:
        raw: Raw reply text from the model
        path: Path of the change unit the prompt was built from; used for
            every finding regardless of what the reply says
        
    Returns:
        Findings in reply order
        
    Raises:
        ResponseError: If the reply is not valid JSON, does not match the
            schema, or uses an unknown kind
    """
    try:
        reply = Reply.model_validate_json(raw)
    except ValidationError as e:
        raise ResponseError(f"Model reply does not match the finding schema: {e}") from e
    
    return [
        Finding(
            kind=to_kind(item.kind),
            message=item.message,
            location=Location(
                path=path,
                start_line=item.location.start_line,
                end_line=item.location.end_line,
            ),
        )
        for item in reply.messages
    ]
