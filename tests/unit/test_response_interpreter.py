"""Unit tests for model reply interpretation."""

import json

import pytest

from llm_linter.core.response_interpreter import interpret_response, to_kind
from llm_linter.exceptions import ResponseError
from llm_linter.models import FindingKind


def reply(*messages) -> str:
    return json.dumps({"messages": list(messages)})


def message(kind="error", text="fix this", start=5, end=5, **extra):
    item = {"kind": kind, "message": text, "location": {"start_line": start, "end_line": end}}
    item.update(extra)
    return item


class TestInterpretResponse:
    """Test suite for interpret_response."""

    @pytest.mark.parametrize(
        "token,kind",
        [("error", FindingKind.ERROR), ("warning", FindingKind.WARNING), ("cancel", FindingKind.CANCEL)],
    )
    def test_every_kind_token_maps_to_its_variant(self, token, kind):
        """Test the exhaustive token mapping."""
        findings = interpret_response(reply(message(kind=token)), "src/main.rs")

        assert findings[0].kind is kind

    @pytest.mark.parametrize("token", ["info", "Error", "ERROR", "", "critical"])
    def test_unknown_kind_is_rejected(self, token):
        """Test that unrecognised severities are never silently downgraded."""
        with pytest.raises(ResponseError):
            interpret_response(reply(message(kind=token)), "src/main.rs")

    def test_missing_kind_is_rejected(self):
        """Test that a finding without kind raises ResponseError."""
        item = message()
        del item["kind"]

        with pytest.raises(ResponseError):
            interpret_response(reply(item), "src/main.rs")

    def test_location_and_message_are_preserved(self):
        """Test that the model's line span and message are carried over."""
        finding = interpret_response(reply(message(text="use ?", start=3, end=7)), "src/main.rs")[0]

        assert finding.message == "use ?"
        assert finding.location.start_line == 3
        assert finding.location.end_line == 7
        assert not finding.location.is_single_line

    def test_path_always_comes_from_the_change_unit(self):
        """Test that a path echoed by the model is ignored."""
        item = message()
        item["location"]["path"] = "somewhere/else.rs"
        item["path"] = "elsewhere.rs"

        finding = interpret_response(reply(item), "src/main.rs")[0]

        assert finding.location.path == "src/main.rs"

    def test_reply_order_is_preserved(self):
        """Test that findings keep the order of the reply."""
        findings = interpret_response(
            reply(message(text="a"), message(kind="cancel", text="b"), message(kind="warning", text="c")),
            "x.py",
        )

        assert [finding.message for finding in findings] == ["a", "b", "c"]

    def test_justification_fields_are_ignored(self):
        """Test that the reasoning chain does not break parsing."""
        item = message(quote="x", rule="r", suspicion="s", defense="d", reevaluation="ok")

        assert len(interpret_response(reply(item), "x.py")) == 1

    def test_empty_message_list(self):
        """Test a reply without findings."""
        assert interpret_response('{"messages": []}', "x.py") == []

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "",
            "[]",
            '{"findings": []}',
            '{"messages": {}}',
            reply({"kind": "error", "message": "m"}),
            reply({"kind": "error", "location": {"start_line": 1, "end_line": 1}}),
            reply(message(start=-1)),
            reply({"kind": "error", "message": "m", "location": {"start_line": 1}}),
            reply(message(start=True, end=7)),
            reply(message(start=3, end="7")),
            reply(message(start=3.0, end=3)),
            reply(message(start=None, end=3)),
            reply(message(start=9, end=3)),
        ],
    )
    def test_malformed_replies_are_rejected(self, raw):
        """Test that schema mismatches raise ResponseError."""
        with pytest.raises(ResponseError):
            interpret_response(raw, "x.py")


def test_to_kind_rejects_unknown_tokens():
    """Test the token mapping helper directly."""
    assert to_kind("warning") is FindingKind.WARNING
    with pytest.raises(ResponseError):
        to_kind("notice")
