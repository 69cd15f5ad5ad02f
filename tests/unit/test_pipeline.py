"""Unit tests for the review pipeline."""

import json
from typing import List, Sequence
from unittest.mock import AsyncMock

import pytest

from llm_linter.core.linter import Linter
from llm_linter.core.pipeline import ReviewPipeline
from llm_linter.core.response_interpreter import interpret_response
from llm_linter.exceptions import FetchError, ModelCallError, ResponseError
from llm_linter.models import Finding, FindingKind, PublishResult
from llm_linter.rules.markdown import parse_rules
from llm_linter.services.base import LlmClient, PatchSource, Reporter
from llm_linter.utils.resilience import Pacer


class StaticPatchSource(PatchSource):
    """Returns a fixed diff."""

    def __init__(self, diff: str):
        self.diff = diff

    async def fetch(self) -> str:
        return self.diff


class ReplyingLlmClient(LlmClient):
    """Interprets the same raw reply for every prompt."""

    def __init__(self, raw_reply: str):
        self.raw_reply = raw_reply
        self.prompts: List[str] = []

    async def check(self, path: str, prompt: str) -> List[Finding]:
        self.prompts.append(prompt)
        return interpret_response(self.raw_reply, path)


class RecordingReporter(Reporter):
    """Keeps reported findings in memory."""

    def __init__(self):
        self.reported: List[Finding] = []
        self.calls = 0

    async def report(self, findings: Sequence[Finding]) -> PublishResult:
        self.calls += 1
        self.reported.extend(findings)
        return PublishResult(success=True, published_count=len(findings), failed_count=0)


def build_pipeline(diff, rules, client, reporter):
    linter = Linter(client, parse_rules(rules), pacer=Pacer(3.0, AsyncMock()))
    return ReviewPipeline(StaticPatchSource(diff), linter, reporter, run_id="test-run")


class TestReviewPipeline:
    """Test suite for ReviewPipeline.run."""

    @pytest.mark.asyncio
    async def test_only_errors_are_reported(self, sample_diff, sample_rules):
        """Test the full flow with a mixed reply."""
        raw = json.dumps({"messages": [
            {"kind": "error", "message": "no unwrap", "location": {"start_line": 3, "end_line": 3}},
            {"kind": "warning", "message": "maybe", "location": {"start_line": 4, "end_line": 4}},
            {"kind": "cancel", "message": "fine", "location": {"start_line": 1, "end_line": 5}},
        ]})
        reporter = RecordingReporter()
        client = ReplyingLlmClient(raw)

        result = await build_pipeline(sample_diff, sample_rules, client, reporter).run()

        assert result.units_parsed == 3
        assert result.prompts_sent == 2
        assert len(result.findings) == 6
        assert [f.kind for f in reporter.reported] == [FindingKind.ERROR, FindingKind.ERROR]
        assert all(f.location.path == "src/main.rs" for f in reporter.reported)
        assert result.publish_result.published_count == 2
        assert result.metrics["status"] == "completed"
        assert result.metrics["findings_by_kind"] == {"error": 2, "warning": 2, "cancel": 2}
        assert result.metrics["units_skipped"] == 1

    @pytest.mark.asyncio
    async def test_cancelled_finding_produces_no_comments(self, sample_diff, sample_rules):
        """Test that a self-retracted finding never reaches the reporter."""
        raw = '{"messages":[{"kind":"cancel","message":"ok","location":{"start_line":5,"end_line":5}}]}'
        reporter = RecordingReporter()

        result = await build_pipeline(sample_diff, sample_rules, ReplyingLlmClient(raw), reporter).run()

        assert reporter.reported == []
        assert result.reported == []
        assert result.publish_result.published_count == 0

    @pytest.mark.asyncio
    async def test_invalid_reply_posts_nothing(self, sample_diff, sample_rules):
        """Test that a fatal error happens before any reporting."""
        reporter = RecordingReporter()
        pipeline = build_pipeline(sample_diff, sample_rules, ReplyingLlmClient('{"messages": "nope"}'), reporter)

        with pytest.raises(ResponseError):
            await pipeline.run()

        assert reporter.calls == 0
        assert pipeline.metrics.status == "failed"

    @pytest.mark.asyncio
    async def test_model_failure_posts_nothing(self, sample_diff, sample_rules):
        """Test that a model call failure aborts the run before reporting."""
        client = AsyncMock(spec=LlmClient)
        client.check.side_effect = ModelCallError("503")
        reporter = RecordingReporter()

        with pytest.raises(ModelCallError):
            await build_pipeline(sample_diff, sample_rules, client, reporter).run()

        assert reporter.calls == 0

    @pytest.mark.asyncio
    async def test_fetch_failure_aborts(self, sample_rules):
        """Test that a diff source failure propagates."""
        source = AsyncMock(spec=PatchSource)
        source.fetch.side_effect = FetchError("404")
        linter = Linter(ReplyingLlmClient('{"messages": []}'), parse_rules(sample_rules), pacer=Pacer(0))
        reporter = RecordingReporter()

        with pytest.raises(FetchError):
            await ReviewPipeline(source, linter, reporter).run()

        assert reporter.calls == 0

    @pytest.mark.asyncio
    async def test_metrics_are_shared_with_the_linter(self, sample_diff, sample_rules):
        """Test that the pipeline and linter count into the same collector."""
        pipeline = build_pipeline(sample_diff, sample_rules, ReplyingLlmClient('{"messages": []}'), RecordingReporter())

        await pipeline.run()

        assert pipeline.linter.metrics is pipeline.metrics
        assert pipeline.metrics.units_parsed == 3
        assert pipeline.metrics.units_skipped == 1
        assert pipeline.metrics.status == "completed"
