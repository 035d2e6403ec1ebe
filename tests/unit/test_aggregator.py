"""Unit tests for the multi-file aggregator."""

from __future__ import annotations

import pytest

from chatsense.ingest.aggregator import NoProcessableFilesError, analyze_contents, select_usable
from chatsense.ingest.types import FailureKind, ProcessedFile
from chatsense.llm.client import AnalysisClient


class RecordingClient:
    """Records which analysis path the aggregator chose."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def analyze(self, content):
        self.calls.append(("analyze", content))
        return "single"

    def analyze_multiple(self, contents):
        self.calls.append(("analyze_multiple", list(contents)))
        return "multi"


def test_select_usable_drops_short_content():
    files = [ProcessedFile("short.json", "x" * 50), ProcessedFile("long.json", "y" * 150)]

    usable, skipped = select_usable(files)

    assert [f.name for f in usable] == ["long.json"]
    assert len(skipped) == 1
    assert skipped[0].name == "short.json"
    assert skipped[0].kind == FailureKind.TOO_SHORT


def test_select_usable_keeps_content_at_threshold():
    usable, skipped = select_usable([ProcessedFile("edge.json", "z" * 100)])

    assert len(usable) == 1
    assert skipped == []


def test_select_usable_custom_threshold():
    usable, _ = select_usable([ProcessedFile("a.json", "abc")], min_chars=3)

    assert len(usable) == 1


def test_zero_contents_raise():
    with pytest.raises(NoProcessableFilesError):
        analyze_contents(RecordingClient(), [])


def test_single_content_routes_to_single_file_analysis():
    client = RecordingClient()

    result = analyze_contents(client, ["x" * 150])

    assert result == "single"
    assert client.calls == [("analyze", "x" * 150)]


def test_multiple_contents_route_to_combined_analysis():
    client = RecordingClient()

    result = analyze_contents(client, ["first" * 30, "second" * 30])

    assert result == "multi"
    assert client.calls == [("analyze_multiple", ["first" * 30, "second" * 30])]


def test_combined_document_has_file_markers_in_order(settings, model_factory, fake_model):
    client = AnalysisClient(settings, model_factory=model_factory)

    analyze_contents(client, ["A" * 150, "B" * 150])

    prompt = fake_model.requests[0]
    assert "FILE 1" in prompt
    assert "FILE 2" in prompt
    assert prompt.index("FILE 1") < prompt.index("A" * 150) < prompt.index("FILE 2")
    assert prompt.index("FILE 2") < prompt.index("B" * 150)


def test_single_content_prompt_has_no_file_markers(settings, model_factory, fake_model):
    client = AnalysisClient(settings, model_factory=model_factory)

    analyze_contents(client, ["x" * 150])

    assert "FILE 1" not in fake_model.requests[0]
