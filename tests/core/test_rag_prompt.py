"""
Test suite for the grounded answer prompt.

System role: Verification of system prompt assembly
"""

import json

from langchain_core.messages import HumanMessage, SystemMessage

from knowledge_backend.boundary.vdb.vector_schemas import VectorSearchResult
from knowledge_backend.core.rag_query.rag_prompt import (
    NO_CONTEXT_MARKER,
    NO_SOURCES_PLACEHOLDER,
    build_rag_messages,
    format_context,
    format_sources_summary,
)
from knowledge_backend.models.source import SourceType


def _fragment(content: str, score: float) -> VectorSearchResult:
    return VectorSearchResult(id=f"id-{score}", content=content, metadata={"title": "Doc"}, score=score)


class TestSourcesSummary:
    def test_one_line_per_source(self, source_factory):
        sources = [
            source_factory("source_a", "Lecture.pdf", SourceType.PDF),
            source_factory("source_b", "Blog", SourceType.URL),
        ]

        lines = format_sources_summary(sources).splitlines()

        assert lines == [
            "- PDF: Lecture.pdf (2024-01-02T03:04:05+00:00)",
            "- URL: Blog (2024-01-02T03:04:05+00:00)",
        ]

    def test_placeholder_when_empty(self):
        assert format_sources_summary([]) == NO_SOURCES_PLACEHOLDER


class TestContext:
    def test_fragments_rendered_verbatim_in_order(self):
        fragments = [_fragment("first {braces}", 0.9), _fragment("second", 0.5)]

        payload = json.loads(format_context(fragments))

        assert [p["page_content"] for p in payload] == ["first {braces}", "second"]
        assert payload[0]["metadata"] == {"title": "Doc"}
        assert payload[0]["score"] == 0.9

    def test_marker_when_no_fragments(self):
        assert format_context([]) == NO_CONTEXT_MARKER


class TestBuildMessages:
    def test_system_then_human_question(self, sample_source):
        messages = build_rag_messages("What is X?", [sample_source], [_fragment("X is Y", 0.8)])

        assert isinstance(messages[0], SystemMessage)
        assert isinstance(messages[1], HumanMessage)
        assert messages[1].content == "What is X?"
        assert "- TEXT: Notes" in messages[0].content
        assert "X is Y" in messages[0].content
        assert "ONLY from the context" in messages[0].content

    def test_empty_knowledge_base(self):
        messages = build_rag_messages("Anything?", [], [])

        assert NO_SOURCES_PLACEHOLDER in messages[0].content
        assert NO_CONTEXT_MARKER in messages[0].content
