"""
Grounded answer prompt.

Defines the system prompt template for knowledge base Q&A. The system turn
lists every registered source and the retrieved fragments; the human turn is
the question itself.

Dependencies: langchain_core.prompts
System role: Prompt template for grounded generation
"""

import json

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate

from knowledge_backend.boundary.vdb.vector_schemas import VectorSearchResult
from knowledge_backend.models.source import Source

NO_SOURCES_PLACEHOLDER = "(no sources have been added yet)"
NO_CONTEXT_MARKER = "(no relevant context was found for this question)"

SYSTEM_PROMPT = """You are a helpful assistant that answers questions using the user's personal knowledge base.

## Available Sources
{sources_summary}

## Relevant Context For This Query
{context}

## Instructions
1. Answer ONLY from the context above
2. If the context doesn't contain enough information, say so clearly
3. Reference specific sources by title when possible
4. Be helpful and accurate based on the provided information
5. If asked about sources that are not in the context, tell the user instead of speculating"""

RAG_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", "{question}"),
])


def format_sources_summary(sources: list[Source]) -> str:
    """One `- TYPE: title (timestamp)` line per source, in registry order."""
    if not sources:
        return NO_SOURCES_PLACEHOLDER
    return "\n".join(
        f"- {source.type.value.upper()}: {source.title} ({source.ingested_at.isoformat()})"
        for source in sources
    )


def format_context(fragments: list[VectorSearchResult]) -> str:
    """
    Render retrieved fragments verbatim as indented JSON.

    Args:
        fragments: Search results in ranking order

    Returns:
        str: JSON array of {page_content, metadata, score}, or the no-context marker
    """
    if not fragments:
        return NO_CONTEXT_MARKER
    payload = [
        {"page_content": f.content, "metadata": f.metadata, "score": f.score}
        for f in fragments
    ]
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def build_rag_messages(
    question: str,
    sources: list[Source],
    fragments: list[VectorSearchResult],
) -> list[BaseMessage]:
    """
    Build the [system, human] message pair for the chat model.

    Args:
        question: User question, passed through unchanged
        sources: Registry snapshot
        fragments: Retrieved fragments, nearest first

    Returns:
        list[BaseMessage]: SystemMessage followed by HumanMessage
    """
    return RAG_PROMPT.format_messages(
        sources_summary=format_sources_summary(sources),
        context=format_context(fragments),
        question=question,
    )
