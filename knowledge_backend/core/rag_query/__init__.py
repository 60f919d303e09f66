"""Grounded question answering: prompt assembly and generation."""

from knowledge_backend.core.rag_query.generation import GenerationTask
from knowledge_backend.core.rag_query.rag_prompt import RAG_PROMPT, build_rag_messages

__all__ = ["GenerationTask", "RAG_PROMPT", "build_rag_messages"]
