"""
Fixed-dimension Google embeddings.

gemini-embedding-001 returns 3072-dimensional vectors unless an output
dimensionality is requested on every call. This wrapper pins it so
documents and queries always match the collection dimension.

Dependencies: langchain_google_genai
System role: Embedding model adapter used by the embedding task
"""

from langchain_google_genai import GoogleGenerativeAIEmbeddings


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """GoogleGenerativeAIEmbeddings that always requests the same output size."""

    output_dimensionality: int = 1024

    def embed_documents(self, texts: list[str], **kwargs) -> list[list[float]]:
        kwargs["output_dimensionality"] = self.output_dimensionality
        kwargs.setdefault("task_type", "RETRIEVAL_DOCUMENT")
        return super().embed_documents(texts, **kwargs)

    def embed_query(self, text: str, **kwargs) -> list[float]:
        kwargs["output_dimensionality"] = self.output_dimensionality
        kwargs.setdefault("task_type", "RETRIEVAL_QUERY")
        return super().embed_query(text, **kwargs)
