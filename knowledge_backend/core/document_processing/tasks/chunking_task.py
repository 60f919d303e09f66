"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits extracted text into retrievable chunks while preserving context.

Dependencies: langchain_text_splitters
System role: Second stage of document ingestion pipeline
"""

from langchain_text_splitters import RecursiveCharacterTextSplitter


class ChunkingTask:
    """Split text into chunks using RecursiveCharacterTextSplitter."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
        """
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
        )

    def chunk(self, text: str) -> list[str]:
        """
        Split text into chunks.

        Args:
            text: Normalized text of one source

        Returns:
            list[str]: Non-empty chunks in document order

        Raises:
            ValueError: When text is empty
        """
        if not text or not text.strip():
            raise ValueError("No text to chunk")

        return [c for c in self._splitter.split_text(text) if c.strip()]
