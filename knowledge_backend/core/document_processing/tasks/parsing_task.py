"""
Content extraction task using LangChain document loaders.

Converts PDF files (PyPDFLoader) and web pages (WebBaseLoader) into plain
text. Raw text needs no extraction.

Dependencies: langchain_community.document_loaders
System role: First stage of document ingestion pipeline
"""

import logging
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader, WebBaseLoader

from knowledge_backend.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)


class ParsingTask:
    """Extract text from PDF documents and web pages."""

    def __init__(self, fetch_timeout: float = 15.0) -> None:
        """
        Initialize parsing task.

        Args:
            fetch_timeout: HTTP timeout in seconds for web page fetches
        """
        self._fetch_timeout = fetch_timeout

    def parse_pdf(self, file_path: str) -> str:
        """
        Extract the text of every page of a PDF.

        Args:
            file_path: Path to PDF document

        Returns:
            str: Page texts joined by blank lines

        Raises:
            ExtractionError: When the file is missing, unreadable or has no text
        """
        path = Path(file_path)
        if not path.exists():
            raise ExtractionError(f"File not found: {file_path}", origin=file_path)

        try:
            documents = PyPDFLoader(file_path).load()
        except Exception as e:
            raise ExtractionError(f"Failed to parse PDF: {e}", origin=file_path) from e

        text = "\n\n".join(doc.page_content for doc in documents if doc.page_content.strip())
        if not text.strip():
            raise ExtractionError("PDF document contains no extractable text", origin=file_path)

        logger.info(f"{__name__}:parse_pdf - Extracted {len(documents)} pages ({len(text)} chars)")
        return text

    def fetch_url(self, url: str) -> str:
        """
        Fetch a web page and extract its visible text.

        Args:
            url: Page address

        Returns:
            str: Visible page text

        Raises:
            ExtractionError: When the fetch fails or the page has no text
        """
        try:
            loader = WebBaseLoader(
                web_paths=[url],
                requests_kwargs={"timeout": self._fetch_timeout},
                raise_for_status=True,
            )
            documents = loader.load()
        except Exception as e:
            raise ExtractionError(f"Failed to fetch URL: {e}", origin=url) from e

        text = "\n\n".join(doc.page_content.strip() for doc in documents if doc.page_content.strip())
        if not text:
            raise ExtractionError("Web page contains no extractable text", origin=url)

        logger.info(f"{__name__}:fetch_url - Extracted {len(text)} chars from {url}")
        return text
