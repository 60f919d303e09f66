"""Document processing: extraction, chunking and embedding tasks."""
