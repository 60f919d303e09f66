"""
Personal knowledge base backend.

Ingests PDFs, raw text and web pages into a vector collection and answers
questions grounded in the retrieved fragments.
"""

__version__ = "0.1.0"
