"""Berkshire RAG - retrieval-augmented answers over shareholder letters."""

__version__ = "0.1.0"
