"""
library_ingest - document ingestion pipeline.

Stores raw uploads, converts them to plain text, and embeds text chunks
into a tiered blob store for downstream retrieval.
"""

__version__ = "0.1.0"
