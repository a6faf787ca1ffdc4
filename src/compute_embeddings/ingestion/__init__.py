"""
Ingestion — turn the JSON documents read from stdin into embedded records.

This module holds the pipeline steps that run before rendering: loading
the input array, extracting one text per document, grouping documents
into batches and driving the embedding backend over them.
"""

from compute_embeddings.ingestion.batcher import schedule
from compute_embeddings.ingestion.embedder import embed_documents
from compute_embeddings.ingestion.extractor import extract_text, stringify
from compute_embeddings.ingestion.loader import load_documents, validate_documents

__all__ = [
    "embed_documents",
    "extract_text",
    "load_documents",
    "schedule",
    "stringify",
    "validate_documents",
]
