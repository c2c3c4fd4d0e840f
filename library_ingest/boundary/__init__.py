"""Adapters for external systems: blob storage, converters, embeddings, database."""
