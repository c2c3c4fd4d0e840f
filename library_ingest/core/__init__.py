"""Core domain logic: exceptions and the document processing pipeline."""
