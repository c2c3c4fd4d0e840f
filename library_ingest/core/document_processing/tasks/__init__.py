"""
Task modules for the embed pipeline.

Exports: ChunkingTask, EmbeddingTask, SavingTask
"""

from .chunking_task import ChunkingTask
from .embedding_task import EmbeddingTask
from .saving_task import SavingTask

__all__ = [
    "ChunkingTask",
    "EmbeddingTask",
    "SavingTask",
]
