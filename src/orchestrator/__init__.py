"""Batch generation and the JSONL generation event log."""

from .batch import BatchGenerationError, BatchResult, generate_batch
from . import log

__all__ = [
    "BatchGenerationError",
    "BatchResult",
    "generate_batch",
    "log",
]
