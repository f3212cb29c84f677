"""Text chunking strategies."""

from .base import Chunk, ChunkMetadata, ChunkingStrategy
from .words import WordChunkingStrategy, split_into_chunks

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "ChunkingStrategy",
    "WordChunkingStrategy",
    "split_into_chunks",
]
