from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class ChunkMetadata:
    """Metadata for a text chunk."""
    chunk_index: int  # 1-based position within the source text
    source_file: Optional[str] = None


@dataclass
class Chunk:
    """A text chunk with associated metadata."""
    text: str
    metadata: ChunkMetadata


class ChunkingStrategy(ABC):
    """Abstract base class for text chunking strategies."""

    @abstractmethod
    def split_text(self, text: str) -> List[str]:
        """Split text into an ordered list of chunk strings."""

    def chunk_document(self, document: str, source_file: Optional[str] = None) -> List[Chunk]:
        """Chunk a document and return list of chunks with metadata."""
        chunks = []
        for chunk_index, text in enumerate(self.split_text(document), start=1):
            metadata = ChunkMetadata(chunk_index=chunk_index, source_file=source_file)
            chunks.append(Chunk(text=text, metadata=metadata))
        return chunks
