from typing import Iterator, List

from .base import ChunkingStrategy


def iter_word_chunks(text: str, chunk_size: int) -> Iterator[str]:
    """
    Greedily pack whitespace-delimited words into chunks of at most chunk_size characters.

    Words are never split: a single word longer than chunk_size is yielded as
    its own chunk. Words inside a chunk are joined by single spaces.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    current: List[str] = []
    current_len = 0

    for word in text.split():
        if current and current_len + 1 + len(word) > chunk_size:
            yield " ".join(current)
            current = [word]
            current_len = len(word)
        elif current:
            current.append(word)
            current_len += 1 + len(word)
        else:
            current = [word]
            current_len = len(word)

    if current:
        yield " ".join(current)


def split_into_chunks(text: str, chunk_size: int) -> List[str]:
    """Split text into word-bounded chunks of at most chunk_size characters."""
    return list(iter_word_chunks(text, chunk_size))


class WordChunkingStrategy(ChunkingStrategy):
    """Chunking strategy that packs whole words up to a character budget."""

    def __init__(self, chunk_size: int):
        """Initialize with the maximum chunk length in characters."""
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size

    def split_text(self, text: str) -> List[str]:
        return split_into_chunks(text, self.chunk_size)
