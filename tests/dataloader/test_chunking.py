"""Tests for word chunking."""

import pytest

from weaviate_kb.dataloader.chunking import (
    Chunk,
    ChunkMetadata,
    WordChunkingStrategy,
    split_into_chunks,
)

SAMPLE_TEXTS = [
    "The quick brown fox jumps over the lazy dog",
    "Lorem ipsum dolor sit amet,\nconsectetur adipiscing elit.\n\nSed do eiusmod tempor.",
    "a " * 50,
    "tiny",
    "antidisestablishmentarianism is long and so is pneumonoultramicroscopic",
]


class TestSplitIntoChunks:
    """Tests for split_into_chunks."""

    def test_packs_words_greedily(self):
        """Test that words are packed until the next word would overflow."""
        assert split_into_chunks("one two three four", 9) == ["one two", "three", "four"]

    def test_long_word_forms_its_own_chunk(self):
        """Test that a word longer than chunk_size is kept whole."""
        chunks = split_into_chunks("a supercalifragilistic b", 5)

        assert chunks == ["a", "supercalifragilistic", "b"]

    def test_exact_fit_stays_in_one_chunk(self):
        """Test that a chunk may be exactly chunk_size characters long."""
        assert split_into_chunks("abcd efgh", 9) == ["abcd efgh"]

    def test_empty_text_returns_empty_list(self):
        """Test that empty or whitespace-only text produces no chunks."""
        assert split_into_chunks("", 10) == []
        assert split_into_chunks("   \n\t  ", 10) == []

    def test_whitespace_runs_are_normalized(self):
        """Test that any run of whitespace separates words."""
        assert split_into_chunks("alpha\n\n  beta\tgamma", 100) == ["alpha beta gamma"]

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    @pytest.mark.parametrize("chunk_size", [1, 5, 12, 40, 1000])
    def test_chunks_preserve_words_and_respect_size(self, text, chunk_size):
        """Test that chunks rejoin to the original words and stay within the size bound."""
        chunks = split_into_chunks(text, chunk_size)

        assert " ".join(chunks).split() == text.split()
        for chunk in chunks:
            assert chunk
            assert len(chunk) <= chunk_size or len(chunk.split()) == 1

    def test_is_deterministic(self):
        """Test that identical input yields identical chunk boundaries."""
        text = SAMPLE_TEXTS[1]
        assert split_into_chunks(text, 20) == split_into_chunks(text, 20)

    @pytest.mark.parametrize("chunk_size", [0, -3])
    def test_non_positive_chunk_size_raises(self, chunk_size):
        """Test that chunk_size must be positive."""
        with pytest.raises(ValueError, match="chunk_size must be positive"):
            split_into_chunks("some text", chunk_size)


class TestWordChunkingStrategy:
    """Tests for WordChunkingStrategy."""

    def test_chunk_document_returns_chunks(self):
        """Test that chunking returns Chunk objects with proper metadata."""
        strategy = WordChunkingStrategy(chunk_size=20)
        document = "This is a test document. " * 10

        chunks = strategy.chunk_document(document, source_file="notes.txt")

        assert len(chunks) > 1
        for chunk in chunks:
            assert isinstance(chunk, Chunk)
            assert isinstance(chunk.metadata, ChunkMetadata)
            assert chunk.metadata.source_file == "notes.txt"
            assert len(chunk.text) <= 20

    def test_chunk_indices_start_at_one(self):
        """Test that chunk indices are sequential starting from 1."""
        strategy = WordChunkingStrategy(chunk_size=10)

        chunks = strategy.chunk_document("alpha beta gamma delta epsilon zeta")

        assert [c.metadata.chunk_index for c in chunks] == list(range(1, len(chunks) + 1))
        assert chunks[0].metadata.source_file is None

    def test_empty_document_returns_empty_list(self):
        """Test that empty document returns empty list."""
        assert WordChunkingStrategy(chunk_size=100).chunk_document("") == []

    def test_invalid_chunk_size_rejected(self):
        """Test that the strategy refuses a non-positive chunk size."""
        with pytest.raises(ValueError):
            WordChunkingStrategy(chunk_size=0)
