"""
Unit tests for semantic_memory/memory/text_pipeline.py

Tests text normalization, tokenization, GloVe table loading and
word-vector pooling.
"""

import gzip

import numpy as np
import pytest

from semantic_memory.memory.text_pipeline import (
    TextEmbeddingPipeline,
    TextNormalizer,
    WordEmbeddingTable,
    tokenize_into_words,
)
from tests.fixtures import SAMPLE_WORD_VECTORS, make_glove_text


class TestTextNormalizer:
    """Tests for TextNormalizer."""

    def test_defaults_lowercase_and_strip_diacritics(self):
        """Test default normalization lowercases and removes accents."""
        normalize = TextNormalizer()
        assert normalize("Café CAT!") == "cafe cat!"

    def test_keeps_punctuation_and_numbers_by_default(self):
        """Test punctuation and digits survive default normalization."""
        normalize = TextNormalizer()
        assert normalize("Route 66, please.") == "route 66, please."

    def test_remove_punctuation(self):
        """Test punctuation removal when disabled."""
        normalize = TextNormalizer(keep_punctuations=False)
        assert normalize("Hello, world!") == "hello world"

    def test_remove_numbers(self):
        """Test digit removal when disabled."""
        normalize = TextNormalizer(keep_numbers=False)
        assert normalize("Route 66") == "route "

    def test_keep_diacritics(self):
        """Test accents survive when keep_diacritics is set."""
        normalize = TextNormalizer(keep_diacritics=True)
        assert normalize("CAFÉ") == "café"

    def test_upper_and_none_case_modes(self):
        """Test the other case modes."""
        assert TextNormalizer(case_mode="upper")("Cat") == "CAT"
        assert TextNormalizer(case_mode="none")("Cat") == "Cat"

    def test_invalid_case_mode(self):
        """Test unknown case mode is rejected."""
        with pytest.raises(ValueError, match="Unknown case mode"):
            TextNormalizer(case_mode="title")


class TestTokenizeIntoWords:
    """Tests for tokenize_into_words."""

    def test_splits_on_spaces(self):
        """Test plain whitespace tokenization."""
        assert tokenize_into_words("the cat sat") == ["the", "cat", "sat"]

    def test_drops_empty_tokens(self):
        """Test repeated separators do not produce empty tokens."""
        assert tokenize_into_words("  the   cat ") == ["the", "cat"]

    def test_custom_separators(self):
        """Test multiple separator characters."""
        assert tokenize_into_words("well-known cat", separators=(" ", "-")) == ["well", "known", "cat"]

    def test_regex_metacharacter_separators(self):
        """Test separators that are special inside a character class."""
        text = "a.b^c]d\\e f"
        assert tokenize_into_words(text, separators=(".", "^", "]", "\\", " ")) == ["a", "b", "c", "d", "e", "f"]

    def test_no_separators(self):
        """Test the whole text is one token when nothing separates it."""
        assert tokenize_into_words("the cat", separators=()) == ["the cat"]

    def test_empty_string(self):
        """Test empty input yields no tokens."""
        assert tokenize_into_words("") == []


class TestWordEmbeddingTable:
    """Tests for WordEmbeddingTable loading and lookup."""

    def test_from_file(self, glove_table):
        """Test loading the sample GloVe file."""
        assert len(glove_table) == len(SAMPLE_WORD_VECTORS)
        assert glove_table.dimension == 4
        assert "cat" in glove_table
        np.testing.assert_allclose(glove_table.lookup("cat"), [0.9, 0.1, 0.0, 0.0], rtol=1e-6)

    def test_lookup_unknown_word(self, glove_table):
        """Test unknown words return None."""
        assert glove_table.lookup("zebra") is None
        assert "zebra" not in glove_table

    def test_skips_fasttext_header(self, tmp_path):
        """Test a '<count> <dim>' header line is ignored."""
        path = tmp_path / "vectors.txt"
        path.write_text("2 3\ncat 1 0 0\ndog 0 1 0\n")

        table = WordEmbeddingTable.from_file(path)
        assert len(table) == 2
        assert table.dimension == 3

    def test_gzip_file(self, tmp_path):
        """Test loading a gzip-compressed file."""
        path = tmp_path / "vectors.txt.gz"
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write(make_glove_text())

        table = WordEmbeddingTable.from_file(path)
        assert len(table) == len(SAMPLE_WORD_VECTORS)

    def test_inconsistent_width(self, tmp_path):
        """Test rows with a different width are rejected."""
        path = tmp_path / "bad.txt"
        path.write_text("cat 1 0 0\ndog 0 1\n")

        with pytest.raises(ValueError, match="bad.txt:2"):
            WordEmbeddingTable.from_file(path)

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            WordEmbeddingTable.from_file(tmp_path / "nope.txt")

    def test_empty_file(self, tmp_path):
        """Test an empty file is rejected."""
        path = tmp_path / "empty.txt"
        path.write_text("")

        with pytest.raises(ValueError, match="empty"):
            WordEmbeddingTable.from_file(path)


class TestTextEmbeddingPipeline:
    """Tests for TextEmbeddingPipeline pooling."""

    @pytest.fixture
    def pipeline(self, glove_table):
        return TextEmbeddingPipeline(glove_table)

    def test_output_dimension(self, pipeline):
        """Test output is min/avg/max of the word dimension."""
        assert pipeline.output_dimension == 12

    def test_single_word(self, pipeline):
        """Test a single known word repeats its vector three times."""
        vector = pipeline.transform_one("cat")
        np.testing.assert_allclose(vector, [0.9, 0.1, 0, 0] * 3, rtol=1e-6)

    def test_min_avg_max_pooling(self, pipeline):
        """Test pooling over two known words."""
        vector = pipeline.transform_one("cat dog")
        expected = [0.8, 0.1, 0, 0] + [0.85, 0.15, 0, 0] + [0.9, 0.2, 0, 0]
        np.testing.assert_allclose(vector, expected, rtol=1e-6, atol=1e-7)

    def test_unknown_words_ignored(self, pipeline):
        """Test unknown tokens do not affect the result."""
        np.testing.assert_allclose(
            pipeline.transform_one("the cat sat"),
            pipeline.transform_one("cat"),
        )

    def test_no_known_words_gives_zeros(self, pipeline):
        """Test text without known words embeds to zeros."""
        assert not pipeline.transform_one("zebra giraffe").any()
        assert not pipeline.transform_one("").any()

    def test_normalization_applies(self, pipeline):
        """Test upper case and accents are normalized before lookup."""
        np.testing.assert_allclose(pipeline.transform_one("CAT"), pipeline.transform_one("cat"))
        assert pipeline.transform_one("Café").any()

    def test_punctuation_attached_to_word(self, glove_table):
        """Test punctuation blocks lookup unless the normalizer strips it."""
        default = TextEmbeddingPipeline(glove_table)
        stripping = TextEmbeddingPipeline(glove_table, normalizer=TextNormalizer(keep_punctuations=False))

        assert not default.transform_one("cat!").any()
        assert stripping.transform_one("cat!").any()

    def test_transform_preserves_order(self, pipeline):
        """Test batch rows match per-text results in order."""
        texts = ["car", "cat", "", "car"]
        features = pipeline.transform(texts)

        assert features.shape == (4, 12)
        for row, text in zip(features, texts):
            np.testing.assert_allclose(row, pipeline.transform_one(text))

    def test_transform_empty(self, pipeline):
        """Test empty input gives an empty array with the right width."""
        assert pipeline.transform([]).shape == (0, 12)
