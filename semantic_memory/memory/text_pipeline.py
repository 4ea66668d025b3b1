"""
Text-to-vector pipeline built on pretrained word embeddings.

Three stages, applied to every input string:
1. Normalize: case folding, diacritic stripping, optional removal of
   punctuation and digits
2. Tokenize: split into words on separator characters
3. Embed: look each word up in a pretrained table (GloVe) and pool the
   word vectors into one fixed-length feature vector

The pooled vector is the concatenation of the element-wise minimum,
average and maximum of the known word vectors, so its length is three
times the table's word dimension.
"""

import gzip
import logging
import re
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Sequence

import numpy as np

logger = logging.getLogger("semantic_memory.memory.text_pipeline")


@dataclass
class TextNormalizer:
    """Normalizes raw text before tokenization."""
    case_mode: Literal["lower", "upper", "none"] = "lower"
    keep_diacritics: bool = False
    keep_punctuations: bool = True
    keep_numbers: bool = True

    def __post_init__(self):
        if self.case_mode not in ("lower", "upper", "none"):
            raise ValueError(f"Unknown case mode: {self.case_mode}")

    def __call__(self, text: str) -> str:
        if self.case_mode == "lower":
            text = text.lower()
        elif self.case_mode == "upper":
            text = text.upper()

        if not self.keep_diacritics:
            decomposed = unicodedata.normalize("NFD", text)
            text = "".join(c for c in decomposed if not unicodedata.combining(c))
            text = unicodedata.normalize("NFC", text)

        if not self.keep_punctuations:
            text = "".join(c for c in text if not unicodedata.category(c).startswith("P"))

        if not self.keep_numbers:
            text = "".join(c for c in text if not c.isdecimal())

        return text


def tokenize_into_words(text: str, separators: Sequence[str] = (" ",)) -> list[str]:
    """Split text on any of the separator characters, dropping empty tokens."""
    if not separators:
        return [text] if text else []
    pattern = f"[{re.escape(''.join(separators))}]"
    return [token for token in re.split(pattern, text) if token]


class WordEmbeddingTable:
    """
    Pretrained word vectors keyed by word.

    Loaded from the GloVe text format: one word per line followed by its
    vector components, separated by spaces.
    """

    def __init__(self, vectors: dict[str, np.ndarray], dimension: int):
        if not vectors:
            raise ValueError("Word embedding table is empty")
        self._vectors = vectors
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    def __len__(self) -> int:
        return len(self._vectors)

    def __contains__(self, word: str) -> bool:
        return word in self._vectors

    def lookup(self, word: str) -> Optional[np.ndarray]:
        """Get the vector for a word, or None if the word is unknown."""
        return self._vectors.get(word)

    @classmethod
    def from_file(cls, path: str | Path) -> "WordEmbeddingTable":
        """
        Load a table from a GloVe-format text file (optionally .gz).

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If rows have inconsistent widths or the file is empty
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Word embedding file not found: {path}")

        opener = gzip.open if path.suffix == ".gz" else open
        vectors: dict[str, np.ndarray] = {}
        dimension = None

        with opener(path, "rt", encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                parts = line.rstrip().split(" ")
                if len(parts) < 2:
                    continue

                # fastText-style header: "<vocab size> <dimension>"
                if line_number == 1 and len(parts) == 2 and parts[0].isdigit() and parts[1].isdigit():
                    continue

                word, values = parts[0], parts[1:]
                if dimension is None:
                    dimension = len(values)
                elif len(values) != dimension:
                    raise ValueError(
                        f"{path}:{line_number}: expected {dimension} values, got {len(values)}"
                    )
                vectors[word] = np.asarray(values, dtype=np.float32)

        if dimension is None:
            raise ValueError(f"Word embedding file is empty: {path}")

        logger.info(f"Loaded {len(vectors)} word vectors ({dimension}d) from {path}")
        return cls(vectors, dimension)


class TextEmbeddingPipeline:
    """Normalize -> tokenize -> word embedding pooling."""

    def __init__(
        self,
        table: WordEmbeddingTable,
        normalizer: Optional[TextNormalizer] = None,
        separators: Sequence[str] = (" ",),
    ):
        self.table = table
        self.normalizer = normalizer or TextNormalizer()
        self.separators = tuple(separators)

    @property
    def output_dimension(self) -> int:
        return 3 * self.table.dimension

    def tokens(self, text: str) -> list[str]:
        """Run the normalization and tokenization stages."""
        return tokenize_into_words(self.normalizer(text), self.separators)

    def transform_one(self, text: str) -> np.ndarray:
        """Embed a single text into a feature vector."""
        found = [v for v in (self.table.lookup(t) for t in self.tokens(text)) if v is not None]
        if not found:
            return np.zeros(self.output_dimension, dtype=np.float32)

        stacked = np.vstack(found)
        return np.concatenate([
            stacked.min(axis=0),
            stacked.mean(axis=0),
            stacked.max(axis=0),
        ]).astype(np.float32)

    def transform(self, texts: Sequence[str]) -> np.ndarray:
        """Embed texts into a (len(texts), output_dimension) array, in order."""
        if not texts:
            return np.empty((0, self.output_dimension), dtype=np.float32)
        return np.vstack([self.transform_one(text) for text in texts])
