"""
Embedding Service for generating vector representations.

The default provider runs a local GloVe word-embedding pipeline, so the
demo needs nothing but a vectors file. Sentence-transformers models and
OpenAI's embedding API are available as drop-in alternatives.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Literal, Optional

from .text_pipeline import TextEmbeddingPipeline, TextNormalizer, WordEmbeddingTable

logger = logging.getLogger("semantic_memory.memory.embeddings")


class EmbeddingService(ABC):
    """Abstract interface for embedding generation."""

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the dimension of embeddings produced."""
        pass

    async def embed(self, text: str) -> list[float]:
        """Generate embedding for a single text."""
        embeddings = await self.embed_batch([text])
        return embeddings[0]

    @abstractmethod
    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for multiple texts.

        Returns one vector per input, in input order.
        """
        pass


class GloVeEmbeddingService(EmbeddingService):
    """
    Custom embedding generator built on pretrained GloVe word vectors.

    Every call builds a fresh normalize/tokenize/embed pipeline over the
    word table and embeds the inputs from scratch; nothing is cached
    between calls except the parsed table itself.

    With the 50d GloVe vectors the output has 150 dimensions
    (min, average and max of the word vectors).
    """

    def __init__(
        self,
        glove_path: str,
        word_dimension: int = 50,
        normalizer: Optional[TextNormalizer] = None,
    ):
        self.glove_path = Path(glove_path)
        self.word_dimension = word_dimension
        self.normalizer = normalizer or TextNormalizer()
        self._table: Optional[WordEmbeddingTable] = None
        logger.info(f"GloVeEmbeddingService initialized with vectors: {glove_path}")

    @property
    def dimension(self) -> int:
        if self._table is not None:
            return 3 * self._table.dimension
        return 3 * self.word_dimension

    def _get_table(self) -> WordEmbeddingTable:
        if self._table is None:
            if not self.glove_path.exists():
                raise RuntimeError(
                    f"GloVe vectors not found at {self.glove_path}. "
                    "Download glove.6B.zip from https://nlp.stanford.edu/projects/glove/ "
                    "and point embeddings.glove_path at glove.6B.50d.txt"
                )
            self._table = WordEmbeddingTable.from_file(self.glove_path)
            if self._table.dimension != self.word_dimension:
                logger.warning(
                    f"Configured word dimension ({self.word_dimension}) does not match "
                    f"vectors file ({self._table.dimension}). Using {self._table.dimension}."
                )
                self.word_dimension = self._table.dimension
        return self._table

    def load(self) -> None:
        """Parse the vectors file now so `dimension` reflects the file."""
        self._get_table()

    def build_pipeline(self) -> TextEmbeddingPipeline:
        """Create the text-to-vector pipeline over the loaded word table."""
        return TextEmbeddingPipeline(self._get_table(), normalizer=self.normalizer)

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for multiple texts."""
        pipeline = self.build_pipeline()
        features = pipeline.transform(texts)
        logger.debug(f"Embedded {len(texts)} texts into {pipeline.output_dimension}-dim vectors")
        return features.tolist()


class OpenAIEmbeddingService(EmbeddingService):
    """
    OpenAI embedding service using text-embedding-3 models.

    Supports native dimension reduction via the dimensions parameter.

    Models:
    - text-embedding-3-small: default 1536 dimensions
    - text-embedding-3-large: default 3072 dimensions (can be reduced)
    """

    MODEL_DEFAULT_DIMENSIONS = {
        "text-embedding-3-small": 1536,
        "text-embedding-3-large": 3072,
    }

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        dimensions: int | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self._client = None

        default_dim = self.MODEL_DEFAULT_DIMENSIONS.get(model, 1536)
        if dimensions is not None and dimensions > default_dim:
            logger.warning(
                f"Requested dimensions ({dimensions}) exceeds model default ({default_dim}). "
                f"Using {default_dim}."
            )
            dimensions = None
        self._requested_dimensions = dimensions
        self._dimension = dimensions or default_dim

        logger.info(
            f"OpenAIEmbeddingService initialized: model={model}, dimensions={self._dimension}"
        )

    @property
    def dimension(self) -> int:
        return self._dimension

    def _get_client(self):
        if self._client is None:
            from openai import AsyncOpenAI
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for multiple texts in one request."""
        if not texts:
            return []

        kwargs = {
            "model": self.model,
            "input": texts,
        }
        if self._requested_dimensions is not None:
            kwargs["dimensions"] = self._requested_dimensions

        response = await self._get_client().embeddings.create(**kwargs)

        # Sort by index to maintain order
        sorted_data = sorted(response.data, key=lambda x: x.index)
        return [item.embedding for item in sorted_data]


class LocalEmbeddingService(EmbeddingService):
    """
    Local embedding service using sentence-transformers.

    The default model averages GloVe 300d word vectors, the closest
    packaged equivalent of the custom pipeline.
    """

    def __init__(self, model_name: str = "average_word_embeddings_glove.6B.300d"):
        self.model_name = model_name
        self._model = None
        self._dimension = 300
        logger.info(f"LocalEmbeddingService initialized with model: {model_name}")

    @property
    def dimension(self) -> int:
        return self._dimension

    def _get_model(self):
        if self._model is None:
            try:
                from sentence_transformers import SentenceTransformer
            except ImportError:
                raise RuntimeError(
                    "sentence-transformers not installed. "
                    "Install with: pip install sentence-transformers"
                )
            self._model = SentenceTransformer(self.model_name)
            self._dimension = self._model.get_sentence_embedding_dimension()
            logger.info(f"Loaded local embedding model: {self.model_name}")
        return self._model

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for multiple texts."""
        if not texts:
            return []

        model = self._get_model()
        embeddings = model.encode(texts, convert_to_numpy=True)
        return embeddings.tolist()


def create_embedding_service(
    provider: Literal["glove", "local", "openai"] = "glove",
    api_key: str = "",
    model: str = "",
    dimensions: int | None = None,
    glove_path: str = "",
    word_dimension: int = 50,
) -> EmbeddingService:
    """
    Factory function to create the appropriate embedding service.

    Args:
        provider: "glove", "local" or "openai"
        api_key: OpenAI API key (required for openai provider)
        model: Model name for local/openai (optional, uses defaults)
        dimensions: Override output dimensions for OpenAI embeddings
        glove_path: Path to the GloVe vectors file (glove provider)
        word_dimension: Expected GloVe word vector size

    Returns:
        Configured EmbeddingService instance
    """
    if provider == "glove":
        if not glove_path:
            raise ValueError("glove_path required for glove embedding provider")
        return GloVeEmbeddingService(glove_path=glove_path, word_dimension=word_dimension)
    elif provider == "openai":
        if not api_key:
            raise ValueError("OpenAI API key required for openai embedding provider")
        return OpenAIEmbeddingService(
            api_key=api_key,
            model=model or "text-embedding-3-small",
            dimensions=dimensions,
        )
    elif provider == "local":
        return LocalEmbeddingService(
            model_name=model or "average_word_embeddings_glove.6B.300d",
        )
    else:
        raise ValueError(f"Unknown embedding provider: {provider}")
