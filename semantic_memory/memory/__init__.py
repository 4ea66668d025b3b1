"""
Semantic Memory.

A custom text-embedding generator plugged into a vector store, so text can
be saved and later found by meaning rather than by keywords.
"""

from .base import MemoryRecord, VectorStore, SearchResult
from .embeddings import (
    EmbeddingService,
    GloVeEmbeddingService,
    LocalEmbeddingService,
    OpenAIEmbeddingService,
    create_embedding_service,
)
from .text_pipeline import TextEmbeddingPipeline, TextNormalizer, WordEmbeddingTable
from .similarity import cosine_similarity, euclidean_distance, rank_by_similarity
from .volatile_store import VolatileMemoryStore
from .chroma_store import ChromaVectorStore
from .memory_manager import MemoryManager, create_memory_manager

__all__ = [
    "MemoryRecord",
    "VectorStore",
    "SearchResult",
    "EmbeddingService",
    "GloVeEmbeddingService",
    "LocalEmbeddingService",
    "OpenAIEmbeddingService",
    "create_embedding_service",
    "TextEmbeddingPipeline",
    "TextNormalizer",
    "WordEmbeddingTable",
    "cosine_similarity",
    "euclidean_distance",
    "rank_by_similarity",
    "VolatileMemoryStore",
    "ChromaVectorStore",
    "MemoryManager",
    "create_memory_manager",
]
