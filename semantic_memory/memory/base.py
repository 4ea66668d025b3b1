"""
Base interfaces and data structures for vector memory.

Defines the records that get embedded and stored, and the abstract
contract that the different vector store backends implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional


@dataclass
class MemoryRecord:
    """
    A single piece of text held in semantic memory.

    Reference records point at an external source (e.g. a URL) and keep
    only a description of it; information records hold the text itself.
    """
    # Identity
    id: str  # Unique within a collection (URL for references)
    text: str  # What gets embedded

    description: str = ""
    external_source_name: str = ""
    is_reference: bool = False
    additional_metadata: str = ""

    embedding: Optional[list[float]] = None
    created_at: datetime = field(default_factory=datetime.now)

    def to_embedding_text(self) -> str:
        """Text used to compute this record's embedding."""
        return self.text

    def without_embedding(self) -> "MemoryRecord":
        """Return a copy of this record with the embedding dropped."""
        return replace(self, embedding=None)


@dataclass
class SearchResult:
    """A search result from the vector store."""
    record: MemoryRecord
    relevance: float  # Cosine similarity, higher is more similar

    @property
    def distance(self) -> float:
        """Cosine distance (1 - relevance)."""
        return 1.0 - self.relevance


class VectorStore(ABC):
    """
    Abstract interface for vector storage backends.

    Implementations: in-memory (volatile), ChromaDB (local), pgvector (production)
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the vector store (open clients, create tables, etc.)."""
        pass

    @abstractmethod
    async def create_collection(self, collection: str) -> None:
        """Create a collection if it does not exist yet."""
        pass

    @abstractmethod
    async def does_collection_exist(self, collection: str) -> bool:
        """Check whether a collection exists."""
        pass

    @abstractmethod
    async def get_collections(self) -> list[str]:
        """List the names of all collections."""
        pass

    @abstractmethod
    async def delete_collection(self, collection: str) -> None:
        """Delete a collection and every record in it."""
        pass

    @abstractmethod
    async def upsert(self, collection: str, record: MemoryRecord) -> str:
        """
        Insert or replace a record in a collection.

        Args:
            collection: Name of an existing collection
            record: The record, with its embedding set

        Returns:
            The ID of the stored record
        """
        pass

    async def upsert_batch(self, collection: str, records: list[MemoryRecord]) -> list[str]:
        """Insert or replace several records, returning their IDs in order."""
        return [await self.upsert(collection, record) for record in records]

    @abstractmethod
    async def get(
        self,
        collection: str,
        id: str,
        with_embedding: bool = False,
    ) -> Optional[MemoryRecord]:
        """Get a record by ID, or None if it is not stored."""
        pass

    @abstractmethod
    async def remove(self, collection: str, id: str) -> None:
        """Remove a record. Unknown IDs are ignored."""
        pass

    @abstractmethod
    async def get_nearest_matches(
        self,
        collection: str,
        embedding: list[float],
        limit: int = 1,
        min_relevance: float = 0.0,
        with_embeddings: bool = False,
    ) -> list[SearchResult]:
        """
        Search a collection for the records closest to an embedding.

        Args:
            collection: Collection to search
            embedding: The query embedding
            limit: Maximum number of results
            min_relevance: Minimum cosine similarity to include
            with_embeddings: Keep embeddings on the returned records

        Returns:
            List of search results, ordered by relevance (highest first)
        """
        pass

    @abstractmethod
    async def count(self, collection: str) -> int:
        """Get the number of records in a collection."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources."""
        pass
