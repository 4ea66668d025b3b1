"""
ChromaDB Vector Store Implementation.

ChromaDB is a good fit for local use when memories should outlive the process:
- No server required
- Stores everything in a local directory
- Built-in persistence

Each memory collection maps to one Chroma collection using cosine space.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .base import MemoryRecord, SearchResult, VectorStore

logger = logging.getLogger("semantic_memory.memory.chroma")


class ChromaVectorStore(VectorStore):
    """
    ChromaDB implementation of the vector store.

    Stores memories locally with full persistence.
    """

    def __init__(self, persist_directory: str = "./memory_store"):
        self.persist_directory = Path(persist_directory)
        self._client = None
        logger.info(f"ChromaVectorStore configured with directory: {persist_directory}")

    async def initialize(self) -> None:
        """Initialize the ChromaDB client."""
        try:
            import chromadb
            from chromadb.config import Settings
        except ImportError:
            raise RuntimeError(
                "chromadb not installed. Install with: pip install chromadb"
            )

        self.persist_directory.mkdir(parents=True, exist_ok=True)

        self._client = chromadb.PersistentClient(
            path=str(self.persist_directory),
            settings=Settings(
                anonymized_telemetry=False,
                allow_reset=True,
            ),
        )

        collections = await self.get_collections()
        logger.info(f"ChromaDB initialized with {len(collections)} existing collections")

    def _ensure_initialized(self) -> None:
        """Ensure the store is initialized."""
        if self._client is None:
            raise RuntimeError("ChromaVectorStore not initialized. Call initialize() first.")

    def _get_collection(self, collection: str):
        self._ensure_initialized()
        if collection not in self._collection_names():
            raise ValueError(f"Collection does not exist: {collection}")
        return self._client.get_collection(name=collection)

    def _collection_names(self) -> list[str]:
        # Older chromadb releases return Collection objects, newer ones names
        return [c if isinstance(c, str) else c.name for c in self._client.list_collections()]

    def _record_to_metadata(self, record: MemoryRecord) -> dict:
        """Convert a MemoryRecord to ChromaDB metadata."""
        return {
            "description": record.description,
            "external_source_name": record.external_source_name,
            "is_reference": record.is_reference,
            "additional_metadata": record.additional_metadata,
            "created_at": record.created_at.isoformat(),
        }

    def _metadata_to_record(
        self,
        id: str,
        metadata: dict,
        document: str,
        embedding=None,
    ) -> MemoryRecord:
        """Convert ChromaDB metadata back to a MemoryRecord."""
        return MemoryRecord(
            id=id,
            text=document,
            description=metadata["description"],
            external_source_name=metadata["external_source_name"],
            is_reference=metadata["is_reference"],
            additional_metadata=metadata["additional_metadata"],
            embedding=[float(v) for v in embedding] if embedding is not None else None,
            created_at=datetime.fromisoformat(metadata["created_at"]),
        )

    async def create_collection(self, collection: str) -> None:
        self._ensure_initialized()
        self._client.get_or_create_collection(
            name=collection,
            metadata={"hnsw:space": "cosine"},
        )

    async def does_collection_exist(self, collection: str) -> bool:
        self._ensure_initialized()
        return collection in self._collection_names()

    async def get_collections(self) -> list[str]:
        self._ensure_initialized()
        return self._collection_names()

    async def delete_collection(self, collection: str) -> None:
        self._get_collection(collection)
        self._client.delete_collection(name=collection)
        logger.info(f"Deleted collection: {collection}")

    async def upsert(self, collection: str, record: MemoryRecord) -> str:
        """Store a memory record with its embedding."""
        chroma_collection = self._get_collection(collection)
        chroma_collection.upsert(
            ids=[record.id],
            embeddings=[record.embedding],
            documents=[record.text],
            metadatas=[self._record_to_metadata(record)],
        )
        logger.debug(f"Upserted {record.id} into {collection}")
        return record.id

    async def get(
        self,
        collection: str,
        id: str,
        with_embedding: bool = False,
    ) -> Optional[MemoryRecord]:
        if not await self.does_collection_exist(collection):
            return None

        include = ["documents", "metadatas"]
        if with_embedding:
            include.append("embeddings")

        results = self._client.get_collection(name=collection).get(ids=[id], include=include)
        if not results["ids"]:
            return None

        return self._metadata_to_record(
            id=results["ids"][0],
            metadata=results["metadatas"][0],
            document=results["documents"][0],
            embedding=results["embeddings"][0] if with_embedding else None,
        )

    async def remove(self, collection: str, id: str) -> None:
        if await self.does_collection_exist(collection):
            self._client.get_collection(name=collection).delete(ids=[id])

    async def get_nearest_matches(
        self,
        collection: str,
        embedding: list[float],
        limit: int = 1,
        min_relevance: float = 0.0,
        with_embeddings: bool = False,
    ) -> list[SearchResult]:
        """Search for similar memories."""
        if limit <= 0 or not await self.does_collection_exist(collection):
            return []

        chroma_collection = self._client.get_collection(name=collection)
        total = chroma_collection.count()
        if total == 0:
            return []

        include = ["documents", "metadatas", "distances"]
        if with_embeddings:
            include.append("embeddings")

        # Cosine space: distance = 1 - similarity
        results = chroma_collection.query(
            query_embeddings=[embedding],
            n_results=min(limit, total),
            include=include,
        )

        search_results = []
        if results["ids"] and results["ids"][0]:
            for i, id in enumerate(results["ids"][0]):
                relevance = 1 - results["distances"][0][i]
                if relevance < min_relevance:
                    continue

                record = self._metadata_to_record(
                    id=id,
                    metadata=results["metadatas"][0][i],
                    document=results["documents"][0][i],
                    embedding=results["embeddings"][0][i] if with_embeddings else None,
                )
                search_results.append(SearchResult(record=record, relevance=relevance))

        search_results.sort(key=lambda x: x.relevance, reverse=True)
        return search_results[:limit]

    async def count(self, collection: str) -> int:
        if not await self.does_collection_exist(collection):
            return 0
        return self._client.get_collection(name=collection).count()

    async def close(self) -> None:
        """Clean up resources."""
        # PersistentClient flushes on its own
        self._client = None
        logger.info("ChromaDB connection closed")
