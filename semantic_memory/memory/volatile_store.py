"""
In-memory Vector Store Implementation.

A local stand-in for a vector database: collections live in plain
dictionaries for the lifetime of the process and search is a linear
cosine-similarity scan. Good for demos and tests, nothing more.
"""

import logging
from typing import Optional

from .base import MemoryRecord, SearchResult, VectorStore
from .similarity import rank_by_similarity

logger = logging.getLogger("semantic_memory.memory.volatile")


class VolatileMemoryStore(VectorStore):
    """Volatile (non-persistent) implementation of the vector store."""

    def __init__(self):
        self._collections: dict[str, dict[str, MemoryRecord]] = {}

    async def initialize(self) -> None:
        logger.info("VolatileMemoryStore ready")

    def _get_collection(self, collection: str) -> dict[str, MemoryRecord]:
        if collection not in self._collections:
            raise ValueError(f"Collection does not exist: {collection}")
        return self._collections[collection]

    async def create_collection(self, collection: str) -> None:
        if collection not in self._collections:
            self._collections[collection] = {}
            logger.info(f"Created collection: {collection}")

    async def does_collection_exist(self, collection: str) -> bool:
        return collection in self._collections

    async def get_collections(self) -> list[str]:
        return list(self._collections)

    async def delete_collection(self, collection: str) -> None:
        self._get_collection(collection)
        del self._collections[collection]
        logger.info(f"Deleted collection: {collection}")

    async def upsert(self, collection: str, record: MemoryRecord) -> str:
        records = self._get_collection(collection)
        records[record.id] = record
        logger.debug(f"Upserted {record.id} into {collection}")
        return record.id

    async def get(
        self,
        collection: str,
        id: str,
        with_embedding: bool = False,
    ) -> Optional[MemoryRecord]:
        record = self._collections.get(collection, {}).get(id)
        if record is None or with_embedding:
            return record
        return record.without_embedding()

    async def remove(self, collection: str, id: str) -> None:
        self._collections.get(collection, {}).pop(id, None)

    async def get_nearest_matches(
        self,
        collection: str,
        embedding: list[float],
        limit: int = 1,
        min_relevance: float = 0.0,
        with_embeddings: bool = False,
    ) -> list[SearchResult]:
        if limit <= 0:
            return []

        records = [r for r in self._collections.get(collection, {}).values() if r.embedding is not None]
        if not records:
            return []

        ranked = rank_by_similarity(
            embedding,
            [r.embedding for r in records],
            limit=limit,
            min_score=min_relevance,
        )

        results = []
        for index, score in ranked:
            record = records[index] if with_embeddings else records[index].without_embedding()
            results.append(SearchResult(record=record, relevance=score))

        logger.debug(f"Search in {collection}: {len(results)} of {len(records)} records matched")
        return results

    async def count(self, collection: str) -> int:
        return len(self._collections.get(collection, {}))

    async def close(self) -> None:
        self._collections.clear()
        logger.info("VolatileMemoryStore cleared")
