"""
Memory Manager - Orchestrates the vector memory system.

This is the high-level interface the demo uses. It handles:
- Embedding text with the configured embedding service
- Saving information and reference records into collections
- Searching a collection by natural-language query
"""

import logging
from typing import Literal, Optional

from .base import MemoryRecord, SearchResult, VectorStore
from .embeddings import EmbeddingService, GloVeEmbeddingService, create_embedding_service
from .volatile_store import VolatileMemoryStore

logger = logging.getLogger("semantic_memory.memory.manager")


class MemoryManager:
    """
    Semantic text memory: an embedding service paired with a vector store.

    Text goes in, gets embedded, and is stored; queries are embedded the
    same way and matched by cosine similarity.
    """

    def __init__(
        self,
        vector_store: VectorStore,
        embedding_service: EmbeddingService,
    ):
        self.vector_store = vector_store
        self.embedding_service = embedding_service
        self._initialized = False
        logger.info("MemoryManager created")

    async def initialize(self) -> None:
        """Initialize the memory system."""
        await self.vector_store.initialize()
        self._initialized = True
        collections = await self.vector_store.get_collections()
        logger.info(f"MemoryManager initialized with {len(collections)} collections")

    def _ensure_initialized(self) -> None:
        """Ensure the system is initialized."""
        if not self._initialized:
            raise RuntimeError("MemoryManager not initialized. Call initialize() first.")

    async def _save(self, collection: str, record: MemoryRecord) -> str:
        self._ensure_initialized()

        record.embedding = await self.embedding_service.embed(record.to_embedding_text())

        await self.vector_store.create_collection(collection)
        record_id = await self.vector_store.upsert(collection, record)

        logger.info(f"Stored memory {record_id} with {len(record.embedding)}-dim embedding")
        return record_id

    async def save_information(
        self,
        collection: str,
        text: str,
        id: str,
        description: str = "",
        additional_metadata: str = "",
    ) -> str:
        """
        Save a piece of information into a collection.

        Args:
            collection: Collection to save into (created if missing)
            text: The information itself; this is what gets embedded
            id: Unique ID within the collection
            description: Optional description
            additional_metadata: Optional free-form metadata

        Returns:
            The ID of the stored memory
        """
        return await self._save(collection, MemoryRecord(
            id=id,
            text=text,
            description=description,
            additional_metadata=additional_metadata,
            is_reference=False,
        ))

    async def save_reference(
        self,
        collection: str,
        text: str,
        external_id: str,
        external_source_name: str,
        description: str = "",
        additional_metadata: str = "",
    ) -> str:
        """
        Save a reference to an external document (e.g. a URL).

        Args:
            collection: Collection to save into (created if missing)
            text: Text describing the external document; this is what gets embedded
            external_id: ID of the document in its source, used as the record ID
            external_source_name: Name of the source system (e.g. "GitHub")
            description: Optional description
            additional_metadata: Optional free-form metadata

        Returns:
            The ID of the stored memory
        """
        return await self._save(collection, MemoryRecord(
            id=external_id,
            text=text,
            description=description,
            external_source_name=external_source_name,
            additional_metadata=additional_metadata,
            is_reference=True,
        ))

    async def get(
        self,
        collection: str,
        id: str,
        with_embedding: bool = False,
    ) -> Optional[MemoryRecord]:
        """Fetch a memory by ID."""
        self._ensure_initialized()
        return await self.vector_store.get(collection, id, with_embedding=with_embedding)

    async def remove(self, collection: str, id: str) -> None:
        """Remove a memory by ID."""
        self._ensure_initialized()
        await self.vector_store.remove(collection, id)

    async def get_collections(self) -> list[str]:
        """List all collections."""
        self._ensure_initialized()
        return await self.vector_store.get_collections()

    async def search(
        self,
        collection: str,
        query: str,
        limit: int = 1,
        min_relevance: float = 0.7,
        with_embeddings: bool = False,
    ) -> list[SearchResult]:
        """
        Find the memories closest to a natural-language query.

        Args:
            collection: Collection to search
            query: The query text
            limit: Maximum results to return
            min_relevance: Minimum cosine similarity threshold

        Returns:
            List of search results, most relevant first
        """
        self._ensure_initialized()

        query_embedding = await self.embedding_service.embed(query)

        results = await self.vector_store.get_nearest_matches(
            collection,
            query_embedding,
            limit=limit,
            min_relevance=min_relevance,
            with_embeddings=with_embeddings,
        )

        logger.info(f"Found {len(results)} matches in {collection}")
        for r in results:
            logger.debug(f"  - {r.record.id}: relevance={r.relevance:.3f}")

        return results

    async def close(self) -> None:
        """Clean up resources."""
        await self.vector_store.close()
        logger.info("MemoryManager closed")


async def create_memory_manager(
    store_type: Literal["volatile", "chroma", "pgvector"] = "volatile",
    embedding_provider: Literal["glove", "local", "openai"] = "glove",
    glove_path: str = "",
    word_dimension: int = 50,
    embedding_model: str = "",
    embedding_dimensions: int | None = None,
    openai_api_key: str = "",
    postgres_url: str = "",
    chroma_path: str = "./memory_store",
) -> MemoryManager:
    """
    Factory function to create a configured MemoryManager.

    Args:
        store_type: "volatile" (in-memory), "chroma" (local) or "pgvector"
        embedding_provider: "glove", "local" or "openai"
        glove_path: GloVe vectors file for the glove provider
        word_dimension: GloVe word vector size
        embedding_model: Model name for local/openai providers
        embedding_dimensions: Output dimension override for openai
        openai_api_key: Required for OpenAI embeddings
        postgres_url: Required for pgvector store
        chroma_path: Path for ChromaDB storage

    Returns:
        Initialized MemoryManager
    """
    embedding_service = create_embedding_service(
        provider=embedding_provider,
        api_key=openai_api_key,
        model=embedding_model,
        dimensions=embedding_dimensions,
        glove_path=glove_path,
        word_dimension=word_dimension,
    )

    if store_type == "volatile":
        vector_store = VolatileMemoryStore()
    elif store_type == "chroma":
        from .chroma_store import ChromaVectorStore
        vector_store = ChromaVectorStore(persist_directory=chroma_path)
    elif store_type == "pgvector":
        if not postgres_url:
            raise ValueError("postgres_url required for pgvector store")
        from .pgvector_store import PgVectorStore
        # The vector column width is fixed at table creation
        if isinstance(embedding_service, GloVeEmbeddingService):
            embedding_service.load()
        vector_store = PgVectorStore(
            connection_string=postgres_url,
            embedding_dimension=embedding_service.dimension,
        )
    else:
        raise ValueError(f"Unknown store type: {store_type}")

    manager = MemoryManager(
        vector_store=vector_store,
        embedding_service=embedding_service,
    )

    await manager.initialize()
    return manager
