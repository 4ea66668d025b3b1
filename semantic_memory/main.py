"""
Semantic memory demo.

Builds your own semantic memory by combining a custom embedding generator
with a memory store that supports search by similarity:
1. Store: save a few GitHub file URLs and their descriptions
2. Search: ask two natural-language questions and print the closest files

The default store is volatile, a local in-process simulation of a vector
DB. Switch memory.store_type to "chroma" or "pgvector" in config.yaml to
keep memories between runs.

SETUP REQUIRED:
1. Download the GloVe vectors (glove.6B.zip) from
   https://nlp.stanford.edu/projects/glove/ and unpack glove.6B.50d.txt
2. Copy config.yaml.example to config.yaml and point
   embeddings.glove_path at the vectors file
3. Install dependencies:
   pip install -e .
"""

import asyncio
import logging
import sys

from .config import config
from .memory import MemoryManager, SearchResult, create_memory_manager

logger = logging.getLogger("semantic_memory.main")

GITHUB_SOURCE = "GitHub"

SAMPLE_QUERIES = [
    "How do I get started?",
    "Can I build a chat with SK?",
]


def sample_data() -> dict[str, str]:
    """GitHub file URLs mapped to their descriptions."""
    return {
        "https://github.com/microsoft/semantic-kernel/blob/main/README.md":
            "README: Installation, getting started, and how to contribute",
        "https://github.com/microsoft/semantic-kernel/blob/main/dotnet/notebooks/02-running-prompts-from-file.ipynb":
            "Jupyter notebook describing how to pass prompts from a file to a semantic plugin or function",
        "https://github.com/microsoft/semantic-kernel/blob/main/dotnet/notebooks//00-getting-started.ipynb":
            "Jupyter notebook describing how to get started with the Semantic Kernel",
        "https://github.com/microsoft/semantic-kernel/tree/main/samples/plugins/ChatPlugin/ChatGPT":
            "Sample demonstrating how to create a chat plugin interfacing with ChatGPT",
        "https://github.com/microsoft/semantic-kernel/blob/main/dotnet/src/SemanticKernel/Memory/VolatileMemoryStore.cs":
            "C# class that defines a volatile embedding store",
    }


async def store_memory(memory: MemoryManager, collection: str) -> int:
    """
    Store the sample data in semantic memory.

    The embedding generator runs on every save and the store indexes
    the resulting vectors.

    Returns:
        Number of records saved
    """
    print("\nAdding some GitHub file URLs and their descriptions to the semantic memory.")

    saved = 0
    for url, description in sample_data().items():
        await memory.save_reference(
            collection=collection,
            external_source_name=GITHUB_SOURCE,
            external_id=url,
            description=description,
            text=description,
        )
        saved += 1
        print(f" #{saved} saved.", end="")

    print("\n----------------------")
    return saved


def format_result(index: int, result: SearchResult) -> str:
    """Format one search hit for the console."""
    return "\n".join([
        f"Result {index}:",
        f"  URL:     : {result.record.id}",
        f"  Title    : {result.record.description}",
        f"  Relevance: {result.relevance}",
        "",
    ])


async def search_memory(
    memory: MemoryManager,
    collection: str,
    query: str,
    limit: int = 2,
    min_relevance: float = 0.5,
) -> list[SearchResult]:
    """Run one query against the collection and print the matches."""
    print(f"\nQuery: {query}\n")

    results = await memory.search(
        collection,
        query,
        limit=limit,
        min_relevance=min_relevance,
    )

    for i, result in enumerate(results, start=1):
        print(format_result(i, result))

    print("----------------------")
    return results


async def run_example(
    memory: MemoryManager,
    collection: str,
    limit: int = 2,
    min_relevance: float = 0.5,
) -> dict[str, list[SearchResult]]:
    """Store the sample data, then run each sample query."""
    await store_memory(memory, collection)

    results = {}
    for query in SAMPLE_QUERIES:
        results[query] = await search_memory(
            memory,
            collection,
            query,
            limit=limit,
            min_relevance=min_relevance,
        )
    return results


async def run_demo() -> bool:
    """Build the memory from config and run the example end to end."""
    config.setup_logging()

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(f"Config error: {error}")
        return False

    memory = None
    try:
        memory = await create_memory_manager(
            store_type=config.memory.store_type,
            embedding_provider=config.embeddings.provider,
            glove_path=config.embeddings.glove_path,
            word_dimension=config.embeddings.word_dimension,
            embedding_model=config.embeddings.model,
            embedding_dimensions=config.embeddings.dimensions,
            openai_api_key=config.embeddings.openai_api_key,
            postgres_url=config.memory.postgres_url,
            chroma_path=config.memory.chroma_path,
        )

        await run_example(
            memory,
            config.memory.collection,
            limit=config.memory.search_limit,
            min_relevance=config.memory.min_relevance,
        )
        return True

    except Exception as e:
        logger.exception(f"Demo failed: {e}")
        return False

    finally:
        if memory:
            await memory.close()


def main():
    """Entry point for the application."""
    try:
        success = asyncio.run(run_demo())
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
