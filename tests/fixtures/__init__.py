"""
Test fixtures and sample data for semantic memory tests.
"""

from datetime import datetime

from semantic_memory.memory import MemoryRecord


# Tiny 4d word table. The demo words are chosen so that the sample
# queries rank the sample descriptions deterministically:
# "how do i get started?" -> getting-started notebook, then README
# "can i build a chat with sk?" -> ChatGPT plugin sample only
SAMPLE_WORD_VECTORS = {
    "how": [1.0, 0.0, 0.0, 0.0],
    "get": [0.0, 1.0, 0.0, 0.0],
    "started": [0.0, 0.0, 1.0, 0.0],
    "chat": [0.0, 0.0, 0.0, 1.0],
    "cat": [0.9, 0.1, 0.0, 0.0],
    "dog": [0.8, 0.2, 0.0, 0.0],
    "car": [0.0, 0.0, 0.9, 0.1],
    "truck": [0.0, 0.0, 0.8, 0.2],
    "cafe": [0.25, 0.25, 0.25, 0.25],
    "42": [0.5, -0.5, 0.5, -0.5],
}


def make_glove_text(vectors: dict[str, list[float]] = None) -> str:
    """Render word vectors in GloVe text format."""
    vectors = vectors or SAMPLE_WORD_VECTORS
    lines = [
        " ".join([word] + [repr(v) for v in values])
        for word, values in vectors.items()
    ]
    return "\n".join(lines) + "\n"


def make_memory_record(
    id: str = "doc-1",
    text: str = "the cat sat",
    description: str = "A cat",
    embedding: list[float] = None,
    is_reference: bool = False,
    external_source_name: str = "",
    created_at: datetime = None,
) -> MemoryRecord:
    """Create a sample MemoryRecord for testing."""
    return MemoryRecord(
        id=id,
        text=text,
        description=description,
        external_source_name=external_source_name,
        is_reference=is_reference,
        embedding=embedding,
        created_at=created_at or datetime(2024, 1, 1, 12, 0, 0),
    )
