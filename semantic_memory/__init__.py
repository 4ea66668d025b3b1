"""
Semantic Memory Demo - Custom Embeddings over a Vector Store

This package shows how to plug a custom text-embedding generator into a
semantic memory, store a few labeled records, and retrieve the closest
matches to a natural-language query.
"""

__version__ = "1.0.0"
