"""
Configuration module for the semantic memory demo.

Loads application settings from config.yaml and secrets from environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# Default config file path
CONFIG_FILE = Path(__file__).parent.parent / "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from YAML file."""
    if CONFIG_FILE.exists():
        with open(CONFIG_FILE) as f:
            return yaml.safe_load(f) or {}
    return {}


# Load YAML config once at module import
_yaml_config = _load_yaml_config()


def _get_yaml(section: str, key: str, default=None):
    """Get a value from the YAML config."""
    return _yaml_config.get(section, {}).get(key, default)


@dataclass
class EmbeddingConfig:
    """Embedding generation settings."""
    provider: Literal["glove", "local", "openai"] = field(
        default_factory=lambda: _get_yaml("embeddings", "provider", "glove")
    )
    # GloVe text file, e.g. glove.6B.50d.txt from https://nlp.stanford.edu/projects/glove/
    glove_path: str = field(
        default_factory=lambda: os.getenv("GLOVE_PATH", "")
        or _get_yaml("embeddings", "glove_path", "./models/glove.6B.50d.txt")
    )
    word_dimension: int = field(
        default_factory=lambda: _get_yaml("embeddings", "word_dimension", 50)
    )
    local_model: str = field(
        default_factory=lambda: _get_yaml(
            "embeddings", "local_model", "average_word_embeddings_glove.6B.300d"
        )
    )
    openai_model: str = field(
        default_factory=lambda: _get_yaml("embeddings", "openai_model", "text-embedding-3-small")
    )
    # None = use model's default dimensions
    dimensions: int | None = field(
        default_factory=lambda: _get_yaml("embeddings", "dimensions", None)
    )
    # Secret from .env
    openai_api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))

    @property
    def model(self) -> str:
        """Model name for the active provider (empty for glove)."""
        if self.provider == "local":
            return self.local_model
        if self.provider == "openai":
            return self.openai_model
        return ""


@dataclass
class MemoryConfig:
    """Vector memory configuration."""
    store_type: Literal["volatile", "chroma", "pgvector"] = field(
        default_factory=lambda: _get_yaml("memory", "store_type", "volatile")
    )
    collection: str = field(
        default_factory=lambda: _get_yaml("memory", "collection", "SKGitHub")
    )
    chroma_path: str = field(
        default_factory=lambda: _get_yaml("memory", "chroma_path", "./memory_store")
    )
    # Secret from .env (contains credentials)
    postgres_url: str = field(default_factory=lambda: os.getenv("POSTGRES_URL", ""))
    search_limit: int = field(
        default_factory=lambda: _get_yaml("memory", "search_limit", 2)
    )
    min_relevance: float = field(
        default_factory=lambda: _get_yaml("memory", "min_relevance", 0.5)
    )


@dataclass
class AppConfig:
    """Application settings from YAML."""
    log_level: str = field(
        default_factory=lambda: _get_yaml("logging", "level", "INFO")
    )


@dataclass
class Config:
    """Main configuration container."""
    embeddings: EmbeddingConfig = field(default_factory=EmbeddingConfig)
    memory: MemoryConfig = field(default_factory=MemoryConfig)
    app: AppConfig = field(default_factory=AppConfig)

    def setup_logging(self) -> logging.Logger:
        """Configure and return the application logger."""
        # Reset existing handlers to ensure clean configuration
        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)

        logging.basicConfig(
            level=getattr(logging, self.app.log_level.upper()),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        return logging.getLogger("semantic_memory")

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of missing/invalid settings.

        Returns:
            List of validation error messages, empty if all valid.
        """
        errors = []

        if self.embeddings.provider not in ("glove", "local", "openai"):
            errors.append(f"Unknown embeddings.provider: {self.embeddings.provider}")
        elif self.embeddings.provider == "glove" and not Path(self.embeddings.glove_path).exists():
            errors.append(
                f"GloVe vectors not found: {self.embeddings.glove_path} "
                "(set embeddings.glove_path in config.yaml or GLOVE_PATH)"
            )
        elif self.embeddings.provider == "openai" and not self.embeddings.openai_api_key:
            errors.append("OPENAI_API_KEY is required when using the openai embedding provider")

        if self.memory.store_type not in ("volatile", "chroma", "pgvector"):
            errors.append(f"Unknown memory.store_type: {self.memory.store_type}")
        elif self.memory.store_type == "pgvector" and not self.memory.postgres_url:
            errors.append("POSTGRES_URL is required when using the pgvector store")

        if not -1.0 <= self.memory.min_relevance <= 1.0:
            errors.append(f"memory.min_relevance must be between -1 and 1, got {self.memory.min_relevance}")
        if self.memory.search_limit < 1:
            errors.append(f"memory.search_limit must be at least 1, got {self.memory.search_limit}")

        return errors


# Global configuration instance
config = Config()
