# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-08
# Updated: 2026-02-14
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass, fields
from typing import List

from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    # Provider selection
    completion_provider: str
    embedding_provider: str
    vector_store: str

    # Groq (OpenAI-compatible, chat)
    groq_api_key: str
    groq_base_url: str

    # OpenAI direct
    openai_api_key: str
    openai_base_url: str

    # Azure OpenAI
    azure_openai_api_key: str
    azure_openai_endpoint: str
    azure_openai_api_version: str
    azure_openai_chat_deployment: str
    azure_openai_embed_deployment: str

    # Models
    chat_model: str
    embed_model: str

    # Ollama (OpenAI-compatible, embeddings)
    ollama_host: str

    # Chroma Vector Database
    chroma_path: str
    chroma_api_key: str
    chroma_tenant: str
    chroma_database: str

    # Record store
    records_path: str
    seed_path: str

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        "completion_provider": "REGISTRY_COMPLETION_PROVIDER",
        "embedding_provider": "REGISTRY_EMBEDDING_PROVIDER",
        "vector_store": "REGISTRY_VECTOR_STORE",

        # Groq
        "groq_api_key": "GROQ_API_KEY",
        "groq_base_url": "GROQ_BASE_URL",

        # OpenAI direct
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",      # e.g. https://api.openai.com/v1

        # Azure OpenAI
        "azure_openai_api_key": "AZURE_OPENAI_API_KEY",
        "azure_openai_endpoint": "AZURE_OPENAI_ENDPOINT",
        "azure_openai_api_version": "AZURE_OPENAI_API_VERSION",
        "azure_openai_chat_deployment": "AZURE_OPENAI_CHAT_DEPLOYMENT",
        "azure_openai_embed_deployment": "AZURE_OPENAI_EMBED_DEPLOYMENT",

        "chat_model": "REGISTRY_CHAT_MODEL",
        "embed_model": "REGISTRY_EMBED_MODEL",

        "ollama_host": "OLLAMA_HOST",

        # Chroma
        "chroma_path": "CHROMA_PATH",
        "chroma_api_key": "CHROMA_API_KEY",
        "chroma_tenant": "CHROMA_TENANT",
        "chroma_database": "CHROMA_DATABASE",

        # Records
        "records_path": "REGISTRY_RECORDS_PATH",
        "seed_path": "REGISTRY_SEED_PATH",
    }

    # Non-secret defaults; anything not listed here defaults to ""
    DEFAULTS = {
        "completion_provider": "groq",
        "embedding_provider": "ollama",
        "vector_store": "chroma",
        "groq_base_url": "https://api.groq.com/openai/v1",
        "azure_openai_api_version": "2024-10-21",
        "chat_model": "llama-3.1-8b-instant",
        "embed_model": "nomic-embed-text",
        "ollama_host": "http://host.docker.internal:11434",
        "chroma_path": "./data/chroma",
        "records_path": "./data/professionals.json",
        "seed_path": "./data/professionals.seed.json",
    }

    # Env vars each provider needs before it can be constructed
    COMPLETION_REQUIRED = {
        "groq": ("groq_api_key",),
        "openai": ("openai_api_key",),
        "azure": ("azure_openai_api_key", "azure_openai_endpoint", "azure_openai_chat_deployment"),
    }

    EMBEDDING_REQUIRED = {
        "ollama": ("ollama_host",),
        "openai": ("openai_api_key",),
        "azure": ("azure_openai_api_key", "azure_openai_endpoint", "azure_openai_embed_deployment"),
    }

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables."""
        kwargs = {
            field_name: (os.getenv(env_name) or Config.DEFAULTS.get(field_name, "")).strip()
            for field_name, env_name in Config.ENV_VARS.items()
        }
        return Config(**kwargs)

    def __post_init__(self):
        """
        Only the provider selectors are validated here. Missing credentials are
        reported per capability via missing_for_completion() / missing_for_embedding()
        so that an unconfigured chat provider degrades to an explanatory answer
        instead of failing app start-up.
        """
        if self.completion_provider not in self.COMPLETION_REQUIRED:
            raise ValueError(
                f"Unknown completion provider {self.completion_provider!r}; "
                f"expected one of {sorted(self.COMPLETION_REQUIRED)}"
            )
        if self.embedding_provider not in self.EMBEDDING_REQUIRED:
            raise ValueError(
                f"Unknown embedding provider {self.embedding_provider!r}; "
                f"expected one of {sorted(self.EMBEDDING_REQUIRED)}"
            )
        if self.vector_store not in ("chroma", "memory"):
            raise ValueError(f"Unknown vector store {self.vector_store!r}; expected 'chroma' or 'memory'")

    def _missing(self, required: tuple) -> List[str]:
        return [self.ENV_VARS[f] for f in required if not getattr(self, f)]

    def missing_for_completion(self) -> List[str]:
        """Env var names the selected completion provider needs but are unset."""
        return self._missing(self.COMPLETION_REQUIRED[self.completion_provider])

    def missing_for_embedding(self) -> List[str]:
        """Env var names the selected embedding provider needs but are unset."""
        return self._missing(self.EMBEDDING_REQUIRED[self.embedding_provider])

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        secret = {f.name for f in fields(self) if f.name.endswith("api_key")}
        out = {f.name: getattr(self, f.name) for f in fields(self) if f.name not in secret}
        out.update({name: bool(getattr(self, name)) for name in sorted(secret)})
        return out
