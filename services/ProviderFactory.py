# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-30
# Description: ProviderFactory.py
# -----------------------------------------------------------------------------
import chromadb
from openai import AsyncAzureOpenAI, AsyncOpenAI

from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from embedding.OpenAIEmbedder import OpenAIEmbedder
from utility.errors import ConfigurationMissing
from utility.logging_utils import get_logger
from vectorstore.ChromaRegistryVectorStore import ChromaRegistryVectorStore
from vectorstore.InMemoryRegistryVectorStore import InMemoryRegistryVectorStore

logger = get_logger(__name__)


def build_embedder(cfg: Config) -> OpenAIEmbedder:
    """Embedding provider for cfg.embedding_provider (ollama | openai | azure)."""
    missing = cfg.missing_for_embedding()
    if missing:
        raise ConfigurationMissing(missing, capability="embedding")

    if cfg.embedding_provider == "azure":
        client = AsyncAzureOpenAI(
            api_key=cfg.azure_openai_api_key,
            azure_endpoint=cfg.azure_openai_endpoint,
            api_version=cfg.azure_openai_api_version,
        )
        model = cfg.azure_openai_embed_deployment
    elif cfg.embedding_provider == "openai":
        client = AsyncOpenAI(api_key=cfg.openai_api_key, base_url=cfg.openai_base_url or None)
        model = cfg.embed_model
    else:
        # Ollama serves an OpenAI-compatible API under /v1; the key is ignored
        client = AsyncOpenAI(api_key="ollama", base_url=f"{cfg.ollama_host.rstrip('/')}/v1")
        model = cfg.embed_model

    return OpenAIEmbedder(client, model=model, provider_name=cfg.embedding_provider)


def build_completion_provider(cfg: Config) -> OpenAIChat:
    """Completion provider for cfg.completion_provider (groq | openai | azure)."""
    missing = cfg.missing_for_completion()
    if missing:
        raise ConfigurationMissing(missing, capability="completion")

    if cfg.completion_provider == "azure":
        client = AsyncAzureOpenAI(
            api_key=cfg.azure_openai_api_key,
            azure_endpoint=cfg.azure_openai_endpoint,
            api_version=cfg.azure_openai_api_version,
        )
        return OpenAIChat(client=client, model=cfg.azure_openai_chat_deployment, provider_name="azure")

    if cfg.completion_provider == "openai":
        client = AsyncOpenAI(api_key=cfg.openai_api_key, base_url=cfg.openai_base_url or None)
        return OpenAIChat(client=client, model=cfg.chat_model, provider_name="openai")

    client = AsyncOpenAI(api_key=cfg.groq_api_key, base_url=cfg.groq_base_url)
    return OpenAIChat(client=client, model=cfg.chat_model, provider_name="groq")


def build_vector_store(cfg: Config):
    if cfg.vector_store == "memory":
        return InMemoryRegistryVectorStore()

    if cfg.chroma_api_key:
        logger.info(
            "Initialising Chroma Cloud client (tenant=%s, database=%s)",
            cfg.chroma_tenant,
            cfg.chroma_database,
        )
        client = chromadb.CloudClient(
            tenant=cfg.chroma_tenant,
            database=cfg.chroma_database,
            api_key=cfg.chroma_api_key,
        )
    else:
        logger.info("Initialising persistent Chroma client at '%s'", cfg.chroma_path)
        client = chromadb.PersistentClient(path=cfg.chroma_path)

    return ChromaRegistryVectorStore(client=client)
