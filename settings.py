# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-09
# Updated: 2026-02-14
# Description: settings.py
# -----------------------------------------------------------------------------
import os


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Retrieval
# -----------------------------------------------------------------------------
RETRIEVAL_K = _env_int("REGISTRY_RETRIEVAL_K", 3)

# Vector store collections are named "<prefix>-g<generation>"
VECTOR_COLLECTION_PREFIX = _env("REGISTRY_VECTOR_COLLECTION_PREFIX", "professionals")


# -----------------------------------------------------------------------------
# Embeddings
# -----------------------------------------------------------------------------
# Asymmetric framing (nomic-embed-text convention); applied to every provider
EMBED_DOCUMENT_PREFIX = os.getenv("REGISTRY_EMBED_DOCUMENT_PREFIX", "search_document: ")
EMBED_QUERY_PREFIX = os.getenv("REGISTRY_EMBED_QUERY_PREFIX", "search_query: ")

EMBED_CONCURRENCY = _env_int("REGISTRY_EMBED_CONCURRENCY", 4)
EMBED_MAX_RETRIES = _env_int("REGISTRY_EMBED_MAX_RETRIES", 3)


# -----------------------------------------------------------------------------
# Prompt assembly / disclosure policy
# -----------------------------------------------------------------------------
ORGANIZATION_NAME = _env("REGISTRY_ORGANIZATION_NAME", "Sociedad de Pediatría Regional Santander")
CONTACT_TEXT = _env("REGISTRY_CONTACT_TEXT", "+57 318 8017142")
RESPONSE_LANGUAGE = _env("REGISTRY_RESPONSE_LANGUAGE", "español")
MAX_ANSWER_SENTENCES = _env_int("REGISTRY_MAX_ANSWER_SENTENCES", 4)

HISTORY_MESSAGE_MAX_CHARS = _env_int("REGISTRY_HISTORY_MESSAGE_MAX_CHARS", 1000)
HISTORY_MAX_MESSAGES = _env_int("REGISTRY_HISTORY_MAX_MESSAGES", 12)
MAX_CONTEXT_CHARS = _env_int("REGISTRY_MAX_CONTEXT_CHARS", 4000)

INCLUDE_INACTIVE_IN_CONTEXT = _env_bool("REGISTRY_INCLUDE_INACTIVE_IN_CONTEXT", False)


# -----------------------------------------------------------------------------
# Completion defaults
# -----------------------------------------------------------------------------
CHAT_TEMPERATURE = _env_float("REGISTRY_CHAT_TEMPERATURE", 0.2)
CHAT_MAX_TOKENS = _env_int("REGISTRY_CHAT_MAX_TOKENS", 512)


# -----------------------------------------------------------------------------
# Caller-visible messages
# -----------------------------------------------------------------------------
UNAVAILABLE_MESSAGE = _env(
    "REGISTRY_UNAVAILABLE_MESSAGE",
    "⚠️ Error: el servicio de respuestas no está configurado (falta {missing}).",
)
# read raw: the leading newline separates it from a partially streamed answer
DIAGNOSTIC_MESSAGE = os.getenv(
    "REGISTRY_DIAGNOSTIC_MESSAGE",
    "\n[Error del motor de respuestas: {reason}]",
)
EMPTY_ANSWER_MESSAGE = _env("REGISTRY_EMPTY_ANSWER_MESSAGE", "No pude generar una respuesta.")


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if RETRIEVAL_K < 1:
    raise RuntimeError("REGISTRY_RETRIEVAL_K must be >= 1")

if HISTORY_MESSAGE_MAX_CHARS < 1:
    raise RuntimeError("REGISTRY_HISTORY_MESSAGE_MAX_CHARS must be >= 1")

if HISTORY_MAX_MESSAGES < 1:
    raise RuntimeError("REGISTRY_HISTORY_MAX_MESSAGES must be >= 1")

if EMBED_CONCURRENCY < 1:
    raise RuntimeError("REGISTRY_EMBED_CONCURRENCY must be >= 1")

if EMBED_MAX_RETRIES < 1:
    raise RuntimeError("REGISTRY_EMBED_MAX_RETRIES must be >= 1")

if not CONTACT_TEXT:
    raise RuntimeError("CONTACT_TEXT resolved to empty value")
