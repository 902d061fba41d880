# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: errors.py
# -----------------------------------------------------------------------------
from typing import List, Sequence

import openai


class RegistryError(Exception):
    """Base class for failures raised by the registry pipeline."""


class ConfigurationMissing(RegistryError):
    """A required credential or endpoint is not configured."""

    def __init__(self, missing: Sequence[str], capability: str = "completion") -> None:
        self.missing: List[str] = list(missing)
        self.capability = capability
        super().__init__(f"Missing configuration for {capability}: {', '.join(self.missing)}")


class ProviderError(RegistryError):
    """An embedding or completion call failed (auth, bad request, bad response)."""

    def __init__(self, message: str, provider: str = "") -> None:
        self.provider = provider
        super().__init__(message)

    @property
    def caller_message(self) -> str:
        """Short description that is safe to show to an end user."""
        return "el proveedor rechazó la solicitud"


class ProviderTransient(ProviderError):
    """Retryable provider failure: timeouts, connection errors, rate limits, 5xx."""

    @property
    def caller_message(self) -> str:
        return "el servicio no está disponible temporalmente, intente de nuevo"


class IndexUnavailable(RegistryError):
    """No vector index exists and rebuilding it also failed."""


def provider_error_from(exc: Exception, provider: str) -> ProviderError:
    """
    Map an OpenAI SDK exception (also raised for Groq / Ollama / Azure, which
    are all reached through the same client) onto the pipeline taxonomy.
    """
    if isinstance(exc, ProviderError):
        return exc

    transient = (
        openai.APIConnectionError,  # includes APITimeoutError
        openai.RateLimitError,
        openai.InternalServerError,
    )
    if isinstance(exc, transient):
        return ProviderTransient(f"{provider}: {type(exc).__name__}: {exc}", provider=provider)

    return ProviderError(f"{provider}: {type(exc).__name__}: {exc}", provider=provider)
