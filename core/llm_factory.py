"""
LLM Factory - Factory Pattern Implementation
Centralized factory for creating LLM instances with different providers.
"""
from typing import Optional
from langchain_core.language_models.chat_models import BaseChatModel

from core.llm_providers import (
    LLMProvider,
    GeminiProvider,
    OpenAIProvider,
)
from core.settings import settings


class LLMFactory:
    """
    Factory class for creating LLM instances.
    Implements Factory Pattern for clean, extensible object creation.
    """

    # Registry of available providers
    _providers: dict[str, type[LLMProvider]] = {
        "gemini": GeminiProvider,
        "openai": OpenAIProvider,
    }

    @classmethod
    def register_provider(cls, name: str, provider_class: type[LLMProvider]) -> None:
        """
        Register a new LLM provider (Open/Closed Principle).

        Args:
            name: Provider identifier
            provider_class: Provider class implementing LLMProvider
        """
        cls._providers[name.lower()] = provider_class

    @classmethod
    def create(
        cls,
        provider_name: str,
        model: Optional[str] = None,
        temperature: float = 0.0,
        json_mode: bool = False,
        **provider_kwargs
    ) -> BaseChatModel:
        """
        Create an LLM instance using the specified provider.

        Args:
            provider_name: Name of the provider ("gemini", "openai")
            model: Optional model name (uses provider default if None)
            temperature: Temperature setting (0.0 - 1.0)
            json_mode: Request JSON-only replies
            **provider_kwargs: Additional provider-specific arguments

        Returns:
            Configured LLM instance

        Raises:
            ValueError: If provider is not registered
            MissingCredentialsError: If the provider has no API key

        Examples:
            >>> llm = LLMFactory.create("gemini")
            >>> llm = LLMFactory.create("openai", model="gpt-4o", json_mode=True)
        """
        provider_name = provider_name.lower()

        if provider_name not in cls._providers:
            available = ", ".join(cls._providers.keys())
            raise ValueError(
                f"Unknown provider: '{provider_name}'. "
                f"Available providers: {available}"
            )

        # Instantiate provider and create LLM
        provider_class = cls._providers[provider_name]
        provider = provider_class(**provider_kwargs)

        return provider.create_llm(model=model, temperature=temperature, json_mode=json_mode)

    @classmethod
    def list_providers(cls) -> list[str]:
        """Get list of registered provider names."""
        return list(cls._providers.keys())


def create_default_llm(json_mode: bool = False) -> BaseChatModel:
    """
    Create the LLM configured by LLM_PROVIDER / MODEL_NAME / TEMPERATURE.

    Args:
        json_mode: Request JSON-only replies

    Returns:
        Configured LLM instance
    """
    return LLMFactory.create(
        settings.LLM_PROVIDER,
        model=settings.MODEL_NAME,
        temperature=settings.TEMPERATURE,
        json_mode=json_mode,
    )
