"""
LLM client abstraction layer to support multiple providers.

This module provides a unified interface for different LLM providers,
making it easy to switch between Ollama and the OpenAI API while keeping
the same interface for the résumé extractor.
"""

from __future__ import annotations
from typing import List, Dict
from abc import ABC, abstractmethod

from ollama import Client as OllamaAPI
from openai import OpenAI

from . import config


class LLMResponse:
    """Unified response object for LLM responses."""

    def __init__(self, content: str):
        self.message = MessageContent(content)


class MessageContent:
    """Message content wrapper."""

    def __init__(self, content: str):
        self.content = content


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    def chat(
        self, model: str, messages: List[Dict[str, str]], json_mode: bool = False
    ) -> LLMResponse:
        """Send a chat request to the LLM provider."""


class OllamaClient(LLMClient):
    """Ollama client implementation."""

    def __init__(self, host: str | None = None):
        self.client = OllamaAPI(host=host or config.OLLAMA_BASE_URL)

    def chat(
        self, model: str, messages: List[Dict[str, str]], json_mode: bool = False
    ) -> LLMResponse:
        """Send a chat request to Ollama."""
        kwargs = {"format": "json"} if json_mode else {}
        response = self.client.chat(model=model, messages=messages, **kwargs)
        return LLMResponse(response.message.content or "")


class OpenAIClient(LLMClient):
    """OpenAI client implementation."""

    def __init__(self, api_key: str | None = None):
        # Use provided API key or get from environment
        api_key = api_key or config.OPENAI_API_KEY
        if not api_key:
            raise ValueError(
                "OpenAI API key is required. Set OPENAI_API_KEY environment variable or pass api_key parameter."
            )

        self.client = OpenAI(api_key=api_key)

    def chat(
        self, model: str, messages: List[Dict[str, str]], json_mode: bool = False
    ) -> LLMResponse:
        """Send a chat request to OpenAI."""
        kwargs = {"response_format": {"type": "json_object"}} if json_mode else {}
        response = self.client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=config.OPENAI_MODEL_PARAMS.get("temperature", 0.3),
            max_tokens=config.OPENAI_MODEL_PARAMS.get("max_tokens", 8192),
            **kwargs,
        )

        return LLMResponse(response.choices[0].message.content or "")


def get_llm_client(provider: str | None = None) -> LLMClient:
    """Factory function to get the appropriate LLM client based on configuration."""
    provider = (provider or config.LLM_PROVIDER).lower()

    if provider == "openai":
        return OpenAIClient()
    elif provider == "ollama":
        return OllamaClient()
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")


# Create a global client instance
_llm_client = None


def chat(
    model: str, messages: List[Dict[str, str]], json_mode: bool = False
) -> LLMResponse:
    """
    Unified chat function that works with any configured LLM provider.

    The shared client is created on first use, so importing this module never
    requires credentials.
    """
    global _llm_client
    if _llm_client is None:
        _llm_client = get_llm_client()

    return _llm_client.chat(model, messages, json_mode=json_mode)
