"""
Configuration settings for the ResumeRevamp application.

This file contains configuration for the LLM providers used to extract and
rewrite résumés, plus the export settings. Everything can be overridden from
the environment or a local .env file.
"""

from dotenv import load_dotenv
load_dotenv()          # ← must be before os.getenv(...)
import os

# LLM Provider Configuration
# Set to "ollama" or "openai"
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").lower()

# Model Configuration
# For Ollama: any local model that follows JSON instructions, e.g. "llama3.1:8b"
# For OpenAI: "gpt-4o-mini", "gpt-4o", ...
DEFAULT_MODEL = {
    "ollama": os.getenv("OLLAMA_MODEL", "llama3.1:8b"),
    "openai": os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
}

# OpenAI Configuration (the key is only required once an OpenAI client is built)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL_PARAMS = {
    "temperature": 0.3,
    "max_tokens": 8192,
}

# Ollama Configuration
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# PDF export: device pixels per CSS pixel when the preview is rasterised
PDF_RENDER_SCALE = float(os.getenv("PDF_RENDER_SCALE", "2"))


def get_model_for_provider(provider: str | None = None) -> str:
    """Get the default model for the specified provider."""
    provider = provider or LLM_PROVIDER
    return DEFAULT_MODEL.get(provider, DEFAULT_MODEL["openai"])
