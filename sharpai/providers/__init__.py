from sharpai.providers.ollama import OllamaClient
from sharpai.providers.openai import OpenAIClient

__all__ = ["OllamaClient", "OpenAIClient"]
