"""External service clients for taxpj."""

from taxpj.clients.gemini import GeminiClient

__all__ = ["GeminiClient"]
