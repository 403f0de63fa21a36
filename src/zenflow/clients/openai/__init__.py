"""OpenAI implementation of the yoga AI services."""

from .client import OpenAIYogaClient, decode_data_url

__all__ = ["OpenAIYogaClient", "decode_data_url"]
