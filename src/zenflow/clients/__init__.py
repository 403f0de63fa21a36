"""Clients for the generative AI services."""

from .base import YogaAIClient, with_retry

__all__ = ["YogaAIClient", "with_retry"]
