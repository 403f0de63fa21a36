"""Prompts and output handling for the generative services."""

from .output_specs import sequence_response_format
from .sequence_builder import build_sequence, merge_with_catalog, parse_sequence_text

__all__ = [
    "build_sequence",
    "merge_with_catalog",
    "parse_sequence_text",
    "sequence_response_format",
]
