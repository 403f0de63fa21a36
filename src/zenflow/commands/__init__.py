"""CLI commands for zenflow."""

from .check import check
from .generate import generate
from .library import library
from .studio import studio

__all__ = [
    "check",
    "generate",
    "library",
    "studio",
]
