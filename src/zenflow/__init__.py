"""ZenFlow: AI-assisted yoga flow builder."""

__version__ = "0.1.0"
