"""Synthetic record generation: LLM-backed document generation, validation and caching."""

__version__ = "0.1.0"
