"""Semantic knowledge-graph engine for the SEO dashboard backend."""

__version__ = "0.1.0"
