"""Projector: an LLM-driven wizard that interviews a user and writes a project definition."""

__version__ = "0.1.0"
