"""Structured LLM assistance for transport-management operations."""

__version__ = "0.1.0"
