"""LLM access: providers, prompt templates and response extraction."""
