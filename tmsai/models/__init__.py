"""Typed shapes of the model replies each agent asks for."""
