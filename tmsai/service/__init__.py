"""Assistant service: context building, caching, routing and conversation logging."""
