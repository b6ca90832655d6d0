"""Provider exception hierarchy."""


class ProviderError(Exception):
    """Base class for failures at the model-provider boundary."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(message)


class ProviderUnavailable(ProviderError):
    """No credential configured, or the client could not be created.

    Callers should surface this as "feature not available" rather than a
    stack trace.
    """

    def __init__(self, provider: str, reason: str | None = None) -> None:
        self.reason = reason or "not configured"
        super().__init__(provider, f"{provider} provider is not available: {self.reason}")


class ProviderCallFailed(ProviderError):
    """The remote generation call errored (network, auth, rate limit)."""

    def __init__(self, provider: str, operation: str = "generate") -> None:
        self.operation = operation
        super().__init__(provider, f"{provider} provider failed to {operation} a response")


class UnknownModelError(ProviderError):
    """Requested model name has no registered provider."""

    def __init__(self, model: str, available: list[str] | None = None) -> None:
        self.model = model
        self.available = available or []
        message = f"Unknown model: {model}"
        if self.available:
            message += f". Available models: {', '.join(self.available)}"
        super().__init__(model, message)
