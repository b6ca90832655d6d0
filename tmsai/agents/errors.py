"""Agent exceptions."""


class AgentError(Exception):
    """An agent operation could not get an answer from the assistant service."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Failed to {operation}")


class AgentContextError(RuntimeError):
    """The agent was used before set_context()."""

    def __init__(self) -> None:
        super().__init__("Context not set. Call set_context() first.")


class WorkflowNotFoundError(KeyError):
    """No active workflow has the requested id."""

    def __init__(self, workflow_id: str) -> None:
        self.workflow_id = workflow_id
        super().__init__(f"Workflow not found: {workflow_id}")
