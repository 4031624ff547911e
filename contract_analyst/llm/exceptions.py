class ChatError(Exception):
    """Raised when a chat exchange with the AI provider fails."""


class ChatNetworkError(ChatError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class ChatSessionNotInitializedError(ChatError):
    """Raised when a message is sent before document context was loaded."""


class EmptyContextError(ChatError):
    """Raised when there is no readable document text to load as context."""
