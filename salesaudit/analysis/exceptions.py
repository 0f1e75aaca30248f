class AnalysisError(Exception):
    """Raised when the conversation analysis fails."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class MalformedAnalysisResponseError(AnalysisError):
    """Raised when the provider response lacks required fields or has wrong types."""


class ChatError(AnalysisError):
    """Raised when a follow-up chat message cannot be answered."""
