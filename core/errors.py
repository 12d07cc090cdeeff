"""
Exception types shared by the LLM layer and the services.
"""


class MissingCredentialsError(RuntimeError):
    """Raised when a provider is constructed without its API key."""


class AnalysisError(Exception):
    """Base class for failures while analyzing code."""


class MalformedResponseError(AnalysisError):
    """The model reply was empty, not JSON, or did not match the schema."""
