"""
Application errors for clean API error handling.

ClientInputError maps to 400 (bad request body). UpstreamServiceError is raised
when the hosted model call fails (network, auth, malformed reply); the API turns
it into a 500 with a user-facing apology. Neither is retried.
"""


class ClientInputError(Exception):
    """Raised when the request is missing a required field (e.g. user_query)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UpstreamServiceError(Exception):
    """Raised when the language model service is unreachable, rejects the call, or replies with garbage."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
