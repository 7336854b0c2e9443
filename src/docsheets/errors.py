"""
The few exceptions callers may want to tell apart.  Bad arguments are
plain ValueError and errors from the underlying client libraries are
passed through untouched.
"""

class SheetNotFoundError(KeyError):
    """Raised when a spreadsheet has no sheet (tab) with the requested name."""
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Spreadsheet does not contain sheet {self.name}"


class ServerCommunicationError(RuntimeError):
    """
    Raised when a service answers a request successfully but with something
    other than what the API documents, usually a transient problem on its
    side.  Error statuses are not this, they propagate from httpx.  body
    holds the raw response text.
    """
    def __init__(self, body: str) -> None:
        super().__init__(f"unexpected response from server: {body}")
        self.body = body


class AuthorizationError(RuntimeError):
    """Raised when the OAuth redirect comes back without an authorization code."""
