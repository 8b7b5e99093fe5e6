"""
Error types shared by the store, the order intake and the HTTP layer.
"""


class StoreError(Exception):
    """Base class for failures of a file-backed document store."""

    action = "access"

    def __init__(self, kind: str, reason: str = ""):
        self.kind = kind
        self.reason = reason
        super().__init__(f"{self.action} {kind}: {reason}" if reason else f"{self.action} {kind}")

    @property
    def public_message(self) -> str:
        return f"Failed to {self.action} {self.kind}"


class StoreReadError(StoreError):
    """The document file is missing or cannot be read."""

    action = "read"


class StoreParseError(StoreError):
    """The document file exists but is not valid JSON."""

    action = "read"


class StoreWriteError(StoreError):
    """The document could not be written."""

    action = "save"


class InvalidRequest(Exception):
    """Input rejected by a business rule; surfaced as HTTP 400."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
