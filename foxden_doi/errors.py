"""Exceptions raised by the FOXDEN DOI workflow."""

from typing import Optional


class FoxdenDOIError(Exception):
    """Base exception for all FOXDEN DOI errors."""
    pass


class AuthError(FoxdenDOIError):
    """Raised when a token cannot be issued or a service rejects our credentials."""

    def __init__(self, message: str, user: Optional[str] = None, scope: Optional[str] = None):
        super().__init__(message)
        self.user = user
        self.scope = scope


class TransportError(FoxdenDOIError):
    """Raised when a network or IO failure occurs talking to a remote service."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class DecodeError(FoxdenDOIError):
    """Raised when a remote service returns a malformed JSON payload."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class AmbiguousRecordError(FoxdenDOIError):
    """Raised when a lookup that must yield exactly one record does not."""

    def __init__(self, message: str, did: str, count: int):
        super().__init__(message)
        self.did = did
        self.count = count


class NotFoundError(AmbiguousRecordError):
    """Raised when no record matches the dataset identifier."""

    def __init__(self, message: str, did: str):
        super().__init__(message, did=did, count=0)


class SchemaConflictError(FoxdenDOIError):
    """Raised when a did resolves to more than one metadata schema."""

    def __init__(self, message: str, did: str, schema: str):
        super().__init__(message)
        self.did = did
        self.schema = schema


class UnsupportedProviderError(FoxdenDOIError):
    """Raised when a DOI provider name is not registered."""

    def __init__(self, provider: str):
        super().__init__(f"Provider '{provider}' is not supported")
        self.provider = provider


class RemoteServiceError(FoxdenDOIError):
    """Raised when a remote service answers with a non-success status or code."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        srv_code: Optional[int] = None,
        did: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.srv_code = srv_code
        self.did = did


class ProviderError(FoxdenDOIError):
    """Raised when a DOI provider fails to publish a dataset."""

    def __init__(
        self,
        message: str,
        provider: str,
        did: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.provider = provider
        self.did = did
        self.status_code = status_code
