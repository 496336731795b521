"""Exception hierarchy shared by the storage client layers."""

from __future__ import annotations


class StorageError(RuntimeError):
    """Raised when object storage operations fail."""


class ValidationError(StorageError, ValueError):
    """Raised when caller-supplied arguments violate a precondition."""


class FormatError(StorageError, ValueError):
    """Raised when a numeric response header cannot be parsed."""

    def __init__(self, header: str, value: str) -> None:
        super().__init__(f"Invalid {header} header value: {value!r}")
        self.header = header
        self.value = value


class TransportError(StorageError):
    """Raised by the transport when a request fails or returns a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        method: str,
        path: str,
        status_code: int | None = None,
        response_body: str = "",
    ) -> None:
        super().__init__(message)
        self.method = method
        self.path = path
        self.status_code = status_code
        self.response_body = response_body
