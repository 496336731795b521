"""Client for Swift-style object storage: create, inspect and delete objects."""

from opcstore.app.services import ObjectService, ServiceBundle, get_service_bundle
from opcstore.common.config import Settings, get_settings
from opcstore.common.errors import (
    FormatError,
    StorageError,
    TransportError,
    ValidationError,
)
from opcstore.domain import (
    CreateObjectInput,
    DeleteObjectInput,
    GetObjectInput,
    ObjectInfo,
)
from opcstore.infra.storage import HttpTransport, Transport, TransportResponse

__version__ = "0.1.0"

__all__ = [
    "CreateObjectInput",
    "DeleteObjectInput",
    "FormatError",
    "GetObjectInput",
    "HttpTransport",
    "ObjectInfo",
    "ObjectService",
    "ServiceBundle",
    "Settings",
    "StorageError",
    "Transport",
    "TransportError",
    "TransportResponse",
    "ValidationError",
    "get_service_bundle",
    "get_settings",
]
