"""Domain layer: object records, identifiers and header translation."""

from .identifiers import compose_identifier, resolve_identifier, split_identifier
from .models import CreateObjectInput, DeleteObjectInput, GetObjectInput, ObjectInfo
from .translator import build_create_headers, build_get_headers, parse_object_info

__all__ = [
    "CreateObjectInput",
    "DeleteObjectInput",
    "GetObjectInput",
    "ObjectInfo",
    "build_create_headers",
    "build_get_headers",
    "compose_identifier",
    "parse_object_info",
    "resolve_identifier",
    "split_identifier",
]
