"""Wire header vocabulary for object requests and responses.

Pure data: the enum names every header the client reads or writes, and the
tables below map ``ObjectInfo`` / ``CreateObjectInput`` fields to those
headers so marshaling and unmarshaling stay symmetric.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ObjectHeader(str, Enum):
    ACCEPT_RANGES = "Accept-Ranges"
    CONTENT_DISPOSITION = "Content-Disposition"
    CONTENT_ENCODING = "Content-Encoding"
    CONTENT_LENGTH = "Content-Length"
    CONTENT_TYPE = "Content-Type"
    COPY_FROM = "X-Copy-From"
    DATE = "Date"
    DELETE_AT = "X-Delete-At"
    ETAG = "ETag"
    LAST_MODIFIED = "Last-Modified"
    NEWEST = "X-Newest"
    OBJECT_MANIFEST = "X-Object-Manifest"
    RANGE = "Range"
    TIMESTAMP = "X-Timestamp"
    TRANSACTION_ID = "X-Trans-Id"
    TRANSFER_ENCODING = "Transfer-Encoding"

    def __str__(self) -> str:
        return self.value


# X-Object-Meta-{name}: value
METADATA_PREFIX = "X-Object-Meta-"

# CreateObjectInput field -> header, sent only when non-empty.
REQUEST_TEXT_HEADERS: Mapping[str, ObjectHeader] = MappingProxyType(
    {
        "content_disposition": ObjectHeader.CONTENT_DISPOSITION,
        "content_encoding": ObjectHeader.CONTENT_ENCODING,
        "content_type": ObjectHeader.CONTENT_TYPE,
        "etag": ObjectHeader.ETAG,
        "transfer_encoding": ObjectHeader.TRANSFER_ENCODING,
        "copy_from": ObjectHeader.COPY_FROM,
    }
)

# CreateObjectInput field -> header, sent as a decimal string only when non-zero.
REQUEST_INT_HEADERS: Mapping[str, ObjectHeader] = MappingProxyType(
    {
        "delete_at": ObjectHeader.DELETE_AT,
    }
)

# ObjectInfo field -> header, copied verbatim ("" when absent).
RESPONSE_TEXT_HEADERS: Mapping[str, ObjectHeader] = MappingProxyType(
    {
        "accept_ranges": ObjectHeader.ACCEPT_RANGES,
        "content_disposition": ObjectHeader.CONTENT_DISPOSITION,
        "content_encoding": ObjectHeader.CONTENT_ENCODING,
        "content_type": ObjectHeader.CONTENT_TYPE,
        "date": ObjectHeader.DATE,
        "etag": ObjectHeader.ETAG,
        "last_modified": ObjectHeader.LAST_MODIFIED,
        "object_manifest": ObjectHeader.OBJECT_MANIFEST,
        "timestamp": ObjectHeader.TIMESTAMP,
        "transaction_id": ObjectHeader.TRANSACTION_ID,
    }
)

# ObjectInfo field -> header, parsed as a decimal int (0 when absent).
RESPONSE_INT_HEADERS: Mapping[str, ObjectHeader] = MappingProxyType(
    {
        "content_length": ObjectHeader.CONTENT_LENGTH,
        "delete_at": ObjectHeader.DELETE_AT,
    }
)
