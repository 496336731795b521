from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Mapping, Union

ObjectBody = Union[bytes, BinaryIO]


@dataclass(frozen=True, slots=True)
class ObjectInfo:
    """Describes an existing object as reported by a HEAD request.

    Optional attributes are empty strings (or ``0``) when the server did not
    send the corresponding header.
    """

    id: str
    name: str
    container: str
    accept_ranges: str = ""
    content_disposition: str = ""
    content_encoding: str = ""
    # Length of the object in bytes
    content_length: int = 0
    content_type: str = ""
    date: str = ""
    # MD5 of the content, or of the segment ETags for manifest objects
    etag: str = ""
    last_modified: str = ""
    # Seconds since the epoch; 0 means the object never expires
    delete_at: int = 0
    object_manifest: str = ""
    metadata: Mapping[str, str] = field(default_factory=dict)
    timestamp: str = ""
    transaction_id: str = ""


@dataclass(frozen=True)
class CreateObjectInput:
    container: str
    name: str
    body: ObjectBody | None = None
    content_disposition: str = ""
    content_encoding: str = ""
    # Server defaults to text/plain when omitted
    content_type: str = ""
    # container/object to copy from, URL-encoded
    copy_from: str = ""
    delete_at: int = 0
    metadata: Mapping[str, str] = field(default_factory=dict)
    # Unquoted MD5 of the body
    etag: str = ""
    # Only "chunked" is accepted by the server
    transfer_encoding: str = ""


@dataclass(frozen=True)
class GetObjectInput:
    """Either ``id`` or both ``container`` and ``name`` are required."""

    id: str | None = None
    container: str | None = None
    name: str | None = None
    # Byte range(s), e.g. "bytes=-5" or "bytes=10-15"
    range: str = ""
    # Ask every replica for the most recent copy; slower on the back end
    newest: bool = False


@dataclass(frozen=True)
class DeleteObjectInput:
    id: str | None = None
    container: str | None = None
    name: str | None = None
