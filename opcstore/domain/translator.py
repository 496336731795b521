"""Translation between object records and HTTP headers."""

from __future__ import annotations

import re
from typing import Mapping, Sequence, Union

from opcstore.common.errors import FormatError, ValidationError
from opcstore.domain.headers import (
    METADATA_PREFIX,
    REQUEST_INT_HEADERS,
    REQUEST_TEXT_HEADERS,
    RESPONSE_INT_HEADERS,
    RESPONSE_TEXT_HEADERS,
    ObjectHeader,
)
from opcstore.domain.identifiers import compose_identifier
from opcstore.domain.models import CreateObjectInput, GetObjectInput, ObjectInfo

HeaderValue = Union[str, Sequence[str]]

# Optional sign and ASCII digits, nothing else.
_DECIMAL = re.compile(r"[+-]?[0-9]+")


def build_create_headers(data: CreateObjectInput) -> dict[str, str]:
    """Build PUT headers, omitting every field left at its default."""
    if data.body is None and not data.copy_from:
        raise ValidationError("Body cannot be nil")

    headers: dict[str, str] = {}
    for field_name, header in REQUEST_TEXT_HEADERS.items():
        value = getattr(data, field_name)
        if value:
            headers[header.value] = value
    for field_name, header in REQUEST_INT_HEADERS.items():
        value = getattr(data, field_name)
        if value:
            headers[header.value] = str(int(value))
    for key, value in data.metadata.items():
        headers[f"{METADATA_PREFIX}{key}"] = value
    for name, value in headers.items():
        _ensure_latin1(name, value)
    return headers


def _ensure_latin1(name: str, value: str) -> None:
    try:
        value.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise ValidationError(
            f"Header {name} value is not latin-1 encodable: {value!r}"
        ) from exc


def build_get_headers(data: GetObjectInput) -> dict[str, str]:
    # Range is sent even when empty; X-Newest renders as true/false.
    return {
        ObjectHeader.RANGE.value: data.range,
        ObjectHeader.NEWEST.value: "true" if data.newest else "false",
    }


def _joined(value: HeaderValue) -> str:
    if isinstance(value, str):
        return value
    return " ".join(value)


def _parse_int(header: ObjectHeader, value: str) -> int:
    if not value:
        return 0
    if not _DECIMAL.fullmatch(value):
        raise FormatError(header.value, value)
    return int(value)


def parse_object_info(
    headers: Mapping[str, HeaderValue], *, container: str, name: str
) -> ObjectInfo:
    """Build an ``ObjectInfo`` from HEAD response headers.

    Header names are matched case-insensitively. Each ``X-Object-Meta-*``
    header becomes one metadata entry keyed by the rest of its name; repeated
    values are joined with a space.

    Raises:
        FormatError: If Content-Length or X-Delete-At is not a decimal integer.
    """
    by_name: dict[str, str] = {}
    metadata: dict[str, str] = {}
    prefix = METADATA_PREFIX.lower()
    for header_name, raw_value in headers.items():
        value = _joined(raw_value)
        lowered = header_name.lower()
        by_name[lowered] = value
        if lowered.startswith(prefix):
            metadata[header_name[len(prefix):]] = value

    attrs: dict[str, object] = {}
    for field_name, header in RESPONSE_TEXT_HEADERS.items():
        attrs[field_name] = by_name.get(header.value.lower(), "")
    for field_name, header in RESPONSE_INT_HEADERS.items():
        attrs[field_name] = _parse_int(header, by_name.get(header.value.lower(), ""))

    return ObjectInfo(
        id=compose_identifier(container, name),
        name=name,
        container=container,
        metadata=metadata,
        **attrs,  # type: ignore[arg-type]
    )
