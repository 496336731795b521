"""Compound ``container/name`` identifiers.

Names are joined with a single separator and no escaping, so an identifier
whose container or object name itself contains ``/`` cannot be decomposed.
Such identifiers are rejected by :func:`split_identifier`.
"""

from __future__ import annotations

from opcstore.common.errors import ValidationError

SEPARATOR = "/"


def compose_identifier(container: str, name: str) -> str:
    return f"{container}{SEPARATOR}{name}"


def split_identifier(identifier: str) -> tuple[str, str]:
    """Return ``(container, name)`` for a compound identifier."""
    parts = identifier.split(SEPARATOR)
    if len(parts) != 2:
        raise ValidationError(f"Unknown ID specified: {identifier}")
    return parts[0], parts[1]


def resolve_identifier(
    identifier: str | None, container: str | None, name: str | None
) -> str:
    """Use the explicit identifier verbatim, otherwise compose one."""
    if identifier:
        return identifier
    if not container or not name:
        raise ValidationError("Either ID or Name and Container must be set")
    return compose_identifier(container, name)
