"""Object service for create, read and delete operations.

Objects can only be replaced, never updated in place: ``create_object`` on an
existing name overwrites it.
"""

from __future__ import annotations

import logging

from opcstore.app.services.base import BaseService
from opcstore.domain.identifiers import resolve_identifier, split_identifier
from opcstore.domain.models import (
    CreateObjectInput,
    DeleteObjectInput,
    GetObjectInput,
    ObjectInfo,
)
from opcstore.domain.translator import (
    build_create_headers,
    build_get_headers,
    parse_object_info,
)

logger = logging.getLogger("storage")


class ObjectService(BaseService):
    """Application service for storage object operations."""

    def create_object(self, data: CreateObjectInput) -> ObjectInfo:
        """Upload (or server-side copy) an object and return its fresh description.

        The PUT response is not used; the description comes from a follow-up
        HEAD request.
        """
        identifier = resolve_identifier(None, data.container, data.name)
        headers = build_create_headers(data)
        self._send("PUT", identifier, headers, data.body)
        logger.info(
            "object_created id=%s copy_from=%s",
            identifier,
            data.copy_from or "-",
            extra={"extra": {"id": identifier, "copy_from": data.copy_from or None}},
        )
        return self.get_object(
            GetObjectInput(container=data.container, name=data.name)
        )

    def get_object(self, data: GetObjectInput) -> ObjectInfo:
        identifier = resolve_identifier(data.id, data.container, data.name)
        # Name and container are not returned by the API
        if data.id:
            container, name = split_identifier(data.id)
        else:
            container, name = data.container or "", data.name or ""

        response = self._send("HEAD", identifier, build_get_headers(data))
        return parse_object_info(response.headers, container=container, name=name)

    def delete_object(self, data: DeleteObjectInput) -> None:
        identifier = resolve_identifier(data.id, data.container, data.name)
        self._send("DELETE", identifier)
        logger.info(
            "object_deleted id=%s", identifier, extra={"extra": {"id": identifier}}
        )
