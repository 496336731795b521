from __future__ import annotations

from typing import Mapping

from opcstore.domain.models import ObjectBody
from opcstore.infra.storage.client import Transport, TransportResponse


class BaseService:
    """Holds the transport shared by storage services."""

    def __init__(self, transport: Transport):
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    def _send(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str] | None = None,
        body: ObjectBody | None = None,
    ) -> TransportResponse:
        return self._transport.issue_request(
            method, path, headers=dict(headers or {}), body=body
        )
