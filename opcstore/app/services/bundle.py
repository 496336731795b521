from __future__ import annotations

from dataclasses import dataclass, field

from opcstore.common.config import Settings, get_settings
from opcstore.infra.storage.client import Transport
from opcstore.infra.storage.http_transport import HttpTransport

from .object_service import ObjectService


@dataclass
class ServiceBundle:
    """Lazily constructs storage services sharing the same transport."""

    settings: Settings
    transport: Transport | None = None
    _object: ObjectService | None = field(default=None, init=False, repr=False)
    _owned: HttpTransport | None = field(default=None, init=False, repr=False)

    def _transport(self) -> Transport:
        if self.transport is None:
            self._owned = HttpTransport(settings=self.settings)
            self.transport = self._owned
        return self.transport

    def objects(self) -> ObjectService:
        if self._object is None:
            self._object = ObjectService(self._transport())
        return self._object

    def close(self) -> None:
        """Close the transport if this bundle created it."""
        if self._owned is not None:
            self._owned.close()
            self._owned = None
            self.transport = None
            self._object = None

    def __enter__(self) -> ServiceBundle:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


def get_service_bundle(
    settings: Settings | None = None, *, transport: Transport | None = None
) -> ServiceBundle:
    return ServiceBundle(settings=settings or get_settings(), transport=transport)
