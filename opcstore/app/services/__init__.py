from .base import BaseService
from .bundle import ServiceBundle, get_service_bundle
from .object_service import ObjectService

__all__ = [
    "BaseService",
    "ObjectService",
    "ServiceBundle",
    "get_service_bundle",
]
