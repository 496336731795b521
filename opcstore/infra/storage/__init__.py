"""Transport layer for object storage requests.

This module provides a protocol-based abstraction over the network layer so
the object service can run against a real HTTP endpoint or a test double.
"""

from .client import Transport, TransportResponse
from .http_transport import HttpTransport

__all__ = [
    "HttpTransport",
    "Transport",
    "TransportResponse",
]
