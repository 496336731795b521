"""Transport protocol and data types.

This module defines the interface the object service needs from the network
layer: issue one request against an object path and return the response
headers. Implementations own endpoint resolution, authentication headers and
retry policy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence

from opcstore.domain.models import ObjectBody


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Status and headers of a successful request.

    Header values are lists so repeated headers are not merged.
    """

    status_code: int
    headers: Mapping[str, Sequence[str]] = field(default_factory=dict)


class Transport(Protocol):
    """Protocol defining the interface for object storage transports."""

    def issue_request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str],
        body: ObjectBody | None = None,
    ) -> TransportResponse:
        """Issue a single request against an object path.

        Args:
            method: HTTP method (PUT, HEAD, DELETE).
            path: Compound ``container/name`` identifier, unqualified.
            headers: Request headers.
            body: Optional request body.

        Returns:
            TransportResponse with the response status and headers.

        Raises:
            TransportError: On connectivity failures or a non-2xx status.
        """
        ...
