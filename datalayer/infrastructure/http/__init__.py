"""HTTP infrastructure package."""

from .crud_client import (
    TRANSPORT_FAILURE_STATUS,
    HttpStandardCRUDClient,
    HttpSubUserEditableClient,
    HttpUserEditableClient,
)

__all__ = [
    "TRANSPORT_FAILURE_STATUS",
    "HttpStandardCRUDClient",
    "HttpUserEditableClient",
    "HttpSubUserEditableClient",
]
