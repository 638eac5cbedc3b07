"""Typed HTTP CRUD client and dynamic query definitions for remote record collections."""

from datalayer.domain.entities import (
    TAKE_ALL,
    DataObject,
    FilterDefinition,
    ListView,
    OperationResult,
    PagedList,
    QueryDefinition,
    ServerSideValidationError,
    ServerSideValidationResult,
    SortDefinition,
    SubUserEditableDataObject,
    UserEditableDataObject,
    checked_field,
)
from datalayer.domain.exceptions import (
    ArgumentError,
    DataLayerError,
    FieldResolutionError,
    OperationCancelledError,
    UnsupportedOperatorError,
)
from datalayer.infrastructure.http import (
    HttpStandardCRUDClient,
    HttpSubUserEditableClient,
    HttpUserEditableClient,
)

__version__ = "0.1.0"

__all__ = [
    "TAKE_ALL",
    "DataObject",
    "UserEditableDataObject",
    "SubUserEditableDataObject",
    "checked_field",
    "ListView",
    "PagedList",
    "FilterDefinition",
    "SortDefinition",
    "QueryDefinition",
    "OperationResult",
    "ServerSideValidationError",
    "ServerSideValidationResult",
    "DataLayerError",
    "ArgumentError",
    "FieldResolutionError",
    "UnsupportedOperatorError",
    "OperationCancelledError",
    "HttpStandardCRUDClient",
    "HttpUserEditableClient",
    "HttpSubUserEditableClient",
]
