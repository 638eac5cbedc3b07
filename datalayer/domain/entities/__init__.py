from .identifier import Identifier
from .validation import ServerSideValidationError, ServerSideValidationResult
from .data_object import DataObject, UserEditableDataObject, SubUserEditableDataObject, checked_field
from .list_view import ListView, PagedList
from .operation_result import OperationResult
from .query import (
    TAKE_ALL,
    FilterDefinition,
    SortDefinition,
    QueryDefinition,
)

__all__ = [
    "Identifier",
    "ServerSideValidationError",
    "ServerSideValidationResult",
    "DataObject",
    "UserEditableDataObject",
    "SubUserEditableDataObject",
    "checked_field",
    "ListView",
    "PagedList",
    "OperationResult",
    "TAKE_ALL",
    "FilterDefinition",
    "SortDefinition",
    "QueryDefinition",
]
