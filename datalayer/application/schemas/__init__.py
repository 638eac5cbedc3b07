from .list_view import ListViewSchema, PagedListSchema
from .validation import (
    ServerSideValidationErrorSchema,
    ServerSideValidationResultSchema,
    ValidationProblemDetailsSchema,
)

__all__ = [
    "ListViewSchema",
    "PagedListSchema",
    "ServerSideValidationErrorSchema",
    "ServerSideValidationResultSchema",
    "ValidationProblemDetailsSchema",
]
