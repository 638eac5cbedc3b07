"""Uniform outcome envelope for write and delete operations."""

from dataclasses import dataclass
from http import HTTPStatus

from datalayer.domain.entities.data_object import DataObject
from datalayer.domain.entities.validation import ServerSideValidationResult


@dataclass(frozen=True)
class OperationResult:
    """The object the server returned (if any) and the response status.

    ``is_success`` is true only for exactly 200 OK. A 201 Created or
    204 No Content is reported through ``status_code`` but is not flagged as
    success here; callers that accept those must check ``status_code``.
    """

    data_object: DataObject | None = None
    status_code: int = HTTPStatus.OK
    server_side_validation_result: ServerSideValidationResult | None = None

    @property
    def is_success(self) -> bool:
        return self.status_code == HTTPStatus.OK
