"""Pydantic DTOs for validation results returned by the remote service."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from datalayer.domain.entities import ServerSideValidationError, ServerSideValidationResult


class ServerSideValidationErrorSchema(BaseModel):
    error_message: str = ""
    property_name: str = ""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ServerSideValidationResultSchema(BaseModel):
    """Native shape: ``{"errors": [{"errorMessage": ..., "propertyName": ...}]}``."""

    errors: list[ServerSideValidationErrorSchema] = Field(default_factory=list)

    def to_entity(self) -> ServerSideValidationResult:
        return ServerSideValidationResult.from_errors(
            ServerSideValidationError(error_message=e.error_message, property_name=e.property_name)
            for e in self.errors
        )


class ValidationProblemDetailsSchema(BaseModel):
    """RFC 7807 problem details with per-property messages, as ASP.NET emits them."""

    type: str | None = None
    title: str | None = None
    status: int | None = None
    detail: str | None = None
    instance: str | None = None
    errors: dict[str, list[str]] = Field(default_factory=dict)

    def to_entity(self) -> ServerSideValidationResult:
        result = ServerSideValidationResult()
        for property_name, messages in self.errors.items():
            for message in messages:
                result.add_error(property_name, message)
        return result
