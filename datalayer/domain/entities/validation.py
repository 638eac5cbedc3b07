"""Domain entities for validation outcomes reported by the remote service."""

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class ServerSideValidationError:
    """A single violation: which property failed and why."""

    error_message: str = ""
    property_name: str = ""


@dataclass
class ServerSideValidationResult:
    """Accumulated validation errors for one candidate data object.

    Errors are only ever appended; an empty list means the object passed.
    """

    errors: list[ServerSideValidationError] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return not self.errors

    def add_error(self, property_name: str, error_message: str) -> None:
        self.errors.append(
            ServerSideValidationError(error_message=error_message, property_name=property_name)
        )

    @classmethod
    def from_errors(cls, errors: Iterable[ServerSideValidationError]) -> "ServerSideValidationResult":
        return cls(errors=list(errors))
