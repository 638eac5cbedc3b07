"""Domain-specific exceptions — framework-independent."""


class DataLayerError(Exception):
    """Base class for errors raised by the data layer itself."""


class ArgumentError(DataLayerError, ValueError):
    """Raised when an operation receives a missing or invalid argument.

    Always raised before any request reaches the transport.
    """

    def __init__(self, argument: str, message: str | None = None):
        self.argument = argument
        super().__init__(message or f"Argument '{argument}' must not be None or blank")


class FieldResolutionError(DataLayerError, LookupError):
    """Raised when a filter or sort names a field the target type does not have."""

    def __init__(self, type_name: str, field_name: str):
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(f"The {field_name} property or field was not in the {type_name} type")


class UnsupportedOperatorError(DataLayerError, ValueError):
    """Raised when a filter uses an operator outside the recognised set."""

    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(f"The '{operator}' operator is not handled")


class OperationCancelledError(DataLayerError):
    """Raised when a caller's cancellation event fires before a request completes.

    Distinct from any status-code outcome: a cancelled call never produces
    an OperationResult.
    """

    def __init__(self, method: str, url: str):
        self.method = method
        self.url = url
        super().__init__(f"{method} {url} was cancelled")
