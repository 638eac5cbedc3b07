from .data_layer import StandardCRUDDataLayer, SubUserEditableDataLayer, UserEditableDataLayer

__all__ = [
    "StandardCRUDDataLayer",
    "UserEditableDataLayer",
    "SubUserEditableDataLayer",
]
