"""Abstract data layer interfaces (ports) for remote record collections."""

import asyncio
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from datalayer.domain.entities import (
    DataObject,
    Identifier,
    ListView,
    OperationResult,
    PagedList,
    QueryDefinition,
    ServerSideValidationResult,
    SubUserEditableDataObject,
    UserEditableDataObject,
)

T = TypeVar("T", bound=DataObject)
TUserEditable = TypeVar("TUserEditable", bound=UserEditableDataObject)
TSubUserEditable = TypeVar("TSubUserEditable", bound=SubUserEditableDataObject)


class StandardCRUDDataLayer(ABC, Generic[T]):
    """Port for CRUD access to one remote collection, implemented in the infrastructure layer.

    Every operation accepts an optional ``cancel_event``; setting it abandons
    the call with ``OperationCancelledError``.
    """

    @abstractmethod
    async def count(self, *, cancel_event: asyncio.Event | None = None) -> int:
        """Total records in the collection; 0 when the server gives no usable answer."""
        ...

    @abstractmethod
    async def create(
        self, data_object: T, *, cancel_event: asyncio.Event | None = None
    ) -> OperationResult:
        """Create a record; the result carries the server's copy when one is returned."""
        ...

    @abstractmethod
    async def delete(
        self, data_object: T, *, cancel_event: asyncio.Event | None = None
    ) -> OperationResult:
        """Delete the record addressed by the object's key."""
        ...

    @abstractmethod
    async def get_all(self, *, cancel_event: asyncio.Event | None = None) -> list[T] | None:
        """Every record in the collection; None only when the response was unusable."""
        ...

    @abstractmethod
    async def get_page(
        self, query_definition: QueryDefinition, *, cancel_event: asyncio.Event | None = None
    ) -> PagedList[T] | None:
        """One filtered, sorted page of records."""
        ...

    @abstractmethod
    async def get_single(
        self, key: Identifier | None = None, *, cancel_event: asyncio.Event | None = None
    ) -> T | None:
        """One record, by key when given; None when absent."""
        ...

    @abstractmethod
    async def update(
        self, data_object: T, *, cancel_event: asyncio.Event | None = None
    ) -> OperationResult:
        """Update the record addressed by the object's key."""
        ...

    @abstractmethod
    async def validate(
        self, data_object: T, *, cancel_event: asyncio.Event | None = None
    ) -> ServerSideValidationResult | None:
        """Ask the server to validate a candidate without persisting it."""
        ...


class UserEditableDataLayer(StandardCRUDDataLayer[TUserEditable]):
    """Port for user-editable (configuration-style) collections with list views."""

    @abstractmethod
    async def get_all_list_view(
        self, *, cancel_event: asyncio.Event | None = None
    ) -> list[ListView] | None:
        """The whole collection projected to id + name."""
        ...

    @abstractmethod
    async def get_page_list_view(
        self, query_definition: QueryDefinition, *, cancel_event: asyncio.Event | None = None
    ) -> PagedList[ListView] | None:
        """One page of the collection projected to id + name."""
        ...


class SubUserEditableDataLayer(UserEditableDataLayer[TSubUserEditable]):
    """Port for collections whose records belong to an owner record."""

    @abstractmethod
    async def get_all_for_owner(
        self, owner_id: Identifier, *, cancel_event: asyncio.Event | None = None
    ) -> list[TSubUserEditable] | None:
        ...

    @abstractmethod
    async def get_all_list_view_for_owner(
        self, owner_id: Identifier, *, cancel_event: asyncio.Event | None = None
    ) -> list[ListView] | None:
        ...

    @abstractmethod
    async def get_page_for_owner(
        self,
        owner_id: Identifier,
        query_definition: QueryDefinition,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> PagedList[TSubUserEditable] | None:
        ...

    @abstractmethod
    async def get_page_list_view_for_owner(
        self,
        owner_id: Identifier,
        query_definition: QueryDefinition,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> PagedList[ListView] | None:
        ...
