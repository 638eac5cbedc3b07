"""HTTP data layer clients implementing the data layer ports over httpx.

Routes follow ``{api_prefix}/{TypeName}/{Action}``, where the type name is
the data object class name unless overridden. Remote outcomes (404, 400
validation rejections, transport failures) come back as data: ``None``,
``0``, empty lists or an ``OperationResult`` status. Only programmer
errors (missing arguments) and cancellation raise.
"""

import asyncio
import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import Any, TypeVar
from urllib.parse import quote

import httpx

from datalayer.application.interfaces import (
    StandardCRUDDataLayer,
    SubUserEditableDataLayer,
    UserEditableDataLayer,
)
from datalayer.application.schemas import (
    ListViewSchema,
    PagedListSchema,
    ServerSideValidationResultSchema,
    ValidationProblemDetailsSchema,
)
from datalayer.config import Settings, get_settings
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
from datalayer.domain.entities.identifier import as_int64, is_blank
from datalayer.domain.exceptions import ArgumentError, OperationCancelledError
from datalayer.infrastructure.http.cancellation import run_cancellable
from datalayer.infrastructure.http.codec import (
    decode_data_object,
    decode_data_objects,
    encode_data_object,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=DataObject)
TUserEditable = TypeVar("TUserEditable", bound=UserEditableDataObject)
TSubUserEditable = TypeVar("TSubUserEditable", bound=SubUserEditableDataObject)
R = TypeVar("R")

# Status reported on write results when the request never got a response.
TRANSPORT_FAILURE_STATUS = HTTPStatus.SERVICE_UNAVAILABLE


def _has_content(response: httpx.Response | None) -> bool:
    """2xx with a body worth reading (204 No Content is skipped)."""
    return (
        response is not None
        and response.is_success
        and response.status_code != HTTPStatus.NO_CONTENT
    )


def _decode_list_views(payload: Any) -> list[ListView]:
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array of list views, got {type(payload).__name__}")
    return [ListViewSchema.model_validate(item).to_entity() for item in payload]


def _decode_validation_result(payload: Any) -> ServerSideValidationResult:
    # Problem details carry {"Prop": ["msg", ...]}; the native shape is a list.
    if isinstance(payload, dict) and isinstance(payload.get("errors"), dict):
        return ValidationProblemDetailsSchema.model_validate(payload).to_entity()
    return ServerSideValidationResultSchema.model_validate(payload).to_entity()


class HttpStandardCRUDClient(StandardCRUDDataLayer[T]):
    """Infrastructure adapter for CRUD access to one remote collection.

    Uses the injected ``httpx.AsyncClient`` when given (shared, caller-owned,
    safe for concurrent requests). Otherwise a client is built per call from
    settings and closed afterwards.
    """

    def __init__(
        self,
        data_object_type: type[T],
        http_client: httpx.AsyncClient | None = None,
        *,
        settings: Settings | None = None,
        type_name: str | None = None,
    ):
        self._data_object_type = data_object_type
        self._http_client = http_client
        self._settings = settings or get_settings()
        self._type_name = type_name or data_object_type.__name__

    @property
    def type_name(self) -> str:
        return self._type_name

    def _route(self, *segments: Identifier) -> str:
        """Build ``{api_prefix}/{type}/{segment}/...``; segments are URL-escaped."""
        path = "/".join([self._type_name, *(quote(str(s), safe="") for s in segments)])
        return f"{self._settings.api_prefix}/{path}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(
            base_url=self._settings.base_url,
            timeout=self._settings.timeout_seconds,
        )

    async def _send(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: list[tuple[str, str]] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> httpx.Response | None:
        """Issue one request; ``None`` means the transport failed."""
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelledError(method, url)

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await run_cancellable(
                client.request(method, url, json=json, params=params),
                cancel_event,
                method=method,
                url=url,
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s: %s", method, url, type(exc).__name__, exc)
            return None
        finally:
            if should_close:
                await client.aclose()

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    def _decode(self, response: httpx.Response, decoder: Callable[[Any], R]) -> R | None:
        """Decode a JSON body; ``None`` for a null body or one that does not fit."""
        try:
            payload = response.json()
            if payload is None:
                return None
            return decoder(payload)
        except ValueError as exc:
            logger.warning(
                "Could not decode %s response (status %d): %s",
                self._type_name,
                response.status_code,
                exc,
            )
            return None

    def _decode_page(
        self, response: httpx.Response | None, row_decoder: Callable[[Any], R]
    ) -> PagedList[R] | None:
        if response is None:
            return None
        if not _has_content(response):
            return PagedList()

        def decode(payload: Any) -> PagedList[R]:
            envelope = PagedListSchema.model_validate(payload)
            return PagedList(
                data_objects=[row_decoder(row) for row in envelope.data_objects],
                total_records=envelope.total_records,
            )

        return self._decode(response, decode)

    def _decode_row(self, payload: Any) -> T:
        return decode_data_object(self._data_object_type, payload)

    async def _get_list(
        self,
        url: str,
        decoder: Callable[[Any], list[R]],
        *,
        params: list[tuple[str, str]] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> list[R] | None:
        response = await self._send("GET", url, params=params, cancel_event=cancel_event)
        if response is None:
            return None
        if not _has_content(response):
            return []
        return self._decode(response, decoder)

    async def _write(
        self, method: str, data_object: T, cancel_event: asyncio.Event | None
    ) -> OperationResult:
        if data_object is None:
            raise ArgumentError("data_object")

        url = self._route()
        response = await self._send(
            method, url, json=encode_data_object(data_object), cancel_event=cancel_event
        )
        if response is None:
            return OperationResult(status_code=TRANSPORT_FAILURE_STATUS)

        latest_data_object: T | None = None
        validation_result: ServerSideValidationResult | None = None

        if _has_content(response):
            latest_data_object = self._decode(response, self._decode_row)
        elif response.status_code == HTTPStatus.BAD_REQUEST:
            validation_result = self._decode(response, _decode_validation_result)
            logger.info(
                "%s %s rejected by server validation (%d error(s))",
                method,
                url,
                len(validation_result.errors) if validation_result else 0,
            )

        return OperationResult(
            data_object=latest_data_object,
            status_code=response.status_code,
            server_side_validation_result=validation_result,
        )

    # ── StandardCRUDDataLayer ──

    async def count(self, *, cancel_event: asyncio.Event | None = None) -> int:
        response = await self._send("GET", self._route("Count"), cancel_event=cancel_event)
        if not _has_content(response):
            return 0
        return as_int64(response.text.strip().strip('"'))

    async def create(
        self, data_object: T, *, cancel_event: asyncio.Event | None = None
    ) -> OperationResult:
        return await self._write("POST", data_object, cancel_event)

    async def delete(
        self, data_object: T, *, cancel_event: asyncio.Event | None = None
    ) -> OperationResult:
        if data_object is None:
            raise ArgumentError("data_object")
        if is_blank(data_object.key):
            raise ArgumentError("data_object.key", "Cannot delete a data object without a key")

        response = await self._send(
            "DELETE", self._route(data_object.key), cancel_event=cancel_event
        )
        if response is None:
            return OperationResult(status_code=TRANSPORT_FAILURE_STATUS)
        return OperationResult(status_code=response.status_code)

    async def get_all(self, *, cancel_event: asyncio.Event | None = None) -> list[T] | None:
        return await self._get_list(
            self._route("All"),
            lambda payload: decode_data_objects(self._data_object_type, payload),
            cancel_event=cancel_event,
        )

    async def get_page(
        self, query_definition: QueryDefinition, *, cancel_event: asyncio.Event | None = None
    ) -> PagedList[T] | None:
        if query_definition is None:
            raise ArgumentError("query_definition")
        response = await self._send(
            "GET",
            self._route("Page"),
            params=query_definition.to_query_params(),
            cancel_event=cancel_event,
        )
        return self._decode_page(response, self._decode_row)

    async def get_single(
        self, key: Identifier | None = None, *, cancel_event: asyncio.Event | None = None
    ) -> T | None:
        if key is None:
            url = self._route("Single")
        elif is_blank(key):
            raise ArgumentError("key")
        else:
            url = self._route("Single", key)

        response = await self._send("GET", url, cancel_event=cancel_event)
        if not _has_content(response):
            return None
        return self._decode(response, self._decode_row)

    async def update(
        self, data_object: T, *, cancel_event: asyncio.Event | None = None
    ) -> OperationResult:
        return await self._write("PUT", data_object, cancel_event)

    async def validate(
        self, data_object: T, *, cancel_event: asyncio.Event | None = None
    ) -> ServerSideValidationResult | None:
        if data_object is None:
            raise ArgumentError("data_object")
        response = await self._send(
            "POST",
            self._route("Validate"),
            json=encode_data_object(data_object),
            cancel_event=cancel_event,
        )
        if not _has_content(response):
            return None
        return self._decode(response, _decode_validation_result)


class HttpUserEditableClient(
    HttpStandardCRUDClient[TUserEditable], UserEditableDataLayer[TUserEditable]
):
    """Client for user-editable (configuration-style) collections.

    Adds list-view fetches so a UI can list records without transferring
    full objects.
    """

    async def get_all_list_view(
        self, *, cancel_event: asyncio.Event | None = None
    ) -> list[ListView] | None:
        return await self._get_list(
            self._route("All", "ListView"), _decode_list_views, cancel_event=cancel_event
        )

    async def get_page_list_view(
        self, query_definition: QueryDefinition, *, cancel_event: asyncio.Event | None = None
    ) -> PagedList[ListView] | None:
        if query_definition is None:
            raise ArgumentError("query_definition")
        response = await self._send(
            "GET",
            self._route("Page", "ListView"),
            params=query_definition.to_query_params(),
            cancel_event=cancel_event,
        )
        return self._decode_page(response, lambda row: ListViewSchema.model_validate(row).to_entity())


class HttpSubUserEditableClient(
    HttpUserEditableClient[TSubUserEditable], SubUserEditableDataLayer[TSubUserEditable]
):
    """Client for collections whose records belong to an owner record."""

    @staticmethod
    def _check_owner(owner_id: Identifier) -> None:
        if is_blank(owner_id):
            raise ArgumentError("owner_id")

    async def get_all_for_owner(
        self, owner_id: Identifier, *, cancel_event: asyncio.Event | None = None
    ) -> list[TSubUserEditable] | None:
        self._check_owner(owner_id)
        return await self._get_list(
            self._route("All", owner_id),
            lambda payload: decode_data_objects(self._data_object_type, payload),
            cancel_event=cancel_event,
        )

    async def get_all_list_view_for_owner(
        self, owner_id: Identifier, *, cancel_event: asyncio.Event | None = None
    ) -> list[ListView] | None:
        self._check_owner(owner_id)
        return await self._get_list(
            self._route("All", "ListView", owner_id),
            _decode_list_views,
            cancel_event=cancel_event,
        )

    async def get_page_for_owner(
        self,
        owner_id: Identifier,
        query_definition: QueryDefinition,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> PagedList[TSubUserEditable] | None:
        self._check_owner(owner_id)
        if query_definition is None:
            raise ArgumentError("query_definition")
        response = await self._send(
            "GET",
            self._route("Page", owner_id),
            params=query_definition.to_query_params(),
            cancel_event=cancel_event,
        )
        return self._decode_page(response, self._decode_row)

    async def get_page_list_view_for_owner(
        self,
        owner_id: Identifier,
        query_definition: QueryDefinition,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> PagedList[ListView] | None:
        self._check_owner(owner_id)
        if query_definition is None:
            raise ArgumentError("query_definition")
        response = await self._send(
            "GET",
            self._route("Page", "ListView", owner_id),
            params=query_definition.to_query_params(),
            cancel_event=cancel_event,
        )
        return self._decode_page(response, lambda row: ListViewSchema.model_validate(row).to_entity())
