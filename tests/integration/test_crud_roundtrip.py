"""Integration tests: HTTP clients against an in-memory record service."""

from dataclasses import dataclass

import httpx
import pytest

from datalayer.config import Settings
from datalayer.domain.entities import (
    FilterDefinition,
    QueryDefinition,
    SortDefinition,
    SubUserEditableDataObject,
    checked_field,
)
from datalayer.infrastructure.http import HttpSubUserEditableClient
from tests.integration.services.memory_service import InMemoryRecordService


@dataclass
class LedgerEntry(SubUserEditableDataObject):
    amount: int = 0
    memo: str | None = checked_field(max_length=20)


def _entry(name: str, owner_id, amount: int) -> LedgerEntry:
    return LedgerEntry(name=name, owner_id=owner_id, amount=amount)


@pytest.fixture
def service() -> InMemoryRecordService:
    service = InMemoryRecordService(LedgerEntry)
    service.seed(
        _entry("Rent", 1, 1200),
        _entry("Groceries", 1, 85),
        _entry("Rebate", 2, 40),
        _entry("Gas", 1, 60),
    )
    return service


@pytest.fixture
def client(service) -> HttpSubUserEditableClient[LedgerEntry]:
    http = httpx.AsyncClient(transport=service.transport(), base_url="http://test")
    return HttpSubUserEditableClient(LedgerEntry, http, settings=Settings(api_prefix="/api"))


@pytest.mark.asyncio
async def test_create_read_update_delete(client, service):
    created = await client.create(_entry("Coffee", 1, 4))
    assert created.is_success
    key = created.data_object.key
    assert key == "5"

    fetched = await client.get_single(key)
    assert fetched.name == "Coffee"
    assert fetched.owner_integer_id == 1

    fetched.amount = 5
    updated = await client.update(fetched)
    assert updated.is_success
    assert service.records[key].amount == 5

    deleted = await client.delete(fetched)
    assert deleted.is_success
    assert await client.get_single(key) is None
    assert await client.count() == 4


@pytest.mark.asyncio
async def test_server_validation_rejects_write(client, service):
    result = await client.create(LedgerEntry(owner_id=1, memo="x" * 30))

    assert result.status_code == 400
    assert not result.is_success
    properties = {e.property_name for e in result.server_side_validation_result.errors}
    assert properties == {"name", "memo"}
    assert len(service.records) == 4


@pytest.mark.asyncio
async def test_update_unknown_record_is_not_found(client):
    result = await client.update(LedgerEntry(key="99", name="Ghost"))
    assert result.status_code == 404
    assert result.data_object is None


@pytest.mark.asyncio
async def test_validate_matches_local_checks(client):
    candidate = LedgerEntry(memo="y" * 21)

    remote = await client.validate(candidate)

    assert [e.property_name for e in remote.errors] == [e.property_name for e in candidate.validate()]


@pytest.mark.asyncio
async def test_page_is_filtered_sorted_and_windowed_by_the_server(client):
    query = QueryDefinition(
        filter_definitions=[FilterDefinition("ownerId", "equals", "1")],
        sort_definitions=[SortDefinition("amount", descending=True)],
        skip=1,
        take=1,
    )

    page = await client.get_page(query)

    assert page.total_records == 3
    assert [row.name for row in page.data_objects] == ["Groceries"]


@pytest.mark.asyncio
async def test_page_list_view_with_ignore_case_filter(client):
    query = QueryDefinition(
        filter_definitions=[FilterDefinition("name", "starts with", "r", ignore_case=True)],
        sort_definitions=[SortDefinition("name")],
    )

    page = await client.get_page_list_view(query)

    assert [view.name for view in page.data_objects] == ["Rebate", "Rent"]
    assert all(view.string_id for view in page.data_objects)


@pytest.mark.asyncio
async def test_rejected_query_yields_empty_page(client):
    query = QueryDefinition(filter_definitions=[FilterDefinition("nope", "equals", "x")])

    page = await client.get_page(query)

    assert page.data_objects == []
    assert page.total_records == 0


@pytest.mark.asyncio
async def test_owner_scoped_reads(client):
    entries = await client.get_all_for_owner(1)
    assert sorted(e.name for e in entries) == ["Gas", "Groceries", "Rent"]

    views = await client.get_all_list_view_for_owner(2)
    assert [v.name for v in views] == ["Rebate"]

    page = await client.get_page_for_owner(1, QueryDefinition(sort_definitions=[SortDefinition("amount")]))
    assert [e.amount for e in page.data_objects] == [60, 85, 1200]

    page = await client.get_page_list_view_for_owner(1, QueryDefinition(take=2))
    assert page.total_records == 3
    assert len(page.data_objects) == 2


@pytest.mark.asyncio
async def test_get_all_and_list_views(client):
    rows = await client.get_all()
    views = await client.get_all_list_view()

    assert len(rows) == 4
    assert [v.id for v in views] == [r.key for r in rows]
