import pytest
from bson import ObjectId
from bson.errors import InvalidDocument
from pymongo.errors import NetworkTimeout, ServerSelectionTimeoutError

from app.core.errors import BackendError, NotFoundError, ValidationError
from app.domains.texts.entities import TextDocument
from app.domains.texts.repository import TextRepository


def unassigned_id() -> str:
    return str(ObjectId())


def test_mongo_repository_fulfils_contract(repository) -> None:
    assert isinstance(repository, TextRepository)


@pytest.mark.asyncio
async def test_insert_then_find_round_trip(repository) -> None:
    saved = await repository.insert(TextDocument(text="hello"))

    assert saved.id is not None
    found = await repository.find_by_id(saved.id)
    assert found == TextDocument(id=saved.id, text="hello")


@pytest.mark.asyncio
async def test_insert_ignores_caller_supplied_id(repository) -> None:
    supplied = unassigned_id()
    saved = await repository.insert(TextDocument(text="x", id=supplied))
    assert saved.id != supplied


@pytest.mark.asyncio
async def test_inserted_ids_are_unique(repository) -> None:
    ids = [(await repository.insert(TextDocument(text=f"t{i}"))).id for i in range(25)]
    assert len(set(ids)) == len(ids)


@pytest.mark.asyncio
async def test_find_unknown_id_returns_none_without_error(repository) -> None:
    assert await repository.find_by_id(unassigned_id()) is None


@pytest.mark.asyncio
async def test_update_and_delete_unknown_id_raise_not_found(repository) -> None:
    document_id = unassigned_id()

    with pytest.raises(NotFoundError) as exc_info:
        await repository.update(document_id, TextDocument(text="x"))
    assert exc_info.value.document_id == document_id

    with pytest.raises(NotFoundError):
        await repository.delete(document_id)


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ["find_by_id", "update", "delete"])
async def test_malformed_id_rejected_before_backend_call(repository, collection, operation) -> None:
    with pytest.raises(ValidationError):
        if operation == "update":
            await repository.update("bogus", TextDocument(text="x"))
        else:
            await getattr(repository, operation)("bogus")

    assert collection.call_count == 0


@pytest.mark.asyncio
async def test_update_preserves_identity(repository) -> None:
    saved = await repository.insert(TextDocument(text="before"))

    updated = await repository.update(saved.id, TextDocument(text="after"))
    assert updated.id == saved.id

    found = await repository.find_by_id(saved.id)
    assert found.id == saved.id
    assert found.text == "after"


@pytest.mark.asyncio
async def test_delete_is_final(repository) -> None:
    saved = await repository.insert(TextDocument(text="bye"))

    await repository.delete(saved.id)

    with pytest.raises(NotFoundError):
        await repository.delete(saved.id)
    assert await repository.find_by_id(saved.id) is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failure",
    [ServerSelectionTimeoutError("no servers"), InvalidDocument("cannot encode")],
)
async def test_backend_failures_wrap_cause(repository, collection, failure) -> None:
    collection.failure = failure

    with pytest.raises(BackendError) as exc_info:
        await repository.insert(TextDocument(text="x"))

    assert exc_info.value.cause is failure
    assert exc_info.value.__cause__ is failure
    assert exc_info.value.operation == "insert"


@pytest.mark.asyncio
async def test_backend_timeout_is_flagged(repository, collection) -> None:
    collection.failure = NetworkTimeout("timed out")

    with pytest.raises(BackendError) as exc_info:
        await repository.find_by_id(unassigned_id())

    assert exc_info.value.timed_out


@pytest.mark.asyncio
async def test_full_document_lifecycle(repository) -> None:
    saved = await repository.insert(TextDocument(text="hello"))
    x = saved.id

    assert await repository.find_by_id(x) == TextDocument(id=x, text="hello")

    await repository.update(x, TextDocument(text="world"))
    assert await repository.find_by_id(x) == TextDocument(id=x, text="world")

    await repository.delete(x)
    with pytest.raises(NotFoundError):
        await repository.delete(x)
