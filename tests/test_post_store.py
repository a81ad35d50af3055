"""Tests for PostStore against an in-memory database."""

from datetime import datetime, timedelta, timezone

import pytest

from blog_api.errors import NotFoundError, StorageError, ValidationError
from blog_api.stores.postgres import drop_tables
from blog_api.stores.posts import PostStore
from conftest import make_post_fields


@pytest.mark.asyncio
async def test_create_assigns_id_and_created(store: PostStore):
    before = datetime.now(timezone.utc)
    post = await store.create(make_post_fields())

    assert post.id and len(post.id) == 32
    assert post.author == {"firstName": "Ann", "lastName": "Lee"}
    assert post.title == "Hi"
    assert post.content == "Body"
    assert before <= post.created <= datetime.now(timezone.utc)


@pytest.mark.asyncio
async def test_create_ignores_caller_id_and_created(store: PostStore):
    fields = make_post_fields() | {"id": "mine", "created": datetime(2000, 1, 1, tzinfo=timezone.utc)}
    post = await store.create(fields)

    assert post.id != "mine"
    assert post.created.year != 2000


@pytest.mark.asyncio
async def test_create_accepts_explicit_created_for_seeding(store: PostStore):
    when = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    post = await store.create(make_post_fields(), created=when)

    stored = await store.get(post.id)
    assert stored.created == when


@pytest.mark.asyncio
async def test_ids_are_unique(store: PostStore):
    posts = [await store.create(make_post_fields(title=f"t{i}")) for i in range(20)]
    assert len({p.id for p in posts}) == 20


@pytest.mark.asyncio
async def test_get_returns_stored_post(store: PostStore):
    created = await store.create(make_post_fields())
    fetched = await store.get(created.id)

    assert fetched.id == created.id
    assert fetched.author == created.author
    assert fetched.title == created.title
    assert fetched.content == created.content
    assert fetched.created == created.created
    assert fetched.created.tzinfo is not None


@pytest.mark.asyncio
async def test_get_unknown_id_raises_not_found(store: PostStore):
    with pytest.raises(NotFoundError) as exc_info:
        await store.get("0" * 32)
    assert exc_info.value.post_id == "0" * 32


@pytest.mark.asyncio
async def test_list_and_count_on_empty_store(store: PostStore):
    assert list(await store.list()) == []
    assert await store.count() == 0


@pytest.mark.asyncio
async def test_list_returns_every_post(store: PostStore):
    ids = {(await store.create(make_post_fields(title=f"t{i}"))).id for i in range(3)}

    posts = await store.list()
    assert {p.id for p in posts} == ids
    assert await store.count() == 3


@pytest.mark.asyncio
async def test_list_is_newest_first(store: PostStore):
    now = datetime.now(timezone.utc)
    old = await store.create(make_post_fields(title="old"), created=now - timedelta(days=1))
    new = await store.create(make_post_fields(title="new"), created=now)

    assert [p.id for p in await store.list()] == [new.id, old.id]


@pytest.mark.asyncio
async def test_update_replaces_mutable_fields_only(store: PostStore):
    post = await store.create(make_post_fields())

    await store.update(
        post.id,
        {
            "id": "ignored",
            "created": datetime(2000, 1, 1, tzinfo=timezone.utc),
            "title": "New title",
            "author": {"firstName": "blah", "lastName": "blergh"},
            "content": "New content",
        },
    )

    updated = await store.get(post.id)
    assert updated.id == post.id
    assert updated.created == post.created
    assert updated.title == "New title"
    assert updated.author == {"firstName": "blah", "lastName": "blergh"}
    assert updated.content == "New content"


@pytest.mark.asyncio
async def test_update_with_subset_keeps_other_fields(store: PostStore):
    post = await store.create(make_post_fields())

    await store.update(post.id, {"title": "Only the title"})

    updated = await store.get(post.id)
    assert updated.title == "Only the title"
    assert updated.author == post.author
    assert updated.content == post.content


@pytest.mark.asyncio
async def test_update_unknown_id_raises_not_found(store: PostStore):
    with pytest.raises(NotFoundError):
        await store.update("missing", {"title": "x"})


@pytest.mark.asyncio
async def test_update_without_fields_still_checks_existence(store: PostStore):
    post = await store.create(make_post_fields())
    await store.update(post.id, {})

    with pytest.raises(NotFoundError):
        await store.update("missing", {})


@pytest.mark.asyncio
async def test_delete_removes_post(store: PostStore):
    post = await store.create(make_post_fields())
    other = await store.create(make_post_fields(title="other"))

    await store.delete(post.id)

    with pytest.raises(NotFoundError):
        await store.get(post.id)
    assert (await store.get(other.id)).id == other.id
    assert await store.count() == 1


@pytest.mark.asyncio
async def test_repeated_delete_raises_not_found(store: PostStore):
    post = await store.create(make_post_fields())
    await store.delete(post.id)

    with pytest.raises(NotFoundError):
        await store.delete(post.id)


@pytest.mark.asyncio
async def test_database_failure_surfaces_as_storage_error(store: PostStore, engine):
    await drop_tables(engine)

    with pytest.raises(StorageError) as exc_info:
        await store.list()
    assert exc_info.value.status_code == 500

    with pytest.raises(StorageError):
        await store.create(make_post_fields())


@pytest.mark.asyncio
async def test_create_allows_empty_name_parts(store: PostStore):
    post = await store.create(make_post_fields(first="", last=""))
    assert (await store.get(post.id)).author == {"firstName": "", "lastName": ""}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "fields",
    [
        {"title": "Hi", "content": "Body"},
        {"author": {"firstName": "Ann", "lastName": "Lee"}, "content": "Body"},
        {"author": {"firstName": "Ann", "lastName": "Lee"}, "title": "Hi"},
        make_post_fields() | {"author": {"firstName": "Ann"}},
        make_post_fields() | {"author": "Ann Lee"},
        make_post_fields() | {"title": 7},
    ],
)
async def test_create_rejects_malformed_fields(store: PostStore, fields: dict):
    with pytest.raises(ValidationError):
        await store.create(fields)
    assert await store.count() == 0


@pytest.mark.asyncio
async def test_update_rejects_author_without_last_name(store: PostStore):
    post = await store.create(make_post_fields())

    with pytest.raises(ValidationError):
        await store.update(post.id, {"author": {"firstName": "blah"}})
    assert (await store.get(post.id)).author == post.author


@pytest.mark.asyncio
async def test_store_without_initialized_database_raises_storage_error():
    with pytest.raises(StorageError):
        await PostStore().count()
