"""
Tests for the in-memory repositories.

These exercise the same contract the MongoDB repositories implement.
"""

import pytest
from pydantic import ValidationError

from core.config import Settings
from core.storage import (
    BlogRecord,
    DuplicateUsernameError,
    MalformedIdError,
    UserRecord,
    StorageBackend,
    create_blog_repository,
    create_user_repository,
    get_storage_backend,
)
from core.storage.memory import InMemoryBlogRepository, InMemoryUserRepository


@pytest.mark.asyncio
async def test_create_and_get_user(user_repo):
    user = await user_repo.create(UserRecord(username="root", password_hash="x"))

    fetched = await user_repo.get(user.id)
    assert fetched == user
    assert await user_repo.get_by_username("root") == user
    assert await user_repo.get_by_username("nobody") is None


@pytest.mark.asyncio
async def test_duplicate_username_rejected(user_repo):
    await user_repo.create(UserRecord(username="root", password_hash="x"))

    with pytest.raises(DuplicateUsernameError):
        await user_repo.create(UserRecord(username="root", password_hash="y"))

    assert len(await user_repo.list_all()) == 1


@pytest.mark.asyncio
async def test_add_and_remove_blog_reference(user_repo):
    user = await user_repo.create(UserRecord(username="root", password_hash="x"))
    blog = BlogRecord(title="t", author="a", url="u")

    assert await user_repo.add_blog(user.id, blog.id)
    assert (await user_repo.get(user.id)).blogs == [blog.id]

    assert await user_repo.remove_blog(user.id, blog.id)
    assert (await user_repo.get(user.id)).blogs == []


@pytest.mark.asyncio
async def test_returned_records_are_copies(blog_repo):
    blog = await blog_repo.create(BlogRecord(title="t", author="a", url="u"))

    blog.likes = 999
    assert (await blog_repo.get(blog.id)).likes == 0


@pytest.mark.asyncio
async def test_list_keeps_insertion_order(blog_repo):
    for title in ("first", "second", "third"):
        await blog_repo.create(BlogRecord(title=title, author="a", url="u"))

    assert [b.title for b in await blog_repo.list_all()] == ["first", "second", "third"]


@pytest.mark.asyncio
async def test_update_only_given_fields(blog_repo):
    blog = await blog_repo.create(BlogRecord(title="t", author="a", url="u", likes=3))

    updated = await blog_repo.update(blog.id, likes=4)

    assert updated.likes == 4
    assert updated.title == "t"
    assert updated.url == "u"
    assert updated.updated_at >= blog.updated_at


@pytest.mark.asyncio
async def test_update_missing_blog(blog_repo):
    assert await blog_repo.update("64b7f0c2a1b2c3d4e5f60718", likes=1) is None


@pytest.mark.asyncio
async def test_delete(blog_repo):
    blog = await blog_repo.create(BlogRecord(title="t", author="a", url="u"))

    assert await blog_repo.delete(blog.id)
    assert not await blog_repo.delete(blog.id)
    assert await blog_repo.get(blog.id) is None


@pytest.mark.asyncio
async def test_malformed_id(blog_repo, user_repo):
    with pytest.raises(MalformedIdError):
        await blog_repo.get("12345")

    with pytest.raises(MalformedIdError):
        await user_repo.get("not-an-id")


def test_record_dict_round_trip():
    blog = BlogRecord(title="t", author="a", url="u", likes=2, user_id=None)
    assert BlogRecord.from_dict(blog.to_dict()) == blog

    user = UserRecord(username="root", password_hash="x", blogs=[blog.id])
    assert UserRecord.from_dict(user.to_dict()) == user


def test_factory_builds_memory_repositories():
    settings = Settings(storage_backend="memory")

    assert get_storage_backend(settings) == StorageBackend.MEMORY
    assert isinstance(create_user_repository(settings), InMemoryUserRepository)
    assert isinstance(create_blog_repository(settings), InMemoryBlogRepository)


def test_unknown_backend_rejected_by_settings():
    with pytest.raises(ValidationError):
        Settings(storage_backend="postgres")
