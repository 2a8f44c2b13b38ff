"""
Tests for BlogService.

Runs the service against in-memory repositories.
"""

import pytest

from core.storage import MalformedIdError
from manager.blog_service import (
    AuthenticationError,
    BlogNotFoundError,
    BlogService,
    PermissionDeniedError,
    UserValidationError,
)


@pytest.mark.asyncio
async def test_requires_initialize(user_repo, blog_repo):
    service = BlogService(user_repository=user_repo, blog_repository=blog_repo)

    with pytest.raises(RuntimeError):
        await service.list_blogs()

    assert await service.is_ready() == {"users": False, "blogs": False}


@pytest.mark.asyncio
async def test_register_hashes_password(service):
    user = await service.register_user("root", "sekret", name="Superuser")

    assert user.password_hash != "sekret"
    assert user.name == "Superuser"


@pytest.mark.asyncio
async def test_register_short_password(service):
    with pytest.raises(UserValidationError, match="at least three characters long"):
        await service.register_user("root", "pw")


@pytest.mark.asyncio
async def test_register_password_too_long(service):
    with pytest.raises(UserValidationError, match="at most 72 bytes long"):
        await service.register_user("root", "x" * 73)


@pytest.mark.asyncio
async def test_register_duplicate_username(service):
    await service.register_user("root", "sekret")

    with pytest.raises(UserValidationError, match="expected `username` to be unique"):
        await service.register_user("root", "salainen")


@pytest.mark.asyncio
async def test_authenticate_and_resolve_token(service):
    created = await service.register_user("root", "sekret")

    token, user = await service.authenticate("root", "sekret")
    assert user.id == created.id

    resolved = await service.user_from_token(token)
    assert resolved.id == created.id


@pytest.mark.asyncio
async def test_authenticate_wrong_password(service):
    await service.register_user("root", "sekret")

    with pytest.raises(AuthenticationError):
        await service.authenticate("root", "wrong")

    with pytest.raises(AuthenticationError):
        await service.authenticate("nobody", "sekret")


@pytest.mark.asyncio
async def test_user_from_bad_token(service):
    with pytest.raises(AuthenticationError):
        await service.user_from_token("garbage")


@pytest.mark.asyncio
async def test_create_blog_links_owner(service):
    user = await service.register_user("root", "sekret")

    entry = await service.create_blog(user, title="t", url="u", author="a")

    assert entry["blog"].likes == 0
    assert entry["blog"].user_id == user.id
    assert entry["user"].blogs == [entry["blog"].id]


@pytest.mark.asyncio
async def test_list_blogs_and_users_are_joined(service):
    user = await service.register_user("root", "sekret")
    entry = await service.create_blog(user, title="t", url="u", author="a", likes=4)

    blogs = await service.list_blogs()
    assert [b["user"].username for b in blogs] == ["root"]

    users = await service.list_users()
    assert [b.id for b in users[0]["blogs"]] == [entry["blog"].id]


@pytest.mark.asyncio
async def test_update_blog(service):
    user = await service.register_user("root", "sekret")
    entry = await service.create_blog(user, title="t", url="u", author="a")

    updated = await service.update_blog(entry["blog"].id, likes=10, title="new")

    assert updated["blog"].likes == 10
    assert updated["blog"].title == "new"
    assert updated["user"].id == user.id


@pytest.mark.asyncio
async def test_update_missing_blog(service):
    with pytest.raises(BlogNotFoundError):
        await service.update_blog("64b7f0c2a1b2c3d4e5f60718", likes=1)


@pytest.mark.asyncio
async def test_delete_requires_owner(service):
    owner = await service.register_user("owner", "sekret")
    other = await service.register_user("other", "sekret")
    entry = await service.create_blog(owner, title="t", url="u", author="a")
    blog_id = entry["blog"].id

    with pytest.raises(PermissionDeniedError):
        await service.delete_blog(other, blog_id)

    await service.delete_blog(owner, blog_id)

    with pytest.raises(BlogNotFoundError):
        await service.get_blog(blog_id)

    users = {u["user"].username: u["user"] for u in await service.list_users()}
    assert users["owner"].blogs == []


@pytest.mark.asyncio
async def test_get_blog_malformed_id(service):
    with pytest.raises(MalformedIdError):
        await service.get_blog("123")


@pytest.mark.asyncio
async def test_statistics(seeded_service):
    stats = await seeded_service.blog_statistics()

    assert stats["total_likes"] == 36
    assert stats["favorite_blog"] == {
        "title": "Canonical string reduction",
        "author": "Edsger W. Dijkstra",
        "likes": 12,
    }
    assert stats["most_blogs"] == {"author": "Robert C. Martin", "blogs": 3}
    assert stats["most_likes"] == {"author": "Edsger W. Dijkstra", "likes": 17}


@pytest.mark.asyncio
async def test_statistics_empty(service):
    stats = await service.blog_statistics()

    assert stats["total_likes"] == 0
    assert stats["favorite_blog"] == {}
