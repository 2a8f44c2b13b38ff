"""
Pytest configuration and fixtures.
"""

import os
import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Set test environment before settings are loaded
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-bytes-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from httpx import ASGITransport, AsyncClient  # noqa: E402

from api.dependencies import set_blog_service  # noqa: E402
from api.server import create_app  # noqa: E402
from core.storage import BlogRecord  # noqa: E402
from core.storage.memory import InMemoryBlogRepository, InMemoryUserRepository  # noqa: E402
from manager.blog_service import BlogService  # noqa: E402


INITIAL_BLOGS = [
    {
        "title": "React patterns",
        "author": "Michael Chan",
        "url": "https://reactpatterns.com/",
        "likes": 7,
    },
    {
        "title": "Go To Statement Considered Harmful",
        "author": "Edsger W. Dijkstra",
        "url": "http://www.u.arizona.edu/~rubinson/copyright_violations/Go_To_Considered_Harmful.html",
        "likes": 5,
    },
    {
        "title": "Canonical string reduction",
        "author": "Edsger W. Dijkstra",
        "url": "http://www.cs.utexas.edu/~EWD/transcriptions/EWD08xx/EWD808.html",
        "likes": 12,
    },
    {
        "title": "First class tests",
        "author": "Robert C. Martin",
        "url": "http://blog.cleancoder.com/uncle-bob/2017/05/05/TestDefinitions.htmll",
        "likes": 10,
    },
    {
        "title": "TDD harms architecture",
        "author": "Robert C. Martin",
        "url": "http://blog.cleancoder.com/uncle-bob/2017/03/03/TDD-Harms-Architecture.html",
        "likes": 0,
    },
    {
        "title": "Type wars",
        "author": "Robert C. Martin",
        "url": "http://blog.cleancoder.com/uncle-bob/2016/05/01/TypeWars.html",
        "likes": 2,
    },
]


@pytest.fixture
def initial_blogs():
    """Fresh copies of the sample blog list."""
    return [dict(blog) for blog in INITIAL_BLOGS]


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def blog_repo():
    return InMemoryBlogRepository()


@pytest_asyncio.fixture
async def service(user_repo, blog_repo):
    """Initialized blog service on in-memory storage."""
    blog_service = BlogService(
        user_repository=user_repo,
        blog_repository=blog_repo,
    )
    await blog_service.initialize()
    yield blog_service
    await blog_service.shutdown()


@pytest_asyncio.fixture
async def seeded_service(service, blog_repo, initial_blogs):
    """Service whose storage already holds the sample blogs (no owners)."""
    for blog in initial_blogs:
        await blog_repo.create(BlogRecord(**blog))
    return service


@pytest_asyncio.fixture
async def client(seeded_service):
    """HTTP client talking to the app in-process."""
    set_blog_service(seeded_service)
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    set_blog_service(None)


@pytest_asyncio.fixture
async def auth_headers(client):
    """Register and log in a user; returns the Authorization header."""
    credentials = {"username": "tester", "name": "Test User", "password": "sekret"}
    response = await client.post("/api/users", json=credentials)
    assert response.status_code == 201

    response = await client.post(
        "/api/login",
        json={"username": "tester", "password": "sekret"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
