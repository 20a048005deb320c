import pytest
from httpx import ASGITransport, AsyncClient

from blogapi.api.deps import get_repository
from blogapi.domain.inputs import PostCreateIn
from blogapi.db.database import Database
from blogapi.db.repository import PostRepository
from blogapi.main import app
from blogapi.services.posts import create_post


# ------------------------------------------------------------------
# FIXTURE: base de datos SQLite limpia por test
# ------------------------------------------------------------------
@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    db.connect()
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def repo(database):
    return PostRepository(database, timeout=5)


# ------------------------------------------------------------------
# FIXTURE: factory para crear posts por la operación real
# ------------------------------------------------------------------
@pytest.fixture
def make_post(repo):
    async def _make_post(**fields):
        data = {
            "title": "My First Post",
            "content": "<p>Hello there, this is content.</p>",
        }
        data.update(fields)
        return await create_post(repo, PostCreateIn.model_validate(data))
    return _make_post


# ------------------------------------------------------------------
# FIXTURE: cliente HTTP contra la app con el repo de test
# ------------------------------------------------------------------
@pytest.fixture
async def client(repo):
    app.dependency_overrides[get_repository] = lambda: repo
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
