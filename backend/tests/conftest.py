
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.database import Database
from app.main import app
from app.middleware.rate_limit import limiter


@pytest.fixture(autouse=True)
def attachments_dir(tmp_path, monkeypatch):
    path = tmp_path / "attachments"
    monkeypatch.setattr(settings, "attachments_dir", str(path))
    return path


@pytest_asyncio.fixture(name="database")
async def database_fixture(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    await database.create_all()
    yield database
    await database.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(database):
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture(name="client")
async def client_fixture(database):
    limiter.enabled = False
    app.state.database = database
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    limiter.enabled = True
