import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from portfolio.database import Base
from portfolio.services.storage import PublicBucketResolver
from tests.helpers import STORAGE_BASE_URL, make_photo


@pytest.fixture
def resolver():
    return PublicBucketResolver(STORAGE_BASE_URL, "photos")


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Session factory bound to a fresh file-backed SQLite database with the schema created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'gallery.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def sample_photos():
    """12 photos: 6 landscape, 3 nature, 3 street, interleaved."""
    categories = ["landscape", "nature", "street", "landscape"] * 3
    return [make_photo(f"p{i:02d}", category=c) for i, c in enumerate(categories)]
