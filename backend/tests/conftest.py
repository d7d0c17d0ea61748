import httpx
import pytest
import pytest_asyncio
from sqlalchemy.orm import sessionmaker

from helpers import StubClassifier, make_sqlite_engine
from review_api.core.config import get_settings
from review_api.core.dependencies import get_db, get_sentiment_classifier
from review_api.models.entities import Base


@pytest.fixture(autouse=True)
def _reset_cached_singletons():
    # Tests patch env vars; never leak a cached Settings or classifier across tests.
    get_settings.cache_clear()
    get_sentiment_classifier.cache_clear()
    yield
    get_settings.cache_clear()
    get_sentiment_classifier.cache_clear()


@pytest.fixture
def session_factory():
    engine = make_sqlite_engine()
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine)
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def stub_classifier():
    return StubClassifier()


@pytest_asyncio.fixture
async def client(session_factory, stub_classifier):
    """In-process ASGI client backed by in-memory SQLite and a stub classifier."""
    from review_api.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_sentiment_classifier] = lambda: stub_classifier

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
