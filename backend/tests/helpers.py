"""Shared test doubles: in-memory SQLite engine and a recording classifier."""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from review_api.core.errors import ReviewApiError
from review_api.schemas.review import ReviewType
from review_api.services.sentiment import SentimentClassifier


def make_sqlite_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _fk_on(dbapi_connection, _connection_record):  # type: ignore[no-untyped-def]
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


class StubClassifier(SentimentClassifier):
    name = "stub"

    def __init__(self, result: ReviewType = ReviewType.POSITIVE, error: ReviewApiError | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[str] = []

    async def classify(self, text: str) -> ReviewType:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result
