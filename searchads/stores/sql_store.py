"""SEARCHADS — SQLModel Store Adapters.

Both stores are backed by SQLModel tables. A connection is one Session,
opened in `connect()` and closed when the block exits.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from searchads.models.ad_models import AdRecord, Advertisement, KeywordIndexEntry
from searchads.stores.base import (
    AdConnection,
    IndexConnection,
    InvertedIndexStore,
    RelationalStore,
    StoreError,
    StoreUnavailable,
)
from searchads.core.logging import get_logger

logger = get_logger("stores.sql")

# sqlite3 raises OverflowError for ints beyond 64 bits; SQLAlchemy does not wrap it
DRIVER_ERRORS = (SQLAlchemyError, OverflowError)


@contextmanager
def _open_session(engine: Engine, store_name: str) -> Iterator[Session]:
    """Check out a connection eagerly so connectivity problems surface here."""
    session = Session(engine)
    try:
        session.connection()
    except SQLAlchemyError as e:
        session.close()
        logger.error(f"Could not connect to {store_name} store: {e}")
        raise StoreUnavailable(f"{store_name} store unavailable: {e}") from e
    try:
        yield session
    finally:
        session.close()


class SqlIndexConnection(IndexConnection):
    def __init__(self, session: Session):
        self.session = session

    def put(self, keyword: str, ad_id: int) -> None:
        try:
            self.session.add(KeywordIndexEntry(keyword=keyword, ad_id=str(ad_id)))
            self.session.commit()
        except DRIVER_ERRORS as e:
            self.session.rollback()
            raise StoreError(f"Index write failed for '{keyword}': {e}") from e

    def get(self, keyword: str) -> List[str]:
        try:
            rows = self.session.exec(
                select(KeywordIndexEntry.ad_id)
                .where(KeywordIndexEntry.keyword == keyword)
                .order_by(KeywordIndexEntry.id)  # type: ignore
            ).all()
        except DRIVER_ERRORS as e:
            raise StoreError(f"Index read failed for '{keyword}': {e}") from e
        return list(rows)


class SqlAdConnection(AdConnection):
    def __init__(self, session: Session):
        self.session = session

    def insert(self, ad: Advertisement) -> None:
        try:
            self.session.add(ad.to_record())
            self.session.commit()
        except DRIVER_ERRORS as e:
            self.session.rollback()
            raise StoreError(f"Insert failed for ad {ad.ad_id}: {e}") from e

    def get_by_id(self, ad_id: int) -> Optional[Advertisement]:
        try:
            record = self.session.get(AdRecord, ad_id)
        except DRIVER_ERRORS as e:
            self.session.rollback()
            raise StoreError(f"Lookup failed for ad {ad_id}: {e}") from e
        return record.to_advertisement() if record else None


class SqlInvertedIndexStore(InvertedIndexStore):
    """Inverted index kept in the `keyword_index` table."""

    def __init__(self, engine: Engine):
        self.engine = engine

    @contextmanager
    def connect(self) -> Iterator[SqlIndexConnection]:
        with _open_session(self.engine, "index") as session:
            yield SqlIndexConnection(session)


class SqlRelationalStore(RelationalStore):
    """Ads kept in the `ads` table."""

    def __init__(self, engine: Engine):
        self.engine = engine

    @contextmanager
    def connect(self) -> Iterator[SqlAdConnection]:
        with _open_session(self.engine, "ads") as session:
            yield SqlAdConnection(session)
