import json
from collections.abc import Generator
from contextlib import contextmanager

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from searchads.stores.base import InvertedIndexStore, RelationalStore, StoreUnavailable
from searchads.stores.sql_store import SqlInvertedIndexStore, SqlRelationalStore


def ad_json(**fields) -> str:
    """One source line with every field wrapped in a single-element array."""
    return json.dumps({k: [v] for k, v in fields.items()})


@pytest.fixture()
def db_engine() -> Generator:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def relational_store(db_engine) -> SqlRelationalStore:
    return SqlRelationalStore(db_engine)


@pytest.fixture()
def index_store(db_engine) -> SqlInvertedIndexStore:
    return SqlInvertedIndexStore(db_engine)


class DownStore(RelationalStore, InvertedIndexStore):
    """A store whose connections can never be obtained."""

    def __init__(self):
        self.connect_attempts = 0

    @contextmanager
    def connect(self):
        self.connect_attempts += 1
        raise StoreUnavailable("connection refused")
        yield  # pragma: no cover


@pytest.fixture()
def down_store() -> DownStore:
    return DownStore()


@pytest.fixture()
def ads_file(tmp_path):
    """Ads file in the bracketed one-object-per-line layout."""
    lines = [
        "[",
        ad_json(ad_id=7, campaign_id=1, title="Red Shoes", brand="Acme", price=25.5) + ",",
        ad_json(ad_id=8, campaign_id=1, title="Blue Running Shoes", bid_price=3.0) + ",",
        ad_json(ad_id=9, campaign_id=2, title="Red Hat"),
        "]",
    ]
    path = tmp_path / "ads.json"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
