"""Fixtures backed by a real SQLite file database."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from storefront.infrastructure.persistence.engine import create_store_engine
from storefront.infrastructure.persistence.sample_data import (
    create_schema,
    load_reference_data,
    load_sample_catalog,
)
from storefront.infrastructure.persistence.schema import variants
from storefront.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'store.db'}"


@pytest.fixture
def engine(database_url):
    engine = create_store_engine(database_url)
    create_schema(engine)
    with engine.begin() as conn:
        load_reference_data(conn)
    yield engine
    engine.dispose()


@pytest.fixture
def skus(engine) -> dict[str, int]:
    """Load the sample catalog; maps SKU -> variant id."""
    with engine.begin() as conn:
        load_sample_catalog(conn)
        return dict(conn.execute(select(variants.c.sku, variants.c.variant_id)).all())


@pytest.fixture
def uow_factory(engine):
    return lambda: SqlAlchemyUnitOfWork(engine)
