from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from nihmsync.adapters.memory import InMemoryCatalogRepository, InMemoryUnitOfWork
from nihmsync.adapters.sqlalchemy.tables import create_all_tables
from nihmsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup
from nihmsync.config import LoaderConfig
from tests.helpers.catalog import NIHMS_REPOSITORY, seed_grant

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def loader_config() -> LoaderConfig:
    return LoaderConfig(repository_uri=NIHMS_REPOSITORY)


@pytest.fixture
def catalog() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def grant_ref(catalog: InMemoryCatalogRepository) -> str:
    return seed_grant(catalog)


@pytest.fixture
def memory_unit_of_work(
    catalog: InMemoryCatalogRepository,
) -> Callable[[], InMemoryUnitOfWork]:
    def factory() -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(catalog)

    return factory


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
