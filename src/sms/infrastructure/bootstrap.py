"""Composition root: builds the SQLite-backed units of work and the coordinator.

Nothing here is global: the caller builds one ``Application`` at start-up
and closes it at exit.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial

from sms.application.sale_coordinator import SaleCoordinator
from sms.domain.repository.unit_of_work import UnitOfWorkFactory
from sms.infrastructure.config import Settings
from sms.infrastructure.persistence.database import Database
from sms.infrastructure.persistence.sqlite_unit_of_work import SqliteUnitOfWork


def open_database(settings: Settings) -> Database:
    settings.database_path.parent.mkdir(parents=True, exist_ok=True)
    return Database(settings.database_path, timeout=settings.database_timeout)


def unit_of_work_factory(database: Database) -> UnitOfWorkFactory:
    return partial(SqliteUnitOfWork, database)


@dataclass
class Application:
    settings: Settings
    database: Database

    @staticmethod
    def start(settings: Settings) -> Application:
        return Application(settings=settings, database=open_database(settings))

    @property
    def uow_factory(self) -> UnitOfWorkFactory:
        return unit_of_work_factory(self.database)

    def sale_coordinator(self) -> SaleCoordinator:
        return SaleCoordinator(
            self.uow_factory, retention_days=self.settings.retention_days
        )

    def close(self) -> None:
        self.database.close()
