from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError

from noticeingest.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyNoticeUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from noticeingest.domain.ingest_pipeline import PersistenceRejection
from noticeingest.domain.model import DMCA, Entity, EntityNoticeRole, RoleKind

if TYPE_CHECKING:
    from collections.abc import Callable

    UnitOfWorkFactory = Callable[[], SqlAlchemyNoticeUnitOfWork]


def test_commit_persists_notice(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    with sqlite_unit_of_work() as uow:
        notice = DMCA(title="First", original_notice_id="1")
        notice.add_role(Entity(name="Google, Inc."), RoleKind.RECIPIENT)
        uow.repositories.notices.add(notice)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.notices.exists_with_original_id("1")
        assert uow.repositories.entities.get_by_name("Google, Inc.") is not None


def test_leaving_without_commit_discards_the_graph(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.notices.add(DMCA(title="Discarded", original_notice_id="1"))

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.notices.count() == 0


def test_duplicate_original_id_is_rejected_at_commit(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.notices.add(DMCA(title="First", original_notice_id="1"))
        uow.commit()

    with sqlite_unit_of_work() as uow:
        uow.repositories.notices.add(DMCA(title="Again", original_notice_id="1"))
        with pytest.raises(PersistenceRejection, match="IntegrityError"):
            uow.commit()

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.notices.count() == 1


def test_duplicate_role_is_rejected_by_the_database(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    notice = DMCA(title="First", original_notice_id="1")
    notice.add_role(Entity(name="First Sender"), RoleKind.SENDER)
    # bypass the aggregate guard to reach the storage constraint
    EntityNoticeRole(role=RoleKind.SENDER, _entity=Entity(name="Second Sender"), _notice=notice)

    with sqlite_unit_of_work() as uow:
        uow.repositories.notices.add(notice)
        with pytest.raises(PersistenceRejection):
            uow.commit()


def test_integer_too_large_for_the_column_is_rejected_at_commit(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    with sqlite_unit_of_work() as uow:
        notice = DMCA(title="Huge", original_notice_id="1", submission_id=2**70)
        uow.repositories.notices.add(notice)
        with pytest.raises(PersistenceRejection, match="Database rejected the notice"):
            uow.commit()

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.notices.count() == 0


def test_query_failure_inside_the_block_becomes_a_rejection(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    with (
        pytest.raises(PersistenceRejection, match="OperationalError") as excinfo,
        sqlite_unit_of_work() as uow,
    ):
        uow.session.execute(text("SELECT id FROM no_such_table"))

    assert isinstance(excinfo.value.__cause__, OperationalError)


def test_other_errors_inside_the_block_propagate_unchanged(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    with pytest.raises(KeyError, match="boom"), sqlite_unit_of_work() as uow:
        uow.repositories.notices.add(DMCA(title="Lost", original_notice_id="1"))
        raise KeyError("boom")

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.notices.count() == 0


def test_repositories_require_an_entered_unit_of_work(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    uow = sqlite_unit_of_work()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_unit_of_work_requires_startup() -> None:
    shutdown()

    assert not is_started()
    with pytest.raises(StartupError, match="not initialised"):
        SqlAlchemyNoticeUnitOfWork()


def test_startup_refuses_to_reconfigure_without_force() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    startup(engine=engine, force=True)
    try:
        assert configured_engine() is engine
        with pytest.raises(StartupError, match="already initialised"):
            startup(engine=engine)
    finally:
        shutdown()
