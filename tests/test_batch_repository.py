"""
tests/test_batch_repository.py

BatchRepository against a scripted Session mock.

``session.execute`` answers in call order: batch insert, waste-type lookup,
location upsert, location lookup, record insert. Statements are built with
real SQLAlchemy constructs; nothing is sent to a database.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from app.domain.waste_batch import ImportedBatch
from app.repositories.batch_repository import BatchRepository

CREATED_AT = datetime(2023, 1, 1, 10, 0, tzinfo=timezone.utc)
ROWS = [
    {"date": "2023-01-01", "waste_type": "plastic", "location": "warsaw", "quantity": 100},
    {"date": "2023-01-02", "waste_type": "paper", "location": "krakow", "quantity": 200},
    {"date": "2023-01-03", "waste_type": "plastic", "location": "krakow", "quantity": 5},
]


def _batch_insert_result() -> MagicMock:
    result = MagicMock()
    result.one.return_value = SimpleNamespace(id=42, filename="waste.csv", created_at=CREATED_AT)
    return result


def _rows(**ids: int) -> list[SimpleNamespace]:
    return [SimpleNamespace(name=name, id=row_id) for name, row_id in ids.items()]


def _session(*results: object) -> MagicMock:
    session = MagicMock()
    session.execute.side_effect = list(results)
    return session


class TestImportBatchData:
    def test_commits_records_with_resolved_ids(self) -> None:
        session = _session(
            _batch_insert_result(),
            _rows(plastic=1, paper=2),
            None,
            _rows(krakow=11, warsaw=10),
            None,
        )

        imported = BatchRepository(session).import_batch_data(user_id="u1", filename="waste.csv", rows=ROWS)

        assert imported == ImportedBatch(batch_id=42, filename="waste.csv", record_count=3, created_at=CREATED_AT)
        payloads = session.execute.call_args_list[-1].args[1]
        assert payloads == [
            {"batch_id": 42, "date": date(2023, 1, 1), "waste_type_id": 1, "location_id": 10, "quantity": 100},
            {"batch_id": 42, "date": date(2023, 1, 2), "waste_type_id": 2, "location_id": 11, "quantity": 200},
            {"batch_id": 42, "date": date(2023, 1, 3), "waste_type_id": 1, "location_id": 11, "quantity": 5},
        ]
        session.commit.assert_called_once_with()
        session.rollback.assert_not_called()

    def test_location_upsert_targets_unique_name(self) -> None:
        session = _session(_batch_insert_result(), _rows(plastic=1, paper=2), None, _rows(krakow=11, warsaw=10), None)

        BatchRepository(session).import_batch_data(user_id="u1", filename="waste.csv", rows=ROWS)

        upsert = str(session.execute.call_args_list[2].args[0].compile(dialect=postgresql.dialect()))
        assert "INSERT INTO locations" in upsert
        assert "ON CONFLICT ON CONSTRAINT uq_locations_name DO NOTHING" in upsert

    def test_unknown_waste_type_rolls_back(self) -> None:
        session = _session(_batch_insert_result(), _rows(plastic=1))

        with pytest.raises(LookupError, match="^Unknown waste types: paper$"):
            BatchRepository(session).import_batch_data(user_id="u1", filename="waste.csv", rows=ROWS)

        session.rollback.assert_called_once_with()
        session.commit.assert_not_called()

    @pytest.mark.parametrize("failing_call", [0, 2, 4])
    def test_any_failing_statement_rolls_back_and_reraises(self, failing_call: int) -> None:
        results: list[object] = [
            _batch_insert_result(),
            _rows(plastic=1, paper=2),
            None,
            _rows(krakow=11, warsaw=10),
            None,
        ]
        error = IntegrityError("INSERT", {}, Exception("violates check constraint"))
        results[failing_call] = error
        session = _session(*results)

        with pytest.raises(IntegrityError) as exc_info:
            BatchRepository(session).import_batch_data(user_id="u1", filename="waste.csv", rows=ROWS)

        assert exc_info.value is error
        session.rollback.assert_called_once_with()
        session.commit.assert_not_called()

    def test_failing_commit_rolls_back(self) -> None:
        session = _session(_batch_insert_result(), _rows(plastic=1, paper=2), None, _rows(krakow=11, warsaw=10), None)
        session.commit.side_effect = IntegrityError("COMMIT", {}, Exception("deferred constraint"))

        with pytest.raises(IntegrityError):
            BatchRepository(session).import_batch_data(user_id="u1", filename="waste.csv", rows=ROWS)

        session.rollback.assert_called_once_with()


class TestSoftDelete:
    def test_matching_row_is_reported_and_committed(self) -> None:
        session = _session(SimpleNamespace(rowcount=1))

        assert BatchRepository(session).soft_delete(7, "u1") is True
        session.commit.assert_called_once_with()

    def test_no_matching_row_is_reported(self) -> None:
        session = _session(SimpleNamespace(rowcount=0))

        assert BatchRepository(session).soft_delete(7, "someone-else") is False

    def test_failure_rolls_back(self) -> None:
        session = _session(IntegrityError("UPDATE", {}, Exception("lock timeout")))

        with pytest.raises(IntegrityError):
            BatchRepository(session).soft_delete(7, "u1")

        session.rollback.assert_called_once_with()
        session.commit.assert_not_called()


class TestListActive:
    def test_rows_become_summaries(self) -> None:
        row = SimpleNamespace(id=3, filename="march.csv", status="active", created_at=CREATED_AT, record_count=None)
        session = _session([row])

        summaries = BatchRepository(session).list_active("u1", offset=0, limit=10)

        assert len(summaries) == 1
        assert summaries[0].id == 3
        assert summaries[0].record_count == 0
