"""Tests for the database layer: init, upserts, predicate queries, notifications."""

import sqlite3

import pytest

from src.core.db import (
    build_where,
    get_applicant,
    get_job,
    init_db,
    insert_notification,
    select_applicants,
    select_jobs,
    upsert_applicant,
    upsert_job,
)
from src.core.schemas import Applicant, Job, Notification
from src.repository.predicates import AnyOf, Eq, In


def _job(job_id: str = "job-1", **kw: object) -> Job:
    defaults: dict[str, object] = {"id": job_id, "title": "Farm hand", "location": "Ashanti"}
    defaults.update(kw)
    return Job(**defaults)  # type: ignore[arg-type]


def _applicant(applicant_id: str = "app-1", **kw: object) -> Applicant:
    defaults: dict[str, object] = {"id": applicant_id, "role": "graduate", "is_verified": True}
    defaults.update(kw)
    return Applicant(**defaults)  # type: ignore[arg-type]


@pytest.fixture()
def db(tmp_path):  # type: ignore[no-untyped-def]
    return init_db(tmp_path / "test.db")


class TestInitDb:
    def test_creates_tables(self, db) -> None:  # type: ignore[no-untyped-def]
        tables = {
            row[0]
            for row in db.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        }
        assert {"jobs", "profiles", "notifications"} <= tables

    def test_idempotent(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        p = tmp_path / "double.db"
        init_db(p).close()
        init_db(p).close()


class TestJobs:
    def test_roundtrip(self, db) -> None:  # type: ignore[no-untyped-def]
        job = _job(required_qualification="Diploma", required_specialization=None)
        upsert_job(db, job)
        assert get_job(db, "job-1") == job

    def test_missing(self, db) -> None:  # type: ignore[no-untyped-def]
        assert get_job(db, "nope") is None

    def test_upsert_replaces(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_job(db, _job(status="active"))
        upsert_job(db, _job(status="filled"))
        assert get_job(db, "job-1").status == "filled"  # type: ignore[union-attr]
        count = db.execute("SELECT COUNT(*) FROM jobs").fetchone()[0]
        assert count == 1


class TestApplicants:
    def test_roundtrip_bool(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_applicant(db, _applicant(is_verified=True))
        upsert_applicant(db, _applicant("app-2", is_verified=False))
        assert get_applicant(db, "app-1").is_verified is True  # type: ignore[union-attr]
        assert get_applicant(db, "app-2").is_verified is False  # type: ignore[union-attr]

    def test_missing(self, db) -> None:  # type: ignore[no-untyped-def]
        assert get_applicant(db, "nope") is None


class TestSelect:
    def test_no_predicates_returns_all_in_insert_order(self, db) -> None:  # type: ignore[no-untyped-def]
        for job_id in ("c", "a", "b"):
            upsert_job(db, _job(job_id))
        assert [j.id for j in select_jobs(db, [])] == ["c", "a", "b"]

    def test_eq_bool(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_applicant(db, _applicant("v", is_verified=True))
        upsert_applicant(db, _applicant("u", is_verified=False))
        result = select_applicants(db, [Eq(field="is_verified", value=True)])
        assert [a.id for a in result] == ["v"]

    def test_in(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_applicant(db, _applicant("g", role="graduate"))
        upsert_applicant(db, _applicant("f", role="farm"))
        upsert_applicant(db, _applicant("s", role="student"))
        result = select_applicants(db, [In(field="role", values=("graduate", "student"))])
        assert [a.id for a in result] == ["g", "s"]

    def test_any_of_with_null(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_job(db, _job("match", required_specialization="Poultry"))
        upsert_job(db, _job("open", required_specialization=None))
        upsert_job(db, _job("other", required_specialization="Fisheries"))
        result = select_jobs(
            db, [AnyOf(field="required_specialization", values=("Poultry", None))],
        )
        assert [j.id for j in result] == ["match", "open"]

    def test_predicates_combined_with_and(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_job(db, _job("1", location="Ashanti", status="active"))
        upsert_job(db, _job("2", location="Ashanti", status="filled"))
        upsert_job(db, _job("3", location="Volta", status="active"))
        result = select_jobs(
            db, [Eq(field="status", value="active"), Eq(field="location", value="Ashanti")],
        )
        assert [j.id for j in result] == ["1"]

    def test_empty_in_matches_nothing(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_applicant(db, _applicant())
        assert select_applicants(db, [In(field="role", values=())]) == []


class TestBuildWhere:
    def test_empty(self) -> None:
        assert build_where([], ("id",)) == ("", ())

    def test_eq_none_is_null(self) -> None:
        where, params = build_where([Eq(field="location", value=None)], ("location",))
        assert where == " WHERE location IS NULL"
        assert params == ()

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown field"):
            build_where([Eq(field="id; DROP TABLE jobs", value=1)], ("id",))


class TestInsertNotification:
    def test_insert_and_return_id(self, db: sqlite3.Connection) -> None:
        row_id = insert_notification(
            db,
            "app-1",
            Notification(title="New Job Match Found", message="hello", link="/jobs/1"),
        )
        assert row_id >= 1
        row = db.execute("SELECT * FROM notifications WHERE id = ?", (row_id,)).fetchone()
        assert row["user_id"] == "app-1"
        assert row["type"] == "match_found"
        assert row["link"] == "/jobs/1"
        assert row["is_read"] == 0
