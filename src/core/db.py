"""SQLite database layer for jobs, applicant profiles and notifications."""

import sqlite3
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from src.core.schemas import Applicant, Job, Notification
from src.repository.predicates import AnyOf, Eq, In, Predicate

_JOBS_TABLE = """
CREATE TABLE IF NOT EXISTS jobs (
    id                        TEXT PRIMARY KEY,
    title                     TEXT NOT NULL DEFAULT '',
    location                  TEXT,
    job_type                  TEXT NOT NULL DEFAULT '',
    required_qualification    TEXT,
    required_institution_type TEXT DEFAULT 'any',
    required_specialization   TEXT,
    status                    TEXT NOT NULL DEFAULT 'active'
);
"""

_PROFILES_TABLE = """
CREATE TABLE IF NOT EXISTS profiles (
    id                TEXT PRIMARY KEY,
    role              TEXT NOT NULL,
    full_name         TEXT NOT NULL DEFAULT '',
    preferred_region  TEXT,
    is_verified       INTEGER NOT NULL DEFAULT 0,
    qualification     TEXT,
    institution_type  TEXT,
    specialization    TEXT,
    nss_status        TEXT
);
"""

_NOTIFICATIONS_TABLE = """
CREATE TABLE IF NOT EXISTS notifications (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id     TEXT    NOT NULL,
    type        TEXT    NOT NULL,
    title       TEXT    NOT NULL,
    message     TEXT    NOT NULL,
    link        TEXT,
    is_read     INTEGER NOT NULL DEFAULT 0,
    created_at  TEXT    NOT NULL
);
"""

JOB_COLUMNS = tuple(Job.model_fields)
PROFILE_COLUMNS = tuple(Applicant.model_fields)


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_JOBS_TABLE)
    conn.execute(_PROFILES_TABLE)
    conn.execute(_NOTIFICATIONS_TABLE)
    conn.commit()
    return conn


def _upsert(conn: sqlite3.Connection, table: str, columns: Sequence[str], row: dict[str, Any]) -> None:
    placeholders = ", ".join("?" for _ in columns)
    updates = ", ".join(f"{c} = excluded.{c}" for c in columns if c != "id")
    conn.execute(
        f"""
        INSERT INTO {table} ({", ".join(columns)})
        VALUES ({placeholders})
        ON CONFLICT(id) DO UPDATE SET {updates}
        """,
        tuple(row[c] for c in columns),
    )
    conn.commit()


def upsert_job(conn: sqlite3.Connection, job: Job) -> None:
    """Insert a job, replacing every field if the id already exists."""
    _upsert(conn, "jobs", JOB_COLUMNS, job.model_dump())


def upsert_applicant(conn: sqlite3.Connection, applicant: Applicant) -> None:
    """Insert an applicant profile, replacing it if the id already exists."""
    row = applicant.model_dump()
    row["is_verified"] = int(applicant.is_verified)
    _upsert(conn, "profiles", PROFILE_COLUMNS, row)


def get_job(conn: sqlite3.Connection, job_id: str) -> Job | None:
    row = conn.execute("SELECT * FROM jobs WHERE id = ?", (job_id,)).fetchone()
    return Job.model_validate(dict(row)) if row is not None else None


def get_applicant(conn: sqlite3.Connection, applicant_id: str) -> Applicant | None:
    row = conn.execute("SELECT * FROM profiles WHERE id = ?", (applicant_id,)).fetchone()
    return Applicant.model_validate(dict(row)) if row is not None else None


def select_jobs(conn: sqlite3.Connection, predicates: Sequence[Predicate]) -> list[Job]:
    """Return jobs matching every predicate, in insertion order."""
    where, params = build_where(predicates, JOB_COLUMNS)
    rows = conn.execute(f"SELECT * FROM jobs{where} ORDER BY rowid", params).fetchall()
    return [Job.model_validate(dict(r)) for r in rows]


def select_applicants(conn: sqlite3.Connection, predicates: Sequence[Predicate]) -> list[Applicant]:
    """Return applicant profiles matching every predicate, in insertion order."""
    where, params = build_where(predicates, PROFILE_COLUMNS)
    rows = conn.execute(f"SELECT * FROM profiles{where} ORDER BY rowid", params).fetchall()
    return [Applicant.model_validate(dict(r)) for r in rows]


def build_where(
    predicates: Sequence[Predicate],
    columns: Sequence[str],
) -> tuple[str, tuple[Any, ...]]:
    """Compile a predicate set into a parameterised WHERE clause.

    Returns ("", ()) for an empty set. Raises ValueError for a field that is
    not a column of the target table.
    """
    clauses: list[str] = []
    params: list[Any] = []
    for p in predicates:
        if p.field not in columns:
            msg = f"Unknown field '{p.field}' (expected one of {sorted(columns)})"
            raise ValueError(msg)
        if isinstance(p, Eq):
            if p.value is None:
                clauses.append(f"{p.field} IS NULL")
            else:
                clauses.append(f"{p.field} = ?")
                params.append(_sql_value(p.value))
        elif isinstance(p, In):
            if not p.values:
                clauses.append("0")
                continue
            clauses.append(f"{p.field} IN ({', '.join('?' for _ in p.values)})")
            params.extend(_sql_value(v) for v in p.values)
        elif isinstance(p, AnyOf):
            terms: list[str] = []
            for v in p.values:
                if v is None:
                    terms.append(f"{p.field} IS NULL")
                else:
                    terms.append(f"{p.field} = ?")
                    params.append(_sql_value(v))
            clauses.append(f"({' OR '.join(terms)})" if terms else "0")
        else:
            msg = f"Unsupported predicate: {p!r}"
            raise ValueError(msg)
    if not clauses:
        return "", ()
    return " WHERE " + " AND ".join(clauses), tuple(params)


def _sql_value(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    return value


def insert_notification(
    conn: sqlite3.Connection,
    user_id: str,
    notification: Notification,
    created_at: datetime | None = None,
) -> int:
    """Record an in-app notification. Returns the row ID."""
    cursor = conn.execute(
        """
        INSERT INTO notifications (user_id, type, title, message, link, created_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (
            user_id,
            notification.type,
            notification.title,
            notification.message,
            notification.link,
            (created_at or datetime.now()).isoformat(),
        ),
    )
    conn.commit()
    return cursor.lastrowid or 0
