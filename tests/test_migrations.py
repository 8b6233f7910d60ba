"""Checks for the SQL migrations shipped with the service."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine, inspect, text

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def _statements(path: Path) -> list[str]:
    lines = [
        line
        for line in path.read_text(encoding="utf-8").splitlines()
        if not line.lstrip().startswith("--")
    ]
    return [chunk.strip() for chunk in "\n".join(lines).split(";") if chunk.strip()]


def test_review_reminder_migration_adds_claim_columns():
    engine = create_engine("sqlite://")
    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE bookings (id VARCHAR(36) PRIMARY KEY)"))
        connection.execute(text("INSERT INTO bookings (id) VALUES ('b1')"))
        for path in sorted(MIGRATIONS_DIR.glob("*.sql")):
            for statement in _statements(path):
                connection.execute(text(statement))

        stage = connection.execute(
            text("SELECT review_reminder_stage FROM bookings WHERE id = 'b1'")
        ).scalar_one()

    columns = {column["name"] for column in inspect(engine).get_columns("bookings")}
    assert {"review_reminder_stage", "review_reminder_delivered_at"} <= columns
    assert stage == 0
