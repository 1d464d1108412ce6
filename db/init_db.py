"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Birthdays table: one row per member, keyed by their chat identity.
-- The primary key is what keeps two concurrent inserts for the same
-- member from both succeeding.
CREATE TABLE IF NOT EXISTS birthdays (
    user_id         TEXT PRIMARY KEY,
    birth_day       SMALLINT NOT NULL CHECK (birth_day BETWEEN 1 AND 31),
    birth_month     SMALLINT NOT NULL CHECK (birth_month BETWEEN 1 AND 12),
    name            TEXT NOT NULL,
    created_at      TIMESTAMPTZ DEFAULT NOW(),
    updated_at      TIMESTAMPTZ DEFAULT NOW()
);
"""


def create_tables(db: Database) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    try:
        with db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from config import DATABASE_URL

    database = Database(DATABASE_URL)
    database.open()
    try:
        create_tables(database)
    finally:
        database.close()
    print("Database schema created successfully.")
