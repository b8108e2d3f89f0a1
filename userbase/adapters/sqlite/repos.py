import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from userbase.domain.entities import User
from userbase.domain.errors import DuplicateEmailError, StorageError

SEARCHABLE_COLUMNS = ("name", "email", "telephone")


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLiteUserRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open database: {e}") from e
        try:
            yield conn
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def save(self, user: User) -> User:
        with self._connection() as conn:
            try:
                conn.execute(
                    """
                    INSERT INTO users (
                        id, name, email, telephone, password_hash, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        name=excluded.name,
                        email=excluded.email,
                        telephone=excluded.telephone,
                        password_hash=excluded.password_hash,
                        updated_at=excluded.updated_at
                """,
                    (
                        user.id,
                        user.name,
                        user.email,
                        user.telephone,
                        user.password_hash,
                        user.created_at.isoformat(),
                        user.updated_at.isoformat(),
                    ),
                )
            except sqlite3.IntegrityError as e:
                conn.rollback()
                if "users.email" in str(e):
                    raise DuplicateEmailError(user.email) from e
                raise
            conn.commit()
            return user

    def get_by_email(self, email: str) -> User | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
            return self._map_row_to_user(row) if row else None

    def get_by_id(self, user_id: str) -> User | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return self._map_row_to_user(row) if row else None

    def list_all(self) -> list[User]:
        with self._connection() as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY email").fetchall()
            return [self._map_row_to_user(row) for row in rows]

    def search(
        self, filters: dict[str, str], match_all: bool = False, case_insensitive: bool = True
    ) -> list[User]:
        """Substring search; ORs the filters unless match_all is set."""
        clauses = []
        params: list[str] = []
        for column, value in filters.items():
            if column not in SEARCHABLE_COLUMNS:
                raise ValueError(f"Unsupported search column: {column}")
            # instr() avoids LIKE wildcard escaping; LIKE would also ignore case on its own
            if case_insensitive:
                clauses.append(f"instr(lower({column}), lower(?)) > 0")
            else:
                clauses.append(f"instr({column}, ?) > 0")
            params.append(value)

        if not clauses:
            return self.list_all()

        joiner = " AND " if match_all else " OR "
        query = f"SELECT * FROM users WHERE {joiner.join(clauses)} ORDER BY email"
        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
            return [self._map_row_to_user(row) for row in rows]

    def delete(self, user_id: str) -> bool:
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _map_row_to_user(self, row: dict[str, Any]) -> User:
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            telephone=row["telephone"],
            password_hash=row["password_hash"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
