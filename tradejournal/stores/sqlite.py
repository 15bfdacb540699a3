"""SQLite record store for tradejournal."""

import logging
import sqlite3
import uuid
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from tradejournal.errors import StoreFailure
from tradejournal.models import Account, TradeRecord, UserProfile
from tradejournal.stores.base import BaseRecordStore

logger = logging.getLogger(__name__)

TRADE_COLUMNS = [
    "id",
    "user_id",
    "account_id",
    "pair",
    "entry_price",
    "exit_price",
    "stop_loss",
    "take_profit",
    "position_size",
    "profit_usd",
    "profit_rr",
    "is_win",
    "entry_method",
    "account_balance_at_trade",
    "risk_percent",
    "trade_date",
    "created_at",
    "updated_at",
]

PROFILE_COLUMNS = [
    "id",
    "user_id",
    "email",
    "full_name",
    "account_balance",
    "default_risk_percent",
    "created_at",
    "updated_at",
]

ACCOUNT_COLUMNS = [
    "id",
    "user_id",
    "account_name",
    "balance",
    "created_at",
    "updated_at",
]

# Columns callers may change through update_* methods
PROFILE_UPDATABLE = {"email", "full_name", "account_balance", "default_risk_percent"}
ACCOUNT_UPDATABLE = {"account_name", "balance"}
TRADE_UPDATABLE = set(TRADE_COLUMNS) - {"id", "user_id", "created_at", "updated_at"}


def _to_db(value: Any) -> Any:
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class _Result:
    """Rows and affected row count of an executed statement."""

    def __init__(self, rows: list[sqlite3.Row], rowcount: int):
        self.rows = rows
        self.rowcount = rowcount


class SQLiteRecordStore(BaseRecordStore):
    """SQLite-based record store.

    Each operation opens its own connection, so a store instance can be
    shared freely within a process.
    """

    REQUIRED_TABLES = [
        "user_profiles",
        "accounts",
        "trades",
    ]

    def __init__(self, db_path: Path):
        """Initialize the record store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StoreFailure(f"Cannot open database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        return conn

    def _execute(self, sql: str, params: tuple = ()) -> _Result:
        """Run a single statement and commit it.

        The cursor's rows are fetched before the connection is closed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(sql, params)
            rows = cursor.fetchall()
            conn.commit()
            return _Result(rows, cursor.rowcount)
        except sqlite3.Error as e:
            logger.error("Database error: %s", e)
            raise StoreFailure(str(e)) from e
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # User profiles table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS user_profiles (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL UNIQUE,
                    email TEXT NOT NULL DEFAULT '',
                    full_name TEXT,
                    account_balance REAL NOT NULL,
                    default_risk_percent REAL NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            # Accounts table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS accounts (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    account_name TEXT NOT NULL,
                    balance REAL NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            # Trades table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    account_id TEXT,
                    pair TEXT NOT NULL,
                    entry_price REAL,
                    exit_price REAL,
                    stop_loss REAL,
                    take_profit REAL,
                    position_size REAL NOT NULL,
                    profit_usd REAL NOT NULL,
                    profit_rr REAL NOT NULL,
                    is_win INTEGER NOT NULL,
                    entry_method TEXT NOT NULL,
                    account_balance_at_trade REAL NOT NULL,
                    risk_percent REAL,
                    trade_date TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_trades_user ON trades (user_id, trade_date)"
            )

            conn.commit()
        except sqlite3.Error as e:
            raise StoreFailure(f"Cannot initialize database {self.db_path}: {e}") from e
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        rows = self._execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
        ).rows
        return [row["name"] for row in rows]

    def _insert(self, table: str, columns: list[str], values: dict[str, Any]) -> None:
        placeholders = ", ".join("?" for _ in columns)
        self._execute(
            f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
            tuple(_to_db(values[column]) for column in columns),
        )

    def _update(
        self,
        table: str,
        key_column: str,
        key: str,
        updates: dict[str, Any],
        allowed: set[str],
    ) -> int:
        unknown = set(updates) - allowed
        if unknown:
            raise StoreFailure(
                f"Cannot update {table} columns: {', '.join(sorted(unknown))}"
            )
        values = dict(updates)
        values["updated_at"] = datetime.now()
        assignments = ", ".join(f"{column} = ?" for column in values)
        return self._execute(
            f"UPDATE {table} SET {assignments} WHERE {key_column} = ?",
            tuple(_to_db(value) for value in values.values()) + (key,),
        ).rowcount

    # ==================== Profiles ====================

    def _row_to_profile(self, row: sqlite3.Row) -> UserProfile:
        return UserProfile(**{column: row[column] for column in PROFILE_COLUMNS})

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        rows = self._execute(
            f"SELECT {', '.join(PROFILE_COLUMNS)} FROM user_profiles WHERE user_id = ?",
            (user_id,),
        ).rows
        return self._row_to_profile(rows[0]) if rows else None

    def create_user_profile(self, profile: UserProfile) -> UserProfile:
        stored = profile.model_copy(update={"id": str(uuid.uuid4())})
        self._insert("user_profiles", PROFILE_COLUMNS, stored.model_dump())
        logger.info("Created profile for user %s", profile.user_id)
        return stored

    def update_user_profile(self, user_id: str, updates: dict[str, Any]) -> UserProfile:
        if not self._update("user_profiles", "user_id", user_id, updates, PROFILE_UPDATABLE):
            raise StoreFailure(f"No profile for user {user_id}")
        profile = self.get_user_profile(user_id)
        if profile is None:
            raise StoreFailure(f"No profile for user {user_id}")
        return profile

    # ==================== Trades ====================

    def _row_to_trade(self, row: sqlite3.Row) -> TradeRecord:
        values = {column: row[column] for column in TRADE_COLUMNS}
        values["is_win"] = bool(values["is_win"])
        try:
            return TradeRecord(**values)
        except ValidationError as e:
            raise StoreFailure(f"Corrupt trade record {values['id']}: {e}") from e

    def _get_trade(self, trade_id: str) -> Optional[TradeRecord]:
        rows = self._execute(
            f"SELECT {', '.join(TRADE_COLUMNS)} FROM trades WHERE id = ?",
            (trade_id,),
        ).rows
        return self._row_to_trade(rows[0]) if rows else None

    def list_trades(self, user_id: str) -> list[TradeRecord]:
        rows = self._execute(
            f"""
            SELECT {', '.join(TRADE_COLUMNS)}
            FROM trades
            WHERE user_id = ?
            ORDER BY trade_date DESC, created_at DESC
            """,
            (user_id,),
        ).rows
        return [self._row_to_trade(row) for row in rows]

    def create_trade(self, record: TradeRecord) -> TradeRecord:
        now = datetime.now()
        stored = record.model_copy(
            update={"id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
        )
        self._insert("trades", TRADE_COLUMNS, stored.model_dump())
        logger.info("Stored trade %s (%s)", stored.id, stored.pair)
        return stored

    def update_trade(self, trade_id: str, patch: dict[str, Any]) -> TradeRecord:
        if not self._update("trades", "id", trade_id, patch, TRADE_UPDATABLE):
            raise StoreFailure(f"No trade with id {trade_id}")
        record = self._get_trade(trade_id)
        if record is None:
            raise StoreFailure(f"No trade with id {trade_id}")
        return record

    def delete_trade(self, trade_id: str) -> bool:
        deleted = self._execute("DELETE FROM trades WHERE id = ?", (trade_id,)).rowcount
        return deleted > 0

    # ==================== Accounts ====================

    def _row_to_account(self, row: sqlite3.Row) -> Account:
        return Account(**{column: row[column] for column in ACCOUNT_COLUMNS})

    def list_accounts(self, user_id: str) -> list[Account]:
        rows = self._execute(
            f"""
            SELECT {', '.join(ACCOUNT_COLUMNS)}
            FROM accounts
            WHERE user_id = ?
            ORDER BY created_at ASC
            """,
            (user_id,),
        ).rows
        return [self._row_to_account(row) for row in rows]

    def create_account(self, account: Account) -> Account:
        stored = account.model_copy(update={"id": str(uuid.uuid4())})
        self._insert("accounts", ACCOUNT_COLUMNS, stored.model_dump())
        logger.info("Created account %s for user %s", stored.account_name, stored.user_id)
        return stored

    def update_account(self, account_id: str, updates: dict[str, Any]) -> Account:
        if not self._update("accounts", "id", account_id, updates, ACCOUNT_UPDATABLE):
            raise StoreFailure(f"No account with id {account_id}")
        rows = self._execute(
            f"SELECT {', '.join(ACCOUNT_COLUMNS)} FROM accounts WHERE id = ?",
            (account_id,),
        ).rows
        if not rows:
            raise StoreFailure(f"No account with id {account_id}")
        return self._row_to_account(rows[0])

    def delete_account(self, account_id: str) -> bool:
        deleted = self._execute("DELETE FROM accounts WHERE id = ?", (account_id,)).rowcount
        return deleted > 0

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        return {
            table: self._execute(f"SELECT COUNT(*) as count FROM {table}").rows[0]["count"]
            for table in self.get_tables()
        }
