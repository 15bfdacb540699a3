"""Local identity provider.

Stores users in SQLite with bcrypt password hashes and keeps the active
session in a JSON file, so a sign in survives between CLI runs.
"""

import json
import logging
import re
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

import bcrypt

from tradejournal.auth.base import SIGNED_IN, SIGNED_OUT, BaseIdentityProvider
from tradejournal.errors import AuthFailure
from tradejournal.models import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
BCRYPT_ROUNDS = 12
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def hash_password(password: str) -> str:
    # bcrypt only reads the first 72 bytes
    pw = password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    pw = plain.encode("utf-8")[:72]
    return bcrypt.checkpw(pw, hashed.encode("utf-8"))


class LocalIdentityProvider(BaseIdentityProvider):
    """Identity provider backed by a local SQLite database."""

    def __init__(self, db_path: Path, session_path: Optional[Path] = None):
        """Initialize the provider.

        Args:
            db_path: Path to the SQLite database file holding users.
            session_path: Path of the session file. Defaults to
                ``session.json`` next to the database.
        """
        super().__init__()
        self.db_path = db_path
        self.session_path = session_path or db_path.parent / "session.json"
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        conn = self._get_connection()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    email TEXT NOT NULL UNIQUE,
                    full_name TEXT,
                    password_hash TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)
            conn.commit()
        except sqlite3.Error as e:
            raise AuthFailure(f"Cannot initialize user database: {e}") from e
        finally:
            conn.close()

    def _find_user(self, column: str, value: str) -> Optional[sqlite3.Row]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                f"SELECT id, email, full_name, password_hash FROM users WHERE {column} = ?",
                (value,),
            )
            return cursor.fetchone()
        except sqlite3.Error as e:
            logger.error("Error fetching user: %s", e)
            raise AuthFailure(str(e)) from e
        finally:
            conn.close()

    # ==================== Session ====================

    def _save_session(self, user: User) -> None:
        """Save the signed in user to the session file."""
        self.session_path.parent.mkdir(parents=True, exist_ok=True)
        session_data = {
            "user_id": user.id,
            "email": user.email,
            "full_name": user.full_name,
            "timestamp": datetime.now().isoformat(),
        }
        self.session_path.write_text(json.dumps(session_data))

    def _load_session(self) -> Optional[str]:
        """Load the user ID from the session file, if any."""
        if not self.session_path.exists():
            return None

        try:
            session_data = json.loads(self.session_path.read_text())
            return session_data.get("user_id")
        except (json.JSONDecodeError, AttributeError):
            return None

    def _clear_session(self) -> None:
        """Remove the session file."""
        if self.session_path.exists():
            self.session_path.unlink()

    # ==================== Provider API ====================

    def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> User:
        email = email.strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise AuthFailure("Invalid email address")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthFailure(
                f"Password should be at least {MIN_PASSWORD_LENGTH} characters"
            )

        user = User(id=str(uuid.uuid4()), email=email, full_name=full_name or None)

        conn = self._get_connection()
        try:
            conn.execute(
                """
                INSERT INTO users (id, email, full_name, password_hash, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    user.id,
                    user.email,
                    user.full_name,
                    hash_password(password),
                    datetime.now().isoformat(),
                ),
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            raise AuthFailure("User already registered") from e
        except sqlite3.Error as e:
            logger.error("Error creating user: %s", e)
            raise AuthFailure(str(e)) from e
        finally:
            conn.close()

        logger.info("Registered user %s", user.email)
        self._save_session(user)
        self._emit(SIGNED_IN, user)
        return user

    def sign_in(self, email: str, password: str) -> User:
        row = self._find_user("email", email.strip().lower())
        if row is None or not verify_password(password, row["password_hash"]):
            raise AuthFailure("Invalid login credentials")

        user = User(id=row["id"], email=row["email"], full_name=row["full_name"])
        self._save_session(user)
        logger.info("Signed in %s", user.email)
        self._emit(SIGNED_IN, user)
        return user

    def sign_out(self) -> None:
        self._clear_session()
        self._emit(SIGNED_OUT, None)

    def get_current_user(self) -> Optional[User]:
        user_id = self._load_session()
        if not user_id:
            return None
        row = self._find_user("id", user_id)
        if row is None:
            # Session points at a user that no longer exists
            self._clear_session()
            return None
        return User(id=row["id"], email=row["email"], full_name=row["full_name"])
