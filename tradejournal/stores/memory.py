"""In-memory record store.

Keeps records in dictionaries for the lifetime of the process. Used for
ephemeral sessions and as a lightweight store in tests.
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError

from tradejournal.errors import StoreFailure
from tradejournal.models import Account, TradeRecord, UserProfile
from tradejournal.stores.base import BaseRecordStore


class InMemoryRecordStore(BaseRecordStore):
    """Record store backed by process memory."""

    def __init__(self):
        self._profiles: dict[str, UserProfile] = {}
        self._trades: dict[str, TradeRecord] = {}
        self._accounts: dict[str, Account] = {}

    @staticmethod
    def _apply(model, updates: dict[str, Any], protected: set[str]):
        blocked = set(updates) & protected
        if blocked:
            raise StoreFailure(f"Cannot update columns: {', '.join(sorted(blocked))}")
        unknown = set(updates) - set(type(model).model_fields)
        if unknown:
            raise StoreFailure(f"Unknown columns: {', '.join(sorted(unknown))}")
        values = model.model_dump()
        values.update(updates)
        values["updated_at"] = datetime.now()
        try:
            return type(model)(**values)
        except ValidationError as e:
            raise StoreFailure(str(e)) from e

    # ==================== Profiles ====================

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        return self._profiles.get(user_id)

    def create_user_profile(self, profile: UserProfile) -> UserProfile:
        if profile.user_id in self._profiles:
            raise StoreFailure(f"Profile already exists for user {profile.user_id}")
        stored = profile.model_copy(update={"id": str(uuid.uuid4())})
        self._profiles[profile.user_id] = stored
        return stored

    def update_user_profile(self, user_id: str, updates: dict[str, Any]) -> UserProfile:
        profile = self._profiles.get(user_id)
        if profile is None:
            raise StoreFailure(f"No profile for user {user_id}")
        updated = self._apply(profile, updates, {"id", "user_id", "created_at"})
        self._profiles[user_id] = updated
        return updated

    # ==================== Trades ====================

    def list_trades(self, user_id: str) -> list[TradeRecord]:
        records = [r for r in self._trades.values() if r.user_id == user_id]
        return sorted(records, key=lambda r: (r.trade_date, r.created_at), reverse=True)

    def create_trade(self, record: TradeRecord) -> TradeRecord:
        now = datetime.now()
        stored = record.model_copy(
            update={"id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
        )
        self._trades[stored.id] = stored
        return stored

    def update_trade(self, trade_id: str, patch: dict[str, Any]) -> TradeRecord:
        record = self._trades.get(trade_id)
        if record is None:
            raise StoreFailure(f"No trade with id {trade_id}")
        updated = self._apply(record, patch, {"id", "user_id", "created_at"})
        self._trades[trade_id] = updated
        return updated

    def delete_trade(self, trade_id: str) -> bool:
        return self._trades.pop(trade_id, None) is not None

    # ==================== Accounts ====================

    def list_accounts(self, user_id: str) -> list[Account]:
        accounts = [a for a in self._accounts.values() if a.user_id == user_id]
        return sorted(accounts, key=lambda a: a.created_at)

    def create_account(self, account: Account) -> Account:
        stored = account.model_copy(update={"id": str(uuid.uuid4())})
        self._accounts[stored.id] = stored
        return stored

    def update_account(self, account_id: str, updates: dict[str, Any]) -> Account:
        account = self._accounts.get(account_id)
        if account is None:
            raise StoreFailure(f"No account with id {account_id}")
        updated = self._apply(account, updates, {"id", "user_id", "created_at"})
        self._accounts[account_id] = updated
        return updated

    def delete_account(self, account_id: str) -> bool:
        return self._accounts.pop(account_id, None) is not None
